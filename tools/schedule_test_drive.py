#!/usr/bin/env python3
import json
import argparse

import requests

API_BASE = "http://127.0.0.1:8000"

def get_json(base, path, params=None):
    r = requests.get(f"{base}{path}", params=params, timeout=30)
    data = r.json()
    if r.status_code >= 400:
        raise SystemExit(f"{path} failed ({r.status_code}): {data.get('error')}")
    return data

def pick(options, wanted, label):
    """Use the requested value if the server knows it, else the first option."""
    if not options:
        raise SystemExit(f"No {label} available")
    if wanted:
        if wanted not in options:
            raise SystemExit(f"Unknown {label}: {wanted!r}")
        return wanted
    return options[0]

def build_payload(args, location):
    return {
        "name": args.name,
        "email": args.email,
        "phone": args.phone,
        "model": args.model,
        "location": location,
        "date": args.date,
        "time": args.time,
    }

def main():
    parser = argparse.ArgumentParser(description="Walk /api/locations and submit a test drive to /api/schedule.")
    parser.add_argument("--base", default=API_BASE)
    parser.add_argument("--country", default=None, help='e.g. "India"; first country if omitted')
    parser.add_argument("--state", default=None)
    parser.add_argument("--city", default=None)
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--phone", required=True)
    parser.add_argument("--model", default=None, help="catalog model; first car in /api/cars if omitted")
    parser.add_argument("--date", required=True, help="YYYY-MM-DD")
    parser.add_argument("--time", required=True, help="HH:MM")
    parser.add_argument("--list", action="store_true", help="print all bookings afterwards")
    args = parser.parse_args()

    if not args.model:
        cars = get_json(args.base, "/api/cars").get("cars", [])
        args.model = pick([f"{c.get('brand')} {c.get('model')}" for c in cars], None, "models")

    country = pick(get_json(args.base, "/api/locations", {"level": "countries"})["countries"], args.country, "country")
    state = pick(get_json(args.base, "/api/locations", {"level": "states", "country": country})["states"], args.state, "state")
    cities = get_json(args.base, "/api/locations", {"level": "cities", "country": country, "state": state})["cities"]
    # Small states often have no city list upstream; fall back to the state itself
    city = pick(cities, args.city, "city") if cities or args.city else state

    payload = build_payload(args, f"{city}, {state}, {country}")
    r = requests.post(f"{args.base}/api/schedule", json=payload, timeout=30)
    data = r.json()
    if r.status_code >= 400:
        raise SystemExit(f"Booking rejected: {data.get('error')}")
    print(f"✅ Booked test drive {data['booking']['id']}")
    print(json.dumps(data["booking"], indent=2))

    if args.list:
        print(json.dumps(get_json(args.base, "/api/schedule"), indent=2))

if __name__ == "__main__":
    main()
