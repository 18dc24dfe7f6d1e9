# services/analytics.py
# Append-only JSONL log of lead events. Off unless ANALYTICS_ENABLE=1.
import os, json, hashlib, threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from services.bookings import Booking

_LOCK = threading.Lock()

ANALYTICS_ENABLE = os.getenv("ANALYTICS_ENABLE", "0") == "1"
ANALYTICS_PATH = os.getenv("ANALYTICS_PATH", os.path.join(os.path.dirname(os.path.dirname(__file__)), "data", "events.jsonl"))

def _ensure_dir(path: str):
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def hash_contact(value: Optional[str]) -> Optional[str]:
    """Stable anonymous id for an email/phone; case and surrounding space ignored."""
    if not value:
        return None
    return hashlib.sha256(value.strip().lower().encode("utf-8")).hexdigest()[:16]

def booking_event(booking: Booking) -> Dict[str, Any]:
    return {
        "type": "booking_submitted",
        "booking_id": booking.id,
        "contact": hash_contact(booking.email),
        "model": booking.model,
        "location": booking.location,
        "date": booking.date,
    }

def log_event(event: Dict[str, Any], path: Optional[str] = None, enabled: Optional[bool] = None) -> bool:
    """
    Append a single JSON event to the analytics file if enabled.
    Returns True when a line was written.
    """
    if not (ANALYTICS_ENABLE if enabled is None else enabled):
        return False
    path = path or ANALYTICS_PATH
    _ensure_dir(path)
    event = dict(event)
    event["ts_iso"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    line = json.dumps(event, separators=(",", ":"), ensure_ascii=False)
    with _LOCK:
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    return True

def log_booking(booking: Booking) -> None:
    log_event(booking_event(booking))
