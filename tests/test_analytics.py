import json

from services.analytics import booking_event, hash_contact, log_event
from services.bookings import BookingStore


def test_hash_contact_is_stable_and_case_insensitive():
    assert hash_contact(" Priya@Example.com ") == hash_contact("priya@example.com")
    assert len(hash_contact("priya@example.com")) == 16
    assert hash_contact("") is None


def test_booking_event_written_without_raw_contact(tmp_path):
    booking = BookingStore().submit({
        "name": "Priya", "email": "priya@example.com", "phone": "9876543210",
        "model": "Honda CR-V", "location": "Pune", "date": "2026-11-02", "time": "11:00",
    })
    path = tmp_path / "events.jsonl"
    assert log_event(booking_event(booking), path=str(path), enabled=True)

    line = json.loads(path.read_text(encoding="utf-8").strip())
    assert line["type"] == "booking_submitted"
    assert line["booking_id"] == booking.id
    assert "priya@example.com" not in json.dumps(line)
    assert line["ts_iso"].endswith("Z")


def test_disabled_analytics_writes_nothing(tmp_path):
    path = tmp_path / "events.jsonl"
    assert log_event({"type": "x"}, path=str(path), enabled=False) is False
    assert not path.exists()
