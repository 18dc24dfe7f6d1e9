import re

import pytest

from services.bookings import REQUIRED_FIELDS, BookingStore, new_booking_id
from services.errors import ValidationError


def valid_request(**overrides):
    req = {
        "name": "  Priya Nair ",
        "email": " priya@example.com ",
        "phone": "+91 98765-43210",
        "model": "Toyota Camry",
        "location": "Panaji, Goa, India",
        "date": "2026-11-02",
        "time": "10:30 ",
    }
    req.update(overrides)
    return req


def test_submit_trims_fields_and_appends():
    store = BookingStore(clock=lambda: 1_760_000_000.0)
    store.submit(valid_request(name="First"))
    before = len(store.list())

    booking = store.submit(valid_request())

    assert booking.name == "Priya Nair"
    assert booking.email == "priya@example.com"
    assert booking.time == "10:30"
    assert booking.created_at == "2025-10-09T08:53:20Z"
    bookings = store.list()
    assert len(bookings) == before + 1
    assert bookings[-1] == booking


def test_public_shape_uses_created_at_camel_case():
    booking = BookingStore().submit(valid_request())
    public = booking.to_public()
    assert set(public) == set(REQUIRED_FIELDS) | {"id", "createdAt"}


@pytest.mark.parametrize("field", REQUIRED_FIELDS)
def test_missing_field_is_rejected_and_nothing_stored(field):
    store = BookingStore()
    req = valid_request()
    del req[field]
    with pytest.raises(ValidationError, match=field):
        store.submit(req)
    assert store.list() == []


@pytest.mark.parametrize("value", ["", "   ", None, 5, ["x"]])
def test_blank_or_non_string_field_is_rejected(value):
    with pytest.raises(ValidationError, match="model"):
        BookingStore().submit(valid_request(model=value))


def test_first_bad_field_is_reported():
    req = valid_request()
    del req["phone"]
    del req["date"]
    with pytest.raises(ValidationError, match="phone"):
        BookingStore().submit(req)


def test_bad_email():
    with pytest.raises(ValidationError, match="(?i)email"):
        BookingStore().submit(valid_request(email="not-an-email"))


def test_short_phone():
    with pytest.raises(ValidationError, match="(?i)phone"):
        BookingStore().submit(valid_request(phone="123"))


def test_email_checked_before_phone():
    with pytest.raises(ValidationError, match="(?i)email"):
        BookingStore().submit(valid_request(email="a@b", phone="12"))


def test_phone_counts_digits_only():
    booking = BookingStore().submit(valid_request(phone="(555) 12-34"))
    assert booking.phone == "(555) 12-34"


def test_non_object_payload_is_a_validation_error():
    with pytest.raises(ValidationError, match="name"):
        BookingStore().submit(["name", "email"])


def test_booking_id_shape():
    assert re.match(r"^1760000000500-[0-9a-f]{6}$", new_booking_id(1_760_000_000.5))


def test_ids_differ_within_the_same_instant():
    store = BookingStore(clock=lambda: 1_760_000_000.0)
    ids = {store.submit(valid_request()).id for _ in range(20)}
    assert len(ids) == 20


def test_hook_failure_does_not_lose_booking():
    def boom(_booking):
        raise RuntimeError("disk full")

    store = BookingStore(on_created=boom)
    store.submit(valid_request())
    assert len(store) == 1


def test_phone_counts_ascii_digits_only():
    with pytest.raises(ValidationError, match="(?i)phone"):
        BookingStore().submit(valid_request(phone="١٢٣٤٥٦٧٨"))
