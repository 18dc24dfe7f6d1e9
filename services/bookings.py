# services/bookings.py
import logging
import re
import secrets
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.errors import ValidationError

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "model", "location", "date", "time")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
MIN_PHONE_DIGITS = 7


class Booking(BaseModel):
    """One test-drive request. Never mutated after creation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    email: str
    phone: str
    model: str
    location: str
    date: str
    time: str
    created_at: str = Field(alias="createdAt")

    def to_public(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


def new_booking_id(now: Optional[float] = None) -> str:
    """'<epoch-millis>-<6 hex chars>'; unique enough for a demo store, not guaranteed."""
    ms = int((time.time() if now is None else now) * 1000)
    return f"{ms}-{secrets.token_hex(3)}"


def validate_fields(payload: Any) -> Dict[str, str]:
    """
    Checks run in a fixed order: required fields (first bad one wins),
    then email shape, then phone digit count. Returns trimmed values.
    """
    body = payload if isinstance(payload, dict) else {}
    out: Dict[str, str] = {}
    for field in REQUIRED_FIELDS:
        v = body.get(field)
        if not isinstance(v, str) or not v.strip():
            raise ValidationError(f"Missing or invalid field: {field}")
        out[field] = v.strip()

    if not _EMAIL_RE.match(out["email"]):
        raise ValidationError("Invalid email")
    if len(_NON_DIGIT_RE.sub("", out["phone"])) < MIN_PHONE_DIGITS:
        raise ValidationError("Invalid phone number")
    return out


class BookingStore:
    """In-memory, insertion-ordered list of bookings; gone on restart."""

    def __init__(self, clock: Callable[[], float] = time.time,
                 on_created: Optional[Callable[[Booking], None]] = None):
        self._clock = clock
        self._on_created = on_created
        self._bookings: List[Booking] = []
        self._lock = threading.Lock()

    def submit(self, payload: Any) -> Booking:
        fields = validate_fields(payload)
        now = self._clock()
        booking = Booking(
            id=new_booking_id(now),
            created_at=datetime.fromtimestamp(now, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            **fields,
        )
        with self._lock:
            self._bookings.append(booking)
        log.info("Booking %s recorded for model %s", booking.id, booking.model)

        if self._on_created is not None:
            try:
                self._on_created(booking)
            except Exception:
                log.exception("Post-booking hook failed for %s", booking.id)
        return booking

    def list(self) -> List[Booking]:
        with self._lock:
            return list(self._bookings)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)
