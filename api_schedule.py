# api_schedule.py
# Test-drive intake. Demo store only: GET dumps everything, unauthenticated.
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app_state import get_bookings
from services.bookings import BookingStore
from services.errors import MalformedRequestError

schedule_router = APIRouter()


@schedule_router.post("/api/schedule")
async def schedule_test_drive(request: Request, store: BookingStore = Depends(get_bookings)) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise MalformedRequestError("Invalid JSON payload")
    booking = store.submit(body)
    return {"success": True, "booking": booking.to_public()}


@schedule_router.get("/api/schedule")
def list_test_drives(store: BookingStore = Depends(get_bookings)) -> Dict[str, Any]:
    return {"bookings": [b.to_public() for b in store.list()]}
