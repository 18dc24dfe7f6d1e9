# api_locations.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from app_state import get_locations
from services.locations import LocationDirectory

locations_router = APIRouter()


@locations_router.get("/api/locations")
async def get_location_options(
    level: Optional[str] = Query(default="countries"),
    country: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    directory: LocationDirectory = Depends(get_locations),
) -> Dict[str, Any]:
    """
    level=countries -> {countries}
    level=states&country=X -> {country, states}
    level=cities&country=X&state=Y -> {country, state, cities}
    Bad input is a 400 and upstream trouble a 500, both as {error}.
    """
    return await directory.lookup(level, country=country, state=state)
