# api_catalog.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from app_state import get_car_models, get_settings
from services.car_models import DEFAULT_MODEL, CarModelsClient
from services.catalog import get_cars
from services.config import Settings

catalog_router = APIRouter()


@catalog_router.get("/api/cars")
async def list_cars(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return {"cars": await get_cars(settings.catalog_path)}


@catalog_router.get("/api/car-models")
async def list_car_models(
    model: Optional[str] = Query(default=DEFAULT_MODEL),
    client: CarModelsClient = Depends(get_car_models),
) -> Dict[str, Any]:
    return {"models": await client.models(model or DEFAULT_MODEL)}
