# app_state.py
# Stores and clients shared by the routers. Built once per app in main.py
# and reached through the Depends() getters below, so tests can swap them.
from dataclasses import dataclass

from fastapi import Request

from services.analytics import log_booking
from services.bookings import BookingStore
from services.car_models import CarModelsClient
from services.config import Settings
from services.countriesnow_client import CountriesNowClient
from services.locations import LocationDirectory
from services.ttl_cache import TTLCache


@dataclass
class AppState:
    settings: Settings
    locations: LocationDirectory
    bookings: BookingStore
    car_models: CarModelsClient


def build_state(settings: Settings) -> AppState:
    upstream = CountriesNowClient(settings.locations_api_base, timeout_sec=settings.upstream_timeout_seconds)
    return AppState(
        settings=settings,
        locations=LocationDirectory(upstream, TTLCache(settings.locations_cache_ttl_seconds)),
        bookings=BookingStore(on_created=log_booking),
        car_models=CarModelsClient(
            settings.api_ninjas_key,
            base_url=settings.api_ninjas_base,
            timeout_sec=settings.upstream_timeout_seconds,
        ),
    )


def _state(request: Request) -> AppState:
    return request.app.state.services


def get_settings(request: Request) -> Settings:
    return _state(request).settings

def get_locations(request: Request) -> LocationDirectory:
    return _state(request).locations

def get_bookings(request: Request) -> BookingStore:
    return _state(request).bookings

def get_car_models(request: Request) -> CarModelsClient:
    return _state(request).car_models
