# main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from api_locations import locations_router
from api_schedule import schedule_router
from api_catalog import catalog_router

from app_state import build_state
from services.config import Settings, get_settings
from services.errors import ServiceError
from services.logging_config import setup_logging

log = logging.getLogger("dealership")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("%s %s crashed", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal error"}, status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Dealership Site API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Cache, booking list and upstream clients live as long as this app
    app.state.services = build_state(settings)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(locations_router)   # /api/locations
    app.include_router(schedule_router)    # /api/schedule (POST submit, GET dump)
    app.include_router(catalog_router)     # /api/cars, /api/car-models

    @app.get("/", include_in_schema=False)
    def index():
        return {"ok": True, "msg": "Dealership site API; see /docs"}

    @app.get("/health")
    def health():
        return {
            "ok": True,
            "service": "dealership",
            "routes": ["/api/locations", "/api/schedule", "/api/cars", "/api/car-models"],
        }

    return app


app = create_app()
