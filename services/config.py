# services/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv

# Load .env for local dev; in production rely on host envs
load_dotenv(find_dotenv(usecwd=True))

APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _clean_base(raw: Optional[str], default: str) -> str:
    raw = (raw or "").strip().rstrip("/")
    return raw or default


def _split_csv(raw: Optional[str]) -> List[str]:
    items = [x.strip() for x in (raw or "").split(",")]
    return [x for x in items if x] or ["*"]


def _resolve(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(APP_DIR, path)


@dataclass
class Settings:
    """Runtime settings read from the environment at construction time."""

    locations_api_base: str = field(default_factory=lambda: _clean_base(
        os.getenv("LOCATIONS_API_BASE"), "https://countriesnow.space/api/v0.1"))
    locations_cache_ttl_seconds: float = field(default_factory=lambda: float(
        os.getenv("LOCATIONS_CACHE_TTL_SECONDS", str(24 * 60 * 60))))
    upstream_timeout_seconds: float = field(default_factory=lambda: float(
        os.getenv("UPSTREAM_TIMEOUT_SECONDS", "15")))

    api_ninjas_key: str = field(default_factory=lambda: (os.getenv("API_NINJAS_KEY") or "").strip())
    api_ninjas_base: str = field(default_factory=lambda: _clean_base(
        os.getenv("API_NINJAS_BASE"), "https://api.api-ninjas.com/v1"))

    catalog_path: str = field(default_factory=lambda: _resolve(
        os.getenv("CATALOG_PATH", os.path.join("data", "cars.json"))))
    cors_origins: List[str] = field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


def get_settings() -> Settings:
    return Settings()
