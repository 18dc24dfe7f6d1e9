# services/catalog.py
# Read-only access to the vehicle catalog document (data/cars.json).
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import anyio

from services.errors import CatalogError

log = logging.getLogger(__name__)


def _rows(raw: Any) -> List[Dict[str, Any]]:
    # Accept both a bare array and {"cars": [...]}
    if isinstance(raw, dict):
        raw = raw.get("cars")
    if not isinstance(raw, list):
        raise CatalogError("Unexpected catalog format")
    return [r for r in raw if isinstance(r, dict)]


@lru_cache(maxsize=4)
def _load(path: str, mtime_ns: int) -> Tuple[Dict[str, Any], ...]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return tuple(_rows(raw))


def load_cars(path: str) -> List[Dict[str, Any]]:
    """
    Returns the catalog records. Re-reads the file only when its mtime changes.
    """
    p = Path(path)
    try:
        mtime_ns = p.stat().st_mtime_ns
        cars = _load(str(p), mtime_ns)
    except FileNotFoundError as e:
        log.error("Catalog file not found: %s", p)
        raise CatalogError("Catalog unavailable") from e
    except (OSError, ValueError) as e:
        log.error("Catalog file unreadable: %s (%s)", p, e)
        raise CatalogError("Catalog unavailable") from e
    return [dict(c) for c in cars]


async def get_cars(path: str) -> List[Dict[str, Any]]:
    return await anyio.to_thread.run_sync(load_cars, path)
