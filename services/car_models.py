# services/car_models.py
# Model names from API Ninjas /cars (https://api-ninjas.com/api/cars).
import asyncio
import logging
from typing import Any, List

import aiohttp

from services.errors import UpstreamError

log = logging.getLogger(__name__)

DEFAULT_MODEL = "Tesla"
GENERIC_ERROR = "Error fetching car models"


def model_names(payload: Any) -> List[str]:
    if not isinstance(payload, list):
        raise UpstreamError(GENERIC_ERROR)
    out: List[str] = []
    for row in payload:
        v = row.get("model") if isinstance(row, dict) else None
        if isinstance(v, str) and v.strip():
            out.append(v.strip())
    return out


class CarModelsClient:
    def __init__(self, api_key: str, base_url: str = "https://api.api-ninjas.com/v1", timeout_sec: float = 15.0):
        self.api_key = (api_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_sec)

    async def fetch_raw(self, model: str) -> Any:
        if not self.api_key:
            log.error("API_NINJAS_KEY is missing; cannot fetch car models")
            raise UpstreamError(GENERIC_ERROR)
        url = f"{self.base_url}/cars"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as s:
                async with s.get(url, params={"model": model}, headers={"X-Api-Key": self.api_key}) as r:
                    if r.status >= 400:
                        log.warning("API Ninjas GET %s -> HTTP %s :: %s", url, r.status, (await r.text())[:200])
                        raise UpstreamError(GENERIC_ERROR)
                    return await r.json(content_type=None)
        except UpstreamError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            log.warning("API Ninjas GET %s failed: %r", url, e)
            raise UpstreamError(GENERIC_ERROR) from e

    async def models(self, model: str = DEFAULT_MODEL) -> List[str]:
        return model_names(await self.fetch_raw((model or "").strip() or DEFAULT_MODEL))
