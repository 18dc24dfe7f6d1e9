# services/countriesnow_client.py
# Thin async client for the countriesnow.space geographic directory.
import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from services.errors import UpstreamError

log = logging.getLogger(__name__)

DEFAULT_BASE = "https://countriesnow.space/api/v0.1"


class CountriesNowClient:
    """
    Raw JSON access to the three directory operations we use.
    Any transport problem, non-2xx status or undecodable body becomes UpstreamError.
    """

    def __init__(self, base_url: str = DEFAULT_BASE, timeout_sec: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_sec)

    async def countries(self) -> Any:
        return await self._request("GET", "/countries/positions", what="countries")

    async def states(self, country: str) -> Any:
        return await self._request("POST", "/countries/states", {"country": country}, what="states")

    async def cities(self, country: str, state: str) -> Any:
        return await self._request(
            "POST", "/countries/state/cities", {"country": country, "state": state}, what="cities"
        )

    async def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None, *, what: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(method, url, json=body, headers={"Accept": "application/json"}) as resp:
                    raw = await resp.read()
                    text = raw.decode("utf-8", errors="replace")
                    if resp.status < 200 or resp.status >= 300:
                        log.warning("countriesnow %s %s -> HTTP %s :: %s", method, path, resp.status, text[:200])
                        raise UpstreamError(f"Failed to fetch {what}: {resp.status}")
                    try:
                        # countriesnow answers 200 with text/html on some errors; ignore content type
                        return json.loads(raw.decode("utf-8"))
                    except ValueError as e:
                        log.warning("countriesnow %s %s -> bad JSON: %s :: %s", method, path, e, text[:200])
                        raise UpstreamError(f"Failed to fetch {what}: invalid response") from e
        except UpstreamError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.warning("countriesnow %s %s failed: %r", method, path, e)
            raise UpstreamError(f"Failed to fetch {what}: upstream unavailable") from e
