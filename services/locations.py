# services/locations.py
"""
Country -> state -> city lookups backed by the countriesnow directory.

Raw upstream JSON is validated into small envelopes first (a shape mismatch
fails closed with UpstreamError), then names are extracted, trimmed and
collated. Results are kept in a TTLCache keyed by level and parameters.
"""
import locale
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from services.errors import UpstreamError, ValidationError
from services.ttl_cache import TTLCache

log = logging.getLogger(__name__)

LEVELS = ("countries", "states", "cities")


# -----------------------------
# Upstream envelopes
# -----------------------------
class CountriesEnvelope(BaseModel):
    data: List[Any]


class StatesData(BaseModel):
    name: Optional[str] = None
    states: List[Any]


class StatesEnvelope(BaseModel):
    data: StatesData


class CitiesEnvelope(BaseModel):
    data: List[Any]


def _parse(model: Type[BaseModel], payload: Any, what: str) -> BaseModel:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        log.warning("Unexpected %s payload from upstream: %s", what, e)
        raise UpstreamError(f"Failed to fetch {what}: unexpected response") from e


def _name_field(row: Any) -> Any:
    if isinstance(row, dict):
        return row.get("name")
    return None


# -----------------------------
# Normalization
# -----------------------------
def normalize_names(values: Iterable[Any]) -> List[str]:
    """
    Keep only non-empty strings, trimmed, in collation order.
    Case is preserved and duplicates are not collapsed. Names carrying a NUL
    character are dropped; strxfrm cannot collate them.
    """
    names = [v.strip() for v in values if isinstance(v, str) and "\x00" not in v]
    return sorted((n for n in names if n), key=locale.strxfrm)


def parse_countries(payload: Any) -> List[str]:
    env = _parse(CountriesEnvelope, payload, "countries")
    return normalize_names(_name_field(row) for row in env.data)


def parse_states(payload: Any) -> List[str]:
    env = _parse(StatesEnvelope, payload, "states")
    return normalize_names(_name_field(row) for row in env.data.states)


def parse_cities(payload: Any) -> List[str]:
    env = _parse(CitiesEnvelope, payload, "cities")
    return normalize_names(env.data)


# -----------------------------
# Service
# -----------------------------
class LocationDirectory:
    """
    `upstream` is anything exposing async countries() / states(country) /
    cities(country, state) that return raw JSON (see CountriesNowClient).
    """

    def __init__(self, upstream: Any, cache: TTLCache):
        self.upstream = upstream
        self.cache = cache

    async def lookup(
        self,
        level: Optional[str] = "countries",
        country: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Dict[str, Any]:
        lvl = (level or "countries").strip().lower()
        if lvl == "countries":
            return {"countries": await self.countries()}
        if lvl == "states":
            country = _required(country, "country")
            return {"country": country, "states": await self.states(country)}
        if lvl == "cities":
            country = _required(country, "country")
            state = _required(state, "state")
            return {"country": country, "state": state, "cities": await self.cities(country, state)}
        raise ValidationError("Invalid level")

    async def countries(self) -> List[str]:
        return await self._cached("countries", self.upstream.countries, parse_countries)

    # states()/cities() expect parameters already checked by lookup()
    async def states(self, country: str) -> List[str]:
        return await self._cached(
            f"states:{country}", lambda: self.upstream.states(country), parse_states
        )

    async def cities(self, country: str, state: str) -> List[str]:
        return await self._cached(
            f"cities:{country}:{state}", lambda: self.upstream.cities(country, state), parse_cities
        )

    async def _cached(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        parse: Callable[[Any], List[str]],
    ) -> List[str]:
        hit = self.cache.get(key)
        if hit is not None:
            log.debug("location cache hit: %s", key)
            return list(hit)

        log.debug("location cache miss: %s", key)
        names = parse(await fetch())
        self.cache.set(key, names)
        return list(names)


def _required(value: Optional[str], field: str) -> str:
    value = value.strip() if isinstance(value, str) else ""
    if not value:
        raise ValidationError(f"{field} is required")
    return value
