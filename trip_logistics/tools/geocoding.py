from typing import Any, Dict, List, Optional, Sequence, Tuple
import asyncio
import os

import httpx
from pydantic import ValidationError

from trip_logistics.schemas import City

import logging

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("TRIP_LOGISTICS_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


def parse_city_input(text: str) -> List[str]:
    """Split a comma separated list of city names, dropping blanks."""
    return [city.strip() for city in (text or "").split(",") if city.strip()]


class Geocoder:
    """
    Resolves free-text city names to ``City`` records via the Open-Meteo search API.
    Failures are logged and reported as ``None``; they never raise.
    """
    SEARCH_ENDPOINT = "https://geocoding-api.open-meteo.com/v1/search"

    def __init__(self, *, endpoint: Optional[str] = None, timeout: Optional[float] = None):
        self.endpoint = endpoint or os.getenv("TRIP_LOGISTICS_GEOCODER_URL") or self.SEARCH_ENDPOINT
        self.timeout = float(timeout if timeout is not None else os.getenv("TRIP_LOGISTICS_GEOCODER_TIMEOUT", "10.0"))

    async def geocode_city(self, name: str) -> Optional[City]:
        query = (name or "").strip()
        if not query:
            return None

        params = {"name": query, "count": 1, "language": "en", "format": "json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.endpoint, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.warning("Geocoding request failed for %s", query, exc_info=True)
            return None

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            results = []
        if not results:
            logger.warning("No geocoding results for %s", query)
            return None
        try:
            return self._to_city(results[0])
        except (AttributeError, KeyError, TypeError, ValidationError):
            logger.warning("Malformed geocoding result for %s: %s", query, results[0])
            return None

    async def resolve_names(self, names: Sequence[str]) -> List[Tuple[str, Optional[City]]]:
        """Geocode concurrently, pairing each input name with its result (or ``None``)."""
        resolved = await asyncio.gather(*(self.geocode_city(name) for name in names))
        return list(zip(names, resolved))

    async def geocode_cities(self, names: Sequence[str]) -> List[City]:
        """Geocode concurrently, keep input order, drop names that did not resolve."""
        return [city for _, city in await self.resolve_names(names) if city is not None]

    @staticmethod
    def _to_city(result: Dict[str, Any]) -> City:
        return City.model_validate(
            {
                "name": result.get("name", ""),
                "country": result.get("country", "") or "",
                "country_code": result.get("country_code"),
                "latitude": result["latitude"],
                "longitude": result["longitude"],
            }
        )
