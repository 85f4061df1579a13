"""
Address geocoding against a Nominatim-compatible search endpoint, plus the
haversine distance used by the listing distance filter.
"""

import logging
import math
import threading
from typing import Dict, List, Optional, Tuple

import requests

from campus_housing.config.settings import settings
from campus_housing.modules.listings.schemas import GeocodeResult

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


class GeocodingError(Exception):
    """Raised when the geocoding service cannot be reached or answers with an error"""


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres between two lat/lng points"""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class Geocoder:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.geocoder_url
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout
        self.session = session or requests.Session()
        # Nominatim's usage policy rejects requests without an identifying agent
        self.session.headers.setdefault("User-Agent", settings.geocoder_user_agent)
        self._cache: Dict[str, Tuple[float, float]] = {}
        self._lock = threading.Lock()

    def _search(self, params: Dict[str, str]) -> list:
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            results = response.json()
        except requests.RequestException as e:
            logger.error(f"Geocoding request failed for {params.get('q')!r}: {e}")
            raise GeocodingError(str(e)) from e
        except ValueError as e:
            logger.error(f"Geocoding response was not JSON for {params.get('q')!r}: {e}")
            raise GeocodingError(str(e)) from e
        if results is None:
            return []
        if not isinstance(results, list):
            logger.error(f"Geocoding service answered {results!r} for {params.get('q')!r}")
            raise GeocodingError(f"Unexpected geocoding response: {results!r}")
        return results

    @staticmethod
    def _coordinates(item) -> Tuple[float, float]:
        try:
            return float(item["lat"]), float(item["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Malformed geocoding result: {item!r}") from e

    def geocode(self, address: str) -> Optional[Tuple[float, float]]:
        """Best match (lat, lng) for an address, or None when nothing matches.

        Hits are cached for the lifetime of the geocoder; misses are not.
        """
        with self._lock:
            if address in self._cache:
                return self._cache[address]

        results = self._search({"q": address, "format": "json", "limit": "1"})
        if not results:
            logger.debug(f"No geocoding result for {address!r}")
            return None

        coords = self._coordinates(results[0])
        with self._lock:
            self._cache[address] = coords
        return coords

    def search(self, query: str, limit: int = 5) -> List[GeocodeResult]:
        """Candidate places for a free-text query, for picking a search centre"""
        query = query.strip()
        if not query:
            return []
        results = self._search({
            "q": query,
            "format": "jsonv2",
            "addressdetails": "1",
            "limit": str(limit),
        })
        candidates = []
        for item in results:
            lat, lng = self._coordinates(item)
            candidates.append(GeocodeResult(display_name=item.get("display_name", ""), lat=lat, lng=lng))
        return candidates


_geocoder: Optional[Geocoder] = None


def get_geocoder() -> Geocoder:
    global _geocoder
    if _geocoder is None:
        _geocoder = Geocoder()
    return _geocoder
