# backend/elakitty/services/geocoding/nominatim.py
import logging

import requests

from elakitty.config import settings
from elakitty.errors import ExternalServiceError, NotFoundError
from elakitty.services.geofence.point import GeoPoint

logger = logging.getLogger(__name__)


class NominatimClient:
    """Forward and reverse address lookup against a Nominatim instance.

    Both lookups are best-effort: transport failures raise ExternalServiceError,
    an empty answer raises NotFoundError. Nothing is retried.
    """

    def __init__(self, base_url=None, user_agent=None, timeout=None, session=None):
        self.base_url = (base_url or settings.nominatim_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.geocode_timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent or settings.nominatim_user_agent

    def _get(self, path: str, params: dict):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.warning("Address lookup failed: %s %s", url, e)
            raise ExternalServiceError(f"Address lookup failed: {e}")
        except ValueError as e:
            logger.warning("Address lookup returned invalid JSON: %s", url)
            raise ExternalServiceError(f"Address lookup returned invalid JSON: {e}")

    def geocode(self, address_text: str) -> GeoPoint:
        query = (address_text or "").strip()
        if not query:
            raise NotFoundError("No result")
        data = self._get("/search", {"format": "json", "q": query, "limit": 1})
        if not data:
            raise NotFoundError(f"No result for {query!r}")
        first = data[0]
        try:
            return GeoPoint(lat=float(first["lat"]), lng=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ExternalServiceError(f"Unexpected address lookup payload: {e}")

    def reverse_geocode(self, point: GeoPoint) -> str:
        data = self._get(
            "/reverse", {"format": "jsonv2", "lat": point.lat, "lon": point.lng}
        )
        name = data.get("display_name") if isinstance(data, dict) else None
        if not name:
            raise NotFoundError(f"No address at {point.lat}, {point.lng}")
        return name

    def locate(self, point: GeoPoint) -> str:
        """Reverse lookup for "use my location": failures degrade to a blank address."""
        try:
            return self.reverse_geocode(point)
        except (ExternalServiceError, NotFoundError) as e:
            logger.warning("Reverse lookup for current location degraded to blank: %s", e.message)
            return ""


def get_address_lookup() -> NominatimClient:
    return NominatimClient()
