"""
ADS-B Exchange nearby-aircraft client.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..exceptions import ConfigurationError, FetchError
from .base import DEFAULT_TIMEOUT_S, JSONServiceClient

logger = logging.getLogger(__name__)

ADSB_BASE_URL = "https://adsbexchange.com/api/aircraft/json"
DEFAULT_RADIUS_KM = 50.0


class ADSBExchangeClient(JSONServiceClient):
    """
    Fetches the aircraft currently near a coordinate.

    The snapshot is returned as decoded JSON and stored on the node as-is.
    """

    service_name = "ADS-B Exchange"

    def __init__(self, api_key: str, base_url: str = ADSB_BASE_URL,
                 timeout_s: float = DEFAULT_TIMEOUT_S,
                 radius_km: float = DEFAULT_RADIUS_KM,
                 client: Optional[httpx.AsyncClient] = None):
        if radius_km <= 0:
            raise ConfigurationError(f"radius_km must be > 0, got {radius_km}")
        super().__init__(api_key, base_url, timeout_s=timeout_s, client=client)
        self.radius_km = radius_km

    async def fetch(self, latitude: float, longitude: float,
                    radius_km: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """
        Get the traffic snapshot around (latitude, longitude).

        Args:
            latitude: Center latitude in degrees
            longitude: Center longitude in degrees
            radius_km: Search radius; defaults to the client's radius_km

        Returns:
            Decoded snapshot, or None on any transport or parse failure
        """
        radius = self.radius_km if radius_km is None else radius_km
        url = f"{self.base_url}/lat/{latitude}/lon/{longitude}/dist/{radius}/"
        try:
            payload = await self._get_json(url, params={"key": self.api_key})
        except FetchError as exc:
            logger.warning("Failed to fetch air traffic data for coordinates (%s, %s): %s",
                           latitude, longitude, exc)
            return None

        if not isinstance(payload, dict):
            logger.warning("Unexpected air traffic payload for (%s, %s): %s",
                           latitude, longitude, type(payload).__name__)
            return None
        return payload
