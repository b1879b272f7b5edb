"""
OpenWeatherMap surface weather client.
"""

import logging
from typing import Optional

import httpx

from ..exceptions import FetchError
from ..models.environment import SurfaceWeather
from .base import DEFAULT_TIMEOUT_S, JSONServiceClient

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "http://api.openweathermap.org/data/2.5"


class OpenWeatherClient(JSONServiceClient):
    """
    Fetches the current surface observation for a coordinate.

    ``fetch`` never raises for network or payload problems; it returns None
    so the grid builder can carry on without weather for that node.
    """

    service_name = "OpenWeatherMap"

    def __init__(self, api_key: str, base_url: str = OPENWEATHER_BASE_URL,
                 timeout_s: float = DEFAULT_TIMEOUT_S,
                 client: Optional[httpx.AsyncClient] = None):
        super().__init__(api_key, base_url, timeout_s=timeout_s, client=client)

    async def fetch(self, latitude: float, longitude: float) -> Optional[SurfaceWeather]:
        """
        Get the surface weather at (latitude, longitude).

        Returns:
            SurfaceWeather, or None on any transport or parse failure
        """
        params = {"lat": latitude, "lon": longitude, "appid": self.api_key}
        try:
            payload = await self._get_json(f"{self.base_url}/weather", params=params)
            return SurfaceWeather.from_openweather(payload)
        except FetchError as exc:
            logger.warning("Failed to fetch weather data for coordinates (%s, %s): %s",
                           latitude, longitude, exc)
            return None
