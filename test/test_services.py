"""
Unit tests for the weather and traffic clients.

The HTTP layer is replaced with httpx.MockTransport; no network access.

Run with: pytest test/test_services.py
"""

import asyncio

import httpx
import pytest
from skylattice.exceptions import ConfigurationError
from skylattice.models.environment import SurfaceWeather, Wind
from skylattice.services import ADSBExchangeClient, OpenWeatherClient


WEATHER_BODY = {
    "main": {"temp": 285.0, "pressure": 1008, "humidity": 80},
    "wind": {"speed": 6.0, "deg": 45},
    "clouds": {"all": 90},
    "visibility": 6000,
}

TRAFFIC_BODY = {"ac": [{"hex": "a1b2c3", "alt_baro": 32000}], "total": 1}


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestOpenWeatherClient:
    """Tests for OpenWeatherClient.fetch."""

    def test_successful_fetch(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=WEATHER_BODY)

        async def run():
            async with mock_client(handler) as http:
                client = OpenWeatherClient("secret", client=http)
                return await client.fetch(12.5, -3.25)

        weather = asyncio.run(run())

        assert isinstance(weather, SurfaceWeather)
        assert weather.temperature_k == 285.0
        assert weather.pressure_pa == pytest.approx(100800.0)
        assert weather.wind == Wind(6.0, 45.0)
        assert weather.cloud_cover_pct == 90.0

        params = requests[0].url.params
        assert requests[0].url.path.endswith("/weather")
        assert params["lat"] == "12.5"
        assert params["lon"] == "-3.25"
        assert params["appid"] == "secret"

    def test_http_error_returns_none(self):
        def handler(request):
            return httpx.Response(401, json={"message": "Invalid API key"})

        async def run():
            async with mock_client(handler) as http:
                return await OpenWeatherClient("bad", client=http).fetch(0, 0)

        assert asyncio.run(run()) is None

    def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def run():
            async with mock_client(handler) as http:
                return await OpenWeatherClient("key", client=http).fetch(0, 0)

        assert asyncio.run(run()) is None

    def test_malformed_payload_returns_none(self):
        def handler(request):
            return httpx.Response(200, json={"cod": 200, "name": "nowhere"})

        async def run():
            async with mock_client(handler) as http:
                return await OpenWeatherClient("key", client=http).fetch(0, 0)

        assert asyncio.run(run()) is None

    def test_non_json_body_returns_none(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        async def run():
            async with mock_client(handler) as http:
                return await OpenWeatherClient("key", client=http).fetch(0, 0)

        assert asyncio.run(run()) is None

    def test_missing_key_rejected(self):
        with pytest.raises(ConfigurationError):
            OpenWeatherClient("")


class TestADSBExchangeClient:
    """Tests for ADSBExchangeClient.fetch."""

    def test_successful_fetch(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=TRAFFIC_BODY)

        async def run():
            async with mock_client(handler) as http:
                client = ADSBExchangeClient("adsb-key", client=http)
                return await client.fetch(48.1, 11.5)

        traffic = asyncio.run(run())

        assert traffic == TRAFFIC_BODY
        url = requests[0].url
        assert url.path.endswith("/lat/48.1/lon/11.5/dist/50.0/")
        assert url.params["key"] == "adsb-key"

    def test_custom_radius(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=TRAFFIC_BODY)

        async def run():
            async with mock_client(handler) as http:
                return await ADSBExchangeClient("k", client=http).fetch(1, 2, radius_km=25)

        asyncio.run(run())
        assert "/dist/25/" in requests[0].url.path

    def test_server_error_returns_none(self):
        def handler(request):
            return httpx.Response(503)

        async def run():
            async with mock_client(handler) as http:
                return await ADSBExchangeClient("k", client=http).fetch(0, 0)

        assert asyncio.run(run()) is None

    def test_non_object_payload_returns_none(self):
        def handler(request):
            return httpx.Response(200, json=[1, 2, 3])

        async def run():
            async with mock_client(handler) as http:
                return await ADSBExchangeClient("k", client=http).fetch(0, 0)

        assert asyncio.run(run()) is None

    def test_bad_radius_rejected(self):
        with pytest.raises(ConfigurationError):
            ADSBExchangeClient("k", radius_km=0)

    def test_owned_client_closed(self):
        async def run():
            async with ADSBExchangeClient("k") as client:
                inner = client._client
            return inner

        assert asyncio.run(run()).is_closed
