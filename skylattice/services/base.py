"""
Shared HTTP plumbing for the service clients.
"""

from typing import Any, Dict, Optional

import httpx

from ..exceptions import ConfigurationError, FetchError

DEFAULT_TIMEOUT_S = 10.0
USER_AGENT = "skylattice/0.1 (airspace-grid-planner)"


class JSONServiceClient:
    """
    Async JSON-over-HTTP client owning a single httpx.AsyncClient.

    Use as an async context manager, or call ``aclose()`` when done. An
    existing ``httpx.AsyncClient`` can be injected; it is then left open.

    Attributes:
        api_key: Credential sent with every request
        base_url: Service root URL
        timeout_s: Per-request timeout in seconds
    """

    service_name = "service"

    def __init__(self, api_key: str, base_url: str,
                 timeout_s: float = DEFAULT_TIMEOUT_S,
                 client: Optional[httpx.AsyncClient] = None):
        if not api_key or not isinstance(api_key, str):
            raise ConfigurationError(f"{self.service_name} API key is missing")
        if timeout_s <= 0:
            raise ConfigurationError(f"timeout_s must be > 0, got {timeout_s}")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_s,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            FetchError: On transport failure, timeout, HTTP error status or
                a body that is not JSON
        """
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout_s)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"{self.service_name} returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"{self.service_name} request failed: {exc!r}") from exc
        except ValueError as exc:
            raise FetchError(f"{self.service_name} returned invalid JSON") from exc
