"""Base weather provider abstraction.

This module defines the interface for current-conditions weather providers
and the tagged error type they raise.

## Error Kinds

Every failure is raised as a `ProviderError` carrying a `ProviderErrorKind`,
so callers can branch on the kind instead of inspecting exception classes or
HTTP client internals:

| Kind        | Meaning                                           |
|-------------|---------------------------------------------------|
| CONFIG      | Provider credential missing, no request was sent  |
| TIMEOUT     | Request did not complete within the timeout       |
| STATUS      | Provider responded with an HTTP error status      |
| NO_RESPONSE | Network failure, no response was received         |
| PAYLOAD     | Response body could not be parsed/translated      |

## Requests

Each lookup is a single GET bounded by `timeout` seconds overall. The
in-flight request is cancelled when the bound is reached. There are no
retries; a failed lookup is reported to the caller as-is.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

from task_weather.models.weather import CurrentConditions


class ProviderErrorKind(str, Enum):
    """Classification of provider failures."""

    CONFIG = "config"
    TIMEOUT = "timeout"
    STATUS = "status"
    NO_RESPONSE = "no_response"
    PAYLOAD = "payload"


class ProviderError(Exception):
    """Weather provider failure tagged with its kind."""

    def __init__(
        self,
        message: str,
        provider: str,
        kind: ProviderErrorKind,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.kind = kind
        self.status_code = status_code
        self.response_body = response_body


class WeatherProvider(ABC):
    """Abstract base class for current-weather providers.

    Attributes:
        name: Human-readable provider name
        base_url: Endpoint URL for current conditions
        requires_api_key: Whether this provider requires an API key

    Example:
        ```python
        class MyProvider(WeatherProvider):
            name = "my_provider"
            base_url = "https://api.example.com/current"

            async def get_current(self, location_query):
                response = await self._fetch(self.base_url, params={"q": location_query})
                return self._translate_response(self._parse_json(response))
        ```
    """

    name: str
    base_url: str
    requires_api_key: bool = False

    def __init__(
        self,
        api_key: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the provider.

        Args:
            api_key: API key if required by the provider
            user_agent: User-Agent string for requests
            timeout: Overall request timeout in seconds
            transport: Optional httpx transport (used to stub the network)
        """
        self.api_key = api_key
        self.user_agent = user_agent or "task-weather/0.1.0"
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def _require_api_key(self) -> str:
        """Return the API key, or fail before any request is issued."""
        if self.requires_api_key and not self.api_key:
            raise ProviderError(
                f"API key required for {self.name}",
                provider=self.name,
                kind=ProviderErrorKind.CONFIG,
            )
        return self.api_key or ""

    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Issue a single GET request bounded by the provider timeout.

        Args:
            url: Full URL to fetch
            params: Query parameters
            headers: Additional headers

        Returns:
            HTTP response with a non-error status

        Raises:
            ProviderError: With kind TIMEOUT, STATUS or NO_RESPONSE
        """
        client = self._get_client()
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        try:
            response = await asyncio.wait_for(
                client.get(url, params=params, headers=request_headers),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ProviderError(
                f"Request timed out after {self.timeout}s",
                provider=self.name,
                kind=ProviderErrorKind.TIMEOUT,
            ) from e
        except httpx.TransportError as e:
            raise ProviderError(
                f"No response: {e}",
                provider=self.name,
                kind=ProviderErrorKind.NO_RESPONSE,
            ) from e

        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                kind=ProviderErrorKind.STATUS,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    def _parse_json(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body."""
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                kind=ProviderErrorKind.PAYLOAD,
                response_body=response.text,
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(
                "Unexpected response shape",
                provider=self.name,
                kind=ProviderErrorKind.PAYLOAD,
                response_body=response.text,
            )
        return data

    @abstractmethod
    async def get_current(self, location_query: str) -> CurrentConditions:
        """Get current conditions for a location query.

        Args:
            location_query: Provider location query, e.g. 'Denver,US'

        Returns:
            Current conditions in canonical form

        Raises:
            ProviderError: If conditions cannot be retrieved
        """
        pass

    @abstractmethod
    def _translate_response(self, response_data: dict[str, Any]) -> CurrentConditions:
        """Translate a provider-specific payload to `CurrentConditions`.

        Implementations raise `ProviderError` with kind PAYLOAD when required
        fields are missing.
        """
        pass
