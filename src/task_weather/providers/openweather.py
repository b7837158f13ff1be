"""OpenWeatherMap current weather provider.

## API Documentation Summary
Source: https://openweathermap.org/current

## Endpoint
- Base URL: https://api.openweathermap.org/data/2.5/weather
- Full URL example: https://api.openweathermap.org/data/2.5/weather?q=Denver,US&units=imperial&appid=KEY

## Authentication
- API key required, passed as the `appid` query parameter
- Missing or invalid key returns 401

## Request Parameters
| Parameter | Description |
|-----------|-------------|
| q | City name, optionally followed by ",country" |
| units | standard (Kelvin), metric (Celsius, m/s), imperial (Fahrenheit, mph) |
| appid | API key |

## Error Statuses
| Status | Meaning |
|--------|---------|
| 401 | Invalid API key |
| 404 | City not found |
| 429 | Rate limit exceeded |

## Response Format
```json
{
  "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
  "main": {"temp": 71.6, "feels_like": 70.9, "humidity": 40, "pressure": 1012},
  "wind": {"speed": 5.75, "deg": 250},
  "clouds": {"all": 0},
  "name": "Denver"
}
```

## Field Translation (OpenWeatherMap -> CurrentConditions)
| OpenWeatherMap Field | Canonical Field |
|----------------------|-----------------|
| name | location_name |
| main.temp | temperature |
| main.feels_like | feels_like |
| main.humidity | humidity_percent |
| weather[0].description | description |
| weather[0].icon | icon_url (via icon URL template) |
| wind.speed | wind_speed |
| clouds.all | cloud_cover_percent |
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from task_weather.config import Settings
from task_weather.models.weather import CurrentConditions
from task_weather.providers.base import ProviderError, ProviderErrorKind, WeatherProvider

logger = logging.getLogger(__name__)

DEFAULT_ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


class OpenWeatherProvider(WeatherProvider):
    """OpenWeatherMap current conditions provider.

    Example:
        ```python
        async with OpenWeatherProvider(api_key="your-api-key") as provider:
            conditions = await provider.get_current("Denver,US")
        ```
    """

    name = "openweathermap"
    base_url = "https://api.openweathermap.org/data/2.5/weather"
    requires_api_key = True

    def __init__(
        self,
        api_key: str | None,
        units: str = "imperial",
        base_url: str | None = None,
        icon_url: str = DEFAULT_ICON_URL,
        user_agent: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize OpenWeatherMap provider.

        Args:
            api_key: OpenWeatherMap API key (lookups fail with CONFIG if absent)
            units: Unit system requested from the API
            base_url: Override for the current weather endpoint
            icon_url: Icon URL template with an `{icon}` placeholder
            user_agent: Optional User-Agent string
            timeout: Overall request timeout in seconds
            transport: Optional httpx transport
        """
        super().__init__(
            api_key=api_key,
            user_agent=user_agent,
            timeout=timeout,
            transport=transport,
        )
        self.units = units
        self.icon_url = icon_url
        if base_url:
            self.base_url = base_url

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> OpenWeatherProvider:
        """Build a provider from application settings."""
        return cls(
            api_key=settings.openweather_api_key,
            units=settings.weather_units,
            base_url=settings.openweather_base_url,
            icon_url=settings.openweather_icon_url,
            user_agent=f"task-weather/{settings.app_version}",
            timeout=settings.weather_timeout_seconds,
            transport=transport,
        )

    async def get_current(self, location_query: str) -> CurrentConditions:
        """Get current conditions from OpenWeatherMap.

        Args:
            location_query: 'city,country' query string

        Returns:
            Current conditions in canonical form

        Raises:
            ProviderError: If the key is missing or the request fails
        """
        api_key = self._require_api_key()

        params: dict[str, Any] = {
            "q": location_query,
            "units": self.units,
            "appid": api_key,
        }

        logger.info(f"Fetching weather for: {location_query}")
        response = await self._fetch(self.base_url, params=params)
        return self._translate_response(self._parse_json(response))

    def _translate_response(self, response_data: dict[str, Any]) -> CurrentConditions:
        """Translate an OpenWeatherMap payload to canonical form.

        See module docstring for the field mapping.
        """
        try:
            main = response_data["main"]
            weather = response_data["weather"][0]
            return CurrentConditions(
                location_name=response_data["name"],
                temperature=main["temp"],
                feels_like=main["feels_like"],
                humidity_percent=main.get("humidity"),
                description=weather["description"],
                icon_url=self.icon_url.format(icon=weather["icon"]),
                wind_speed=(response_data.get("wind") or {}).get("speed"),
                cloud_cover_percent=(response_data.get("clouds") or {}).get("all"),
            )
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(
                f"Unexpected response payload: {e!r}",
                provider=self.name,
                kind=ProviderErrorKind.PAYLOAD,
            ) from e
