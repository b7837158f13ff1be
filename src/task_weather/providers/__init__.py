"""Weather data providers."""

from task_weather.providers.base import ProviderError, ProviderErrorKind, WeatherProvider
from task_weather.providers.openweather import OpenWeatherProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "ProviderErrorKind",
    "OpenWeatherProvider",
]
