from .base import WeatherProvider
from .factory import create_fallback_provider, create_primary_provider
from .open_meteo import OpenMeteoProvider
from .openweather import OpenWeatherProvider

__all__ = [
    "WeatherProvider",
    "OpenMeteoProvider",
    "OpenWeatherProvider",
    "create_primary_provider",
    "create_fallback_provider",
]
