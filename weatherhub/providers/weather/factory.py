import logging

from weatherhub.config.settings import Settings
from weatherhub.providers.weather.open_meteo import OpenMeteoProvider
from weatherhub.providers.weather.openweather import OpenWeatherProvider

logger = logging.getLogger(__name__)


def create_primary_provider(settings: Settings) -> OpenWeatherProvider | None:
    """OpenWeatherMap provider, or None when no usable API key is configured"""
    if not settings.primary_provider_enabled:
        logger.info("OpenWeatherMap API key not configured, primary provider disabled")
        return None

    return OpenWeatherProvider(
        api_key=settings.openweather_api_key.strip(),
        base_url=str(settings.openweather_base_url),
        geocoding_url=str(settings.openweather_geocoding_url),
    )


def create_fallback_provider(settings: Settings) -> OpenMeteoProvider:
    """Keyless Open-Meteo provider, always available"""
    return OpenMeteoProvider(
        base_url=str(settings.open_meteo_base_url),
        forecast_days=settings.forecast_days,
    )

