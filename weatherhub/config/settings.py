from typing import Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

OPENWEATHER_KEY_PLACEHOLDER = "your_openweathermap_api_key_here"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "WeatherHub API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: Literal["development", "production"] = "development"

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    openweather_api_key: str | None = Field(
        default=None,
        description="OpenWeatherMap API key; primary provider is disabled without it",
    )
    openweather_base_url: HttpUrl = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeatherMap data API base URL",
    )
    openweather_geocoding_url: HttpUrl = Field(
        default="https://api.openweathermap.org/geo/1.0",
        description="OpenWeatherMap geocoding API base URL",
    )
    open_meteo_base_url: HttpUrl = Field(
        default="https://api.open-meteo.com/v1",
        description="Open-Meteo API base URL",
    )
    forecast_days: int = Field(
        default=14, description="Forecast horizon requested from Open-Meteo"
    )
    weather_api_timeout: int = Field(
        default=30, description="Upstream request timeout in seconds"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def primary_provider_enabled(self) -> bool:
        key = (self.openweather_api_key or "").strip()
        return bool(key) and key != OPENWEATHER_KEY_PLACEHOLDER


settings = Settings()
