"""
Open-Meteo provider: the keyless fallback weather source.

A single request returns current, hourly and daily blocks. Daily values
arrive column-oriented (one array per field) and are zipped into rows.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from weatherhub.models.weather import (
    CurrentWeather,
    ForecastDay,
    Location,
    Precipitation,
    TemperatureRange,
    WeatherData,
)
from weatherhub.providers.weather.base import WeatherProvider
from weatherhub.providers.weather.wmo_codes import (
    get_weather_condition,
    get_weather_description,
    get_weather_icon,
)

logger = logging.getLogger(__name__)

CURRENT_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,is_day,"
    "precipitation,rain,showers,snowfall,weather_code,cloud_cover,pressure_msl,"
    "surface_pressure,wind_speed_10m,wind_direction_10m,wind_gusts_10m"
)

HOURLY_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,"
    "precipitation_probability,precipitation,rain,showers,snowfall,snow_depth,"
    "weather_code,pressure_msl,surface_pressure,cloud_cover,visibility,"
    "wind_speed_10m,wind_direction_10m,wind_gusts_10m"
)

DAILY_PARAMS = (
    "weather_code,temperature_2m_max,temperature_2m_min,apparent_temperature_max,"
    "apparent_temperature_min,sunrise,sunset,daylight_duration,sunshine_duration,"
    "uv_index_max,uv_index_clear_sky_max,precipitation_sum,rain_sum,showers_sum,"
    "snowfall_sum,precipitation_hours,precipitation_probability_max,"
    "wind_speed_10m_max,wind_gusts_10m_max,wind_direction_10m_dominant"
)

CURRENT_LOCATION_NAME = "Current Location"
DEFAULT_VISIBILITY_KM = 10


@dataclass(frozen=True)
class OpenMeteoPayload:
    body: dict[str, Any]
    latitude: float
    longitude: float


class OpenMeteoProvider(WeatherProvider[OpenMeteoPayload]):
    """Weather backed by the free Open-Meteo forecast API"""

    name = "open-meteo"

    def __init__(self, base_url: str, forecast_days: int = 14):
        self.base_url = base_url.rstrip("/")
        self.forecast_days = forecast_days

    async def fetch_payload(
        self, client: httpx.AsyncClient, latitude: float, longitude: float
    ) -> OpenMeteoPayload:
        body = await self._get_json(
            client,
            f"{self.base_url}/forecast",
            {
                "latitude": latitude,
                "longitude": longitude,
                "current": CURRENT_PARAMS,
                "hourly": HOURLY_PARAMS,
                "daily": DAILY_PARAMS,
                "timezone": "auto",
                "forecast_days": self.forecast_days,
            },
        )
        return OpenMeteoPayload(body=body, latitude=latitude, longitude=longitude)

    def translate(self, payload: OpenMeteoPayload) -> WeatherData:
        data = payload.body
        now = datetime.now(timezone.utc)
        offset = timezone(timedelta(seconds=data.get("utc_offset_seconds") or 0))

        location = Location(
            name=CURRENT_LOCATION_NAME,
            country="",
            latitude=payload.latitude,
            longitude=payload.longitude,
            timezone=data.get("timezone") or "UTC",
            local_time=now.astimezone(offset).isoformat(),
        )

        return WeatherData(
            current=translate_current(data["current"], now),
            forecast=parse_daily_forecast(data.get("daily") or {}),
            location=location,
        )


def translate_current(current: dict[str, Any], now: datetime) -> CurrentWeather:
    code = current.get("weather_code")

    return CurrentWeather(
        temperature=current["temperature_2m"],
        feels_like=_or_zero(current.get("apparent_temperature")),
        condition=get_weather_condition(code),
        description=get_weather_description(code),
        icon=get_weather_icon(code, current.get("is_day") == 1),
        humidity=_or_zero(current.get("relative_humidity_2m")),
        pressure=_or_zero(current.get("pressure_msl")),
        wind_speed=_or_zero(current.get("wind_speed_10m")),
        wind_direction=_or_zero(current.get("wind_direction_10m")),
        wind_gust=current.get("wind_gusts_10m"),
        visibility=DEFAULT_VISIBILITY_KM,
        uv_index=0,
        cloud_cover=_or_zero(current.get("cloud_cover")),
        dew_point=0,
        timestamp=now.isoformat(),
    )


def parse_daily_forecast(raw: dict[str, Any]) -> list[ForecastDay]:
    """Zip Open-Meteo daily column arrays into ForecastDay rows"""
    dates = raw.get("time") or []

    forecast = []
    for i, day in enumerate(dates):
        code = _get_at(raw, "weather_code", i)
        forecast.append(
            ForecastDay(
                date=day,
                temperature=TemperatureRange(
                    min=_or_zero(_get_at(raw, "temperature_2m_min", i)),
                    max=_or_zero(_get_at(raw, "temperature_2m_max", i)),
                ),
                condition=get_weather_condition(code),
                description=get_weather_description(code),
                icon=get_weather_icon(code, True),
                # Not available in the daily block
                humidity=0,
                wind_speed=_or_zero(_get_at(raw, "wind_speed_10m_max", i)),
                wind_direction=_or_zero(
                    _get_at(raw, "wind_direction_10m_dominant", i)
                ),
                precipitation=Precipitation(
                    probability=_or_zero(
                        _get_at(raw, "precipitation_probability_max", i)
                    ),
                    amount=_or_zero(_get_at(raw, "precipitation_sum", i)),
                ),
                uv_index=_or_zero(_get_at(raw, "uv_index_max", i)),
                sunrise=_get_at(raw, "sunrise", i) or "",
                sunset=_get_at(raw, "sunset", i) or "",
            )
        )
    return forecast


def _get_at(data: dict[str, Any], key: str, index: int) -> Any:
    """Safely get value at index from a column array, returning None if missing."""
    col = data.get(key)
    if col is None or index >= len(col):
        return None
    return col[index]


def _or_zero(value: Any) -> Any:
    return 0 if value is None else value
