"""
OpenWeatherMap provider: the primary, keyed weather source.

Current conditions and the 3-hourly forecast come from two endpoints that
are queried concurrently. The same credential also unlocks city geocoding
and the free-text city search used to augment local search results.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from weatherhub.data.cities import get_country_flag
from weatherhub.models.weather import (
    CurrentWeather,
    ForecastDay,
    Location,
    Precipitation,
    SearchLocation,
    TemperatureRange,
    WeatherData,
)
from weatherhub.providers.weather.base import KMH_PER_MS, WeatherProvider
from weatherhub.utils.exceptions import PayloadError

logger = logging.getLogger(__name__)

DEFAULT_VISIBILITY_KM = 10
MAX_FORECAST_DAYS = 5


@dataclass(frozen=True)
class OpenWeatherPayload:
    current: dict[str, Any]
    forecast: dict[str, Any]


class OpenWeatherProvider(WeatherProvider[OpenWeatherPayload]):
    """Weather, geocoding and city search backed by OpenWeatherMap"""

    name = "openweathermap"

    def __init__(self, api_key: str, base_url: str, geocoding_url: str):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.geocoding_url = geocoding_url.rstrip("/")

    async def fetch_payload(
        self, client: httpx.AsyncClient, latitude: float, longitude: float
    ) -> OpenWeatherPayload:
        params = {
            "lat": latitude,
            "lon": longitude,
            "appid": self.api_key,
            "units": "metric",
        }

        current, forecast = await asyncio.gather(
            self._get_json(client, f"{self.base_url}/weather", params),
            self._get_json(client, f"{self.base_url}/forecast", params),
        )
        return OpenWeatherPayload(current=current, forecast=forecast)

    def translate(self, payload: OpenWeatherPayload) -> WeatherData:
        current = payload.current
        now = datetime.now(timezone.utc)

        return WeatherData(
            current=translate_current(current, now),
            forecast=group_forecast_by_day(payload.forecast.get("list") or []),
            location=translate_location(current, now),
        )

    async def geocode(
        self, client: httpx.AsyncClient, city: str
    ) -> list[SearchLocation]:
        """Resolve a city name to at most one location"""
        data = await self._get_json(
            client,
            f"{self.geocoding_url}/direct",
            {"q": city, "limit": 1, "appid": self.api_key},
        )
        if not isinstance(data, list):
            raise PayloadError("Unexpected geocoding response", provider=self.name)

        try:
            return [
                SearchLocation(
                    name=item["name"],
                    country=item.get("country", ""),
                    region=item.get("state"),
                    latitude=item["lat"],
                    longitude=item["lon"],
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise PayloadError(
                f"Failed to parse geocoding response: {str(e)}", provider=self.name
            ) from e

    async def find(
        self, client: httpx.AsyncClient, query: str, limit: int = 5
    ) -> list[SearchLocation]:
        """Free-text city search"""
        data = await self._get_json(
            client,
            f"{self.base_url}/find",
            {"q": query, "limit": limit, "appid": self.api_key},
        )

        try:
            return [
                SearchLocation(
                    name=item["name"],
                    country=item["sys"]["country"],
                    region=item.get("state"),
                    latitude=item["coord"]["lat"],
                    longitude=item["coord"]["lon"],
                    population=item.get("population"),
                    flag=get_country_flag(item["sys"]["country"]),
                )
                for item in data.get("list") or []
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise PayloadError(
                f"Failed to parse search response: {str(e)}", provider=self.name
            ) from e


def translate_location(current: dict[str, Any], now: datetime) -> Location:
    """
    Build the Location from a current-conditions payload.

    The provider only reports a UTC offset, not a timezone name, so the
    timezone is reported as UTC while local_time carries the real offset.
    """
    offset = timezone(timedelta(seconds=current.get("timezone") or 0))
    coord = current["coord"]

    return Location(
        name=current["name"],
        country=current.get("sys", {}).get("country", ""),
        latitude=coord["lat"],
        longitude=coord["lon"],
        timezone="UTC",
        local_time=now.astimezone(offset).isoformat(),
    )


def translate_current(current: dict[str, Any], now: datetime) -> CurrentWeather:
    main = current["main"]
    weather = current["weather"][0]
    wind = current.get("wind") or {}
    gust = wind.get("gust")
    visibility = current.get("visibility")

    return CurrentWeather(
        temperature=main["temp"],
        feels_like=main.get("feels_like", main["temp"]),
        condition=weather["main"],
        description=weather["description"],
        icon=weather["icon"],
        humidity=main.get("humidity", 0),
        pressure=main.get("pressure", 0),
        wind_speed=(wind.get("speed") or 0) * KMH_PER_MS,
        wind_direction=wind.get("deg") or 0,
        wind_gust=gust * KMH_PER_MS if gust else None,
        visibility=visibility / 1000 if visibility else DEFAULT_VISIBILITY_KM,
        # Not available on the free tier
        uv_index=0,
        cloud_cover=(current.get("clouds") or {}).get("all", 0),
        dew_point=0,
        timestamp=now.isoformat(),
    )


def group_forecast_by_day(
    items: list[dict[str, Any]], max_days: int = MAX_FORECAST_DAYS
) -> list[ForecastDay]:
    """
    Collapse 3-hour forecast entries into calendar days.

    Entries are grouped by their UTC date, not the location's local date.
    The first entry of a day supplies condition, icon, humidity and wind.
    """
    days: dict[str, list[dict[str, Any]]] = {}
    for item in items:
        day = datetime.fromtimestamp(item["dt"], tz=timezone.utc).date().isoformat()
        days.setdefault(day, []).append(item)

    forecast = []
    for day, entries in list(days.items())[:max_days]:
        temps = [entry["main"]["temp"] for entry in entries]
        first = entries[0]
        weather = first["weather"][0]
        wind = first.get("wind") or {}

        forecast.append(
            ForecastDay(
                date=day,
                temperature=TemperatureRange(min=min(temps), max=max(temps)),
                condition=weather["main"],
                description=weather["description"],
                icon=weather["icon"],
                humidity=first["main"].get("humidity", 0),
                wind_speed=(wind.get("speed") or 0) * KMH_PER_MS,
                wind_direction=wind.get("deg") or 0,
                precipitation=Precipitation(
                    probability=max((entry.get("pop") or 0) * 100 for entry in entries),
                    amount=sum(
                        (entry.get("rain") or {}).get("3h", 0) for entry in entries
                    ),
                ),
                uv_index=0,
                sunrise="",
                sunset="",
            )
        )

    return forecast
