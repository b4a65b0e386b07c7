from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from weatherhub.config.settings import Settings

OWM_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
OWM_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
OWM_FIND_URL = "https://api.openweathermap.org/data/2.5/find"
OWM_GEOCODE_URL = "https://api.openweathermap.org/geo/1.0/direct"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

# 2024-06-11T00:00:00Z
JUNE_11_UTC = 1718064000
THREE_HOURS = 3 * 3600


def make_response(url: str, json: Any = None, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code, json=json, request=httpx.Request("GET", url)
    )


def mock_http_client(routes: dict[str, Any]) -> AsyncMock:
    """
    AsyncMock httpx client answering GETs by exact URL.

    A route value may be a JSON payload (served with status 200), an
    httpx.Response, or an exception instance to raise.
    """
    client = AsyncMock(spec=httpx.AsyncClient)

    async def get(url: str, params: dict | None = None, **kwargs: Any):
        outcome = routes.get(url.rstrip("/"))
        if outcome is None:
            raise httpx.ConnectError(f"No route for {url}")
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return make_response(url, outcome)

    client.get.side_effect = get
    return client


def requested_urls(client: AsyncMock) -> list[str]:
    return [call.args[0] for call in client.get.call_args_list]


def forecast_entry(
    dt: int,
    temp: float,
    pop: float = 0,
    rain_3h: float | None = None,
    main: str = "Clouds",
    description: str = "broken clouds",
    icon: str = "04d",
    humidity: int = 70,
    wind_speed: float = 5.0,
    wind_deg: int = 200,
) -> dict[str, Any]:
    entry = {
        "dt": dt,
        "main": {"temp": temp, "feels_like": temp - 1, "humidity": humidity},
        "weather": [{"main": main, "description": description, "icon": icon}],
        "wind": {"speed": wind_speed, "deg": wind_deg},
        "pop": pop,
    }
    if rain_3h is not None:
        entry["rain"] = {"3h": rain_3h}
    return entry


@pytest.fixture
def settings_without_key():
    """Settings with the primary provider disabled"""
    return Settings(openweather_api_key=None, _env_file=None)


@pytest.fixture
def settings_with_key():
    """Settings with an OpenWeatherMap key configured"""
    return Settings(openweather_api_key="test-api-key", _env_file=None)


@pytest.fixture
def openweather_current():
    """Sample OpenWeatherMap current conditions response"""
    return {
        "coord": {"lon": -0.1278, "lat": 51.5074},
        "weather": [
            {
                "id": 802,
                "main": "Clouds",
                "description": "scattered clouds",
                "icon": "03d",
            }
        ],
        "main": {"temp": 17.4, "feels_like": 16.9, "pressure": 1014, "humidity": 62},
        "visibility": 8000,
        "wind": {"speed": 10, "deg": 240, "gust": 15},
        "clouds": {"all": 40},
        "dt": JUNE_11_UTC + 12 * 3600,
        "sys": {"country": "GB"},
        "timezone": 3600,
        "name": "London",
    }


@pytest.fixture
def openweather_forecast():
    """Sample OpenWeatherMap 3-hourly forecast spanning two UTC days"""
    return {
        "cnt": 10,
        "list": [
            forecast_entry(JUNE_11_UTC + i * THREE_HOURS, temp)
            for i, temp in enumerate([12, 13, 15, 18, 20, 19, 16, 14, 11, 10])
        ],
    }


@pytest.fixture
def open_meteo_payload():
    """Sample Open-Meteo combined response"""
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "timezone": "Europe/London",
        "utc_offset_seconds": 3600,
        "current": {
            "time": "2024-06-11T12:00",
            "temperature_2m": 18,
            "relative_humidity_2m": 70,
            "apparent_temperature": 17.1,
            "is_day": 1,
            "weather_code": 2,
            "cloud_cover": 45,
            "pressure_msl": 1015.2,
            "wind_speed_10m": 12.4,
            "wind_direction_10m": 230,
            "wind_gusts_10m": 25.2,
        },
        "hourly": {"time": ["2024-06-11T00:00"], "temperature_2m": [13.2]},
        "daily": {
            "time": ["2024-06-11", "2024-06-12"],
            "weather_code": [2, 61],
            "temperature_2m_max": [21.3, 17.0],
            "temperature_2m_min": [12.1, 11.4],
            "sunrise": ["2024-06-11T04:43", "2024-06-12T04:43"],
            "sunset": ["2024-06-11T21:18", "2024-06-12T21:19"],
            "uv_index_max": [5.1, 3.2],
            "precipitation_sum": [0.0, 6.4],
            "precipitation_probability_max": [10, 85],
            "wind_speed_10m_max": [18.7, 27.3],
            "wind_direction_10m_dominant": [235, 250],
        },
    }
