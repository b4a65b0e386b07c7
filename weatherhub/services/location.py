"""Location defaults and temperature unit preferences."""

from datetime import datetime, timezone
from typing import Literal
from zoneinfo import ZoneInfo

from weatherhub.models.weather import CurrentWeather, Location
from weatherhub.utils.formatting import (
    format_pressure,
    format_temperature,
    format_wind_speed,
    round_half_up,
    uv_index_level,
    wind_direction_to_compass,
)

TemperatureUnit = Literal["celsius", "fahrenheit"]

# Used when every location detection method fails.
DEFAULT_LOCATION_NAME = "New York"
DEFAULT_LOCATION_COUNTRY = "United States"
DEFAULT_LOCATION_REGION = "New York"
DEFAULT_LATITUDE = 40.7128
DEFAULT_LONGITUDE = -74.0060
DEFAULT_TIMEZONE = "America/New_York"

FAHRENHEIT_COUNTRIES = frozenset(
    {
        "US", "USA", "United States",
        "BS", "Bahamas",
        "BZ", "Belize",
        "KY", "Cayman Islands",
        "PW", "Palau",
    }
)  # fmt: skip

US_STATES = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
        "PR", "VI", "GU", "AS",
    }
)  # fmt: skip


def default_location(now: datetime | None = None) -> Location:
    """Fixed fallback location with its local time stamped at call time"""
    now = now or datetime.now(timezone.utc)
    return Location(
        name=DEFAULT_LOCATION_NAME,
        country=DEFAULT_LOCATION_COUNTRY,
        region=DEFAULT_LOCATION_REGION,
        latitude=DEFAULT_LATITUDE,
        longitude=DEFAULT_LONGITUDE,
        timezone=DEFAULT_TIMEZONE,
        local_time=now.astimezone(ZoneInfo(DEFAULT_TIMEZONE)).isoformat(),
    )


def uses_fahrenheit(country_code: str | None, region: str | None = None) -> bool:
    if not country_code:
        return False

    code = country_code.upper()
    if code in FAHRENHEIT_COUNTRIES or country_code in FAHRENHEIT_COUNTRIES:
        return True
    return code == "US" or (region or "").upper() in US_STATES


def is_us_coordinates(latitude: float, longitude: float) -> bool:
    """Rough bounding boxes for the continental US, Alaska and Hawaii"""
    return (
        (25 <= latitude <= 49 and -125 <= longitude <= -66)
        or (54 <= latitude <= 71 and -179 <= longitude <= -129)
        or (18 <= latitude <= 29 and -179 <= longitude <= -154)
    )


def temperature_unit(
    country_code: str | None, region: str | None = None
) -> TemperatureUnit:
    return "fahrenheit" if uses_fahrenheit(country_code, region) else "celsius"


def convert_temperature(
    temp: float, from_unit: TemperatureUnit, to_unit: TemperatureUnit
) -> float:
    if from_unit == to_unit:
        return temp
    if from_unit == "celsius":
        return temp * 9 / 5 + 32
    return (temp - 32) * 5 / 9


def format_temperature_with_unit(temp: float, unit: TemperatureUnit) -> str:
    symbol = "°F" if unit == "fahrenheit" else "°C"
    return f"{round_half_up(temp)}{symbol}"


def preferred_unit(location: Location) -> TemperatureUnit:
    """Unit preference for a location; coordinates decide when no country is known"""
    if location.country:
        return temperature_unit(location.country, location.region)
    if is_us_coordinates(location.latitude, location.longitude):
        return "fahrenheit"
    return "celsius"


def display_conditions(
    current: CurrentWeather, unit: TemperatureUnit
) -> dict[str, str]:
    """
    Human readable current conditions in the requested unit system.

    The underlying weather data stays metric; only these strings change.
    """
    imperial = unit == "fahrenheit"
    temperature = convert_temperature(current.temperature, "celsius", unit)

    return {
        "unit": unit,
        "temperature": format_temperature_with_unit(temperature, unit),
        "feelsLike": format_temperature(current.feels_like, "F" if imperial else "C"),
        "wind": (
            f"{format_wind_speed(current.wind_speed, 'mph' if imperial else 'kmh')} "
            f"{wind_direction_to_compass(current.wind_direction)}"
        ),
        "pressure": format_pressure(current.pressure, "inHg" if imperial else "hPa"),
        "uvLevel": uv_index_level(current.uv_index),
    }
