import math
from typing import Literal

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip

MPH_PER_KMH = 0.621371
INHG_PER_HPA = 0.02953


def round_half_up(value: float) -> int:
    """Round halves up (22.5 -> 23, -0.5 -> 0) instead of to even"""
    return math.floor(value + 0.5)


def format_temperature(temp: float, unit: Literal["C", "F"] = "C") -> str:
    if unit == "F":
        return f"{round_half_up(temp * 9 / 5 + 32)}°F"
    return f"{round_half_up(temp)}°C"


def format_wind_speed(speed_kmh: float, unit: Literal["kmh", "mph"] = "kmh") -> str:
    if unit == "mph":
        return f"{round_half_up(speed_kmh * MPH_PER_KMH)} mph"
    return f"{round_half_up(speed_kmh)} km/h"


def format_pressure(pressure_hpa: float, unit: Literal["hPa", "inHg"] = "hPa") -> str:
    if unit == "inHg":
        return f"{pressure_hpa * INHG_PER_HPA:.2f} inHg"
    return f"{round_half_up(pressure_hpa)} hPa"


def wind_direction_to_compass(degrees: float) -> str:
    """16-point compass label for a wind direction in degrees"""
    return COMPASS_POINTS[round_half_up(degrees / 22.5) % 16]


def uv_index_level(uv_index: float) -> str:
    if uv_index <= 2:
        return "Low"
    if uv_index <= 5:
        return "Moderate"
    if uv_index <= 7:
        return "High"
    if uv_index <= 10:
        return "Very High"
    return "Extreme"
