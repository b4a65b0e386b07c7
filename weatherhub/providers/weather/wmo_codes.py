"""
WMO weather interpretation codes as used by Open-Meteo.

Codes map to a short condition category (by numeric range), a human
description and an OpenWeatherMap-style icon identifier so that both
providers feed the same icon set.
"""

UNKNOWN_CONDITION = "Unknown"
UNKNOWN_DESCRIPTION = "Unknown weather condition"
DEFAULT_ICON = "01d"

# Upper bound (inclusive) of each condition range, checked in order.
CONDITION_RANGES: tuple[tuple[int, str], ...] = (
    (0, "Clear"),
    (3, "Partly Cloudy"),
    (48, "Foggy"),
    (57, "Drizzle"),
    (67, "Rain"),
    (77, "Snow"),
    (82, "Showers"),
    (86, "Snow Showers"),
    (99, "Thunderstorm"),
)

DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

# (day icon, night icon)
ICONS: dict[int, tuple[str, str]] = {
    0: ("01d", "01n"),
    1: ("02d", "02n"),
    2: ("02d", "02n"),
    3: ("04d", "04d"),
    45: ("50d", "50d"),
    48: ("50d", "50d"),
    51: ("09d", "09d"),
    53: ("09d", "09d"),
    55: ("09d", "09d"),
    56: ("09d", "09d"),
    57: ("09d", "09d"),
    61: ("10d", "10d"),
    63: ("10d", "10d"),
    65: ("10d", "10d"),
    66: ("10d", "10d"),
    67: ("10d", "10d"),
    71: ("13d", "13d"),
    73: ("13d", "13d"),
    75: ("13d", "13d"),
    77: ("13d", "13d"),
    80: ("09d", "09d"),
    81: ("09d", "09d"),
    82: ("09d", "09d"),
    85: ("13d", "13d"),
    86: ("13d", "13d"),
    95: ("11d", "11d"),
    96: ("11d", "11d"),
    99: ("11d", "11d"),
}


def get_weather_condition(code: int | None) -> str:
    if code is None or code < 0:
        return UNKNOWN_CONDITION
    for upper_bound, condition in CONDITION_RANGES:
        if code <= upper_bound:
            return condition
    return UNKNOWN_CONDITION


def get_weather_description(code: int | None) -> str:
    return DESCRIPTIONS.get(code, UNKNOWN_DESCRIPTION)


def get_weather_icon(code: int | None, is_day: bool = True) -> str:
    icons = ICONS.get(code)
    if icons is None:
        return DEFAULT_ICON
    return icons[0] if is_day else icons[1]
