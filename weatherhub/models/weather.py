from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WeatherModel(BaseModel):
    """Base for weather models: immutable, camelCase on the wire"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Location(WeatherModel):
    """Resolved place the weather data belongs to"""

    name: str = Field(..., description="Place name")
    country: str = Field(..., description="Country code or name, may be empty")
    region: str | None = Field(None, description="State, province or region")
    latitude: float = Field(..., allow_inf_nan=False, description="Latitude")
    longitude: float = Field(..., allow_inf_nan=False, description="Longitude")
    timezone: str = Field(..., description="IANA timezone name")
    local_time: str = Field(..., description="Local time snapshot (ISO-8601)")


class CurrentWeather(WeatherModel):
    """Current conditions, always metric"""

    temperature: float = Field(..., description="Temperature in Celsius")
    feels_like: float = Field(..., description="Apparent temperature in Celsius")
    condition: str = Field(..., description="Short condition category")
    description: str = Field(..., description="Human readable description")
    icon: str = Field(..., description="Icon identifier, e.g. 01d")
    humidity: float = Field(..., ge=0, le=100, description="Humidity percentage")
    pressure: float = Field(..., description="Atmospheric pressure in hPa")
    wind_speed: float = Field(..., ge=0, description="Wind speed in km/h")
    wind_direction: float = Field(..., description="Wind direction in degrees")
    wind_gust: float | None = Field(None, ge=0, description="Wind gust in km/h")
    visibility: float = Field(..., ge=0, description="Visibility in km")
    uv_index: float = Field(0, ge=0, description="UV index, 0 if unknown")
    cloud_cover: float = Field(..., ge=0, le=100, description="Cloud cover percentage")
    dew_point: float = Field(0, description="Dew point, 0 if not computed")
    timestamp: str = Field(..., description="When the data was transformed (ISO-8601)")


class TemperatureRange(WeatherModel):
    min: float
    max: float


class Precipitation(WeatherModel):
    probability: float = Field(..., ge=0, le=100, description="Probability in %")
    amount: float = Field(..., ge=0, description="Accumulation in mm")


class ForecastDay(WeatherModel):
    """One calendar day of forecast"""

    date: str = Field(..., description="ISO date, no time component")
    temperature: TemperatureRange
    condition: str
    description: str
    icon: str
    humidity: float = Field(0, description="Humidity percentage, 0 if unavailable")
    wind_speed: float = Field(..., ge=0, description="Wind speed in km/h")
    wind_direction: float = Field(..., description="Wind direction in degrees")
    precipitation: Precipitation
    uv_index: float = 0
    sunrise: str = Field("", description="ISO-8601 or empty when unavailable")
    sunset: str = Field("", description="ISO-8601 or empty when unavailable")


class WeatherAlert(WeatherModel):
    """Severe weather alert"""

    id: str
    title: str
    description: str
    severity: Literal["minor", "moderate", "severe", "extreme"]
    start: str
    end: str
    areas: list[str] = Field(default_factory=list)


class WeatherData(WeatherModel):
    """Normalized weather data produced by every provider"""

    current: CurrentWeather
    forecast: list[ForecastDay] = Field(
        default_factory=list, description="Chronological, today first"
    )
    location: Location
    alerts: list[WeatherAlert] = Field(default_factory=list)


class SearchLocation(WeatherModel):
    """Search-result projection of a city"""

    name: str
    country: str
    region: str | None = None
    latitude: float = Field(..., allow_inf_nan=False)
    longitude: float = Field(..., allow_inf_nan=False)
    population: int | None = None
    flag: str | None = None
