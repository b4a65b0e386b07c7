from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from weatherhub.models.results import ErrorCode, WeatherResult
from weatherhub.services.insights import generate_insights
from weatherhub.services.location import (
    TemperatureUnit,
    default_location,
    display_conditions,
    preferred_unit,
)
from weatherhub.services.weather_client import WeatherClient

logger = structlog.get_logger(__name__)
router = APIRouter()

ERROR_STATUS_CODES = {
    ErrorCode.API_ERROR: 503,
    ErrorCode.CITY_NOT_FOUND: 404,
    ErrorCode.NO_GEOCODING: 503,
    ErrorCode.GEOCODING_ERROR: 502,
    ErrorCode.SEARCH_ERROR: 500,
}

Latitude = Annotated[
    float,
    Query(ge=-90, le=90, description="Latitude in degrees", examples=[51.5074]),
]
Longitude = Annotated[
    float,
    Query(ge=-180, le=180, description="Longitude in degrees", examples=[-0.1278]),
]
Units = Annotated[
    TemperatureUnit | None,
    Query(description="Display units; detected from the location when omitted"),
]


def get_weather_client(request: Request) -> WeatherClient:
    """
    Dependency injection for the weather client.

    The client is created and entered during application startup and
    stored on the application state.
    """
    if not hasattr(request.app.state, "weather_client"):
        raise HTTPException(status_code=503, detail="Weather client not available")

    return request.app.state.weather_client


def _to_response(result: BaseModel) -> JSONResponse:
    """Serialize a result object, mapping failures to HTTP status codes"""
    content = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    if result.success:
        return JSONResponse(status_code=200, content=content)

    status_code = ERROR_STATUS_CODES.get(result.error.code, 500)
    return JSONResponse(status_code=status_code, content=content)


def _weather_response(
    result: WeatherResult, units: TemperatureUnit | None
) -> JSONResponse:
    """Weather result plus display strings for the requested or preferred units"""
    if not result.success:
        return _to_response(result)

    unit = units or preferred_unit(result.data.location)
    content = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    content["display"] = display_conditions(result.data.current, unit)
    return JSONResponse(status_code=200, content=content)


@router.get(
    "/weather",
    response_model=dict[str, Any],
    summary="Weather by coordinates",
    description="""
    Current conditions and daily forecast for a coordinate pair.

    OpenWeatherMap is used when an API key is configured; any failure there
    falls back to Open-Meteo. A failure of both returns `API_ERROR`.
    """,
    responses={
        200: {"description": "Weather data retrieved successfully"},
        422: {"description": "Coordinates missing or out of range"},
        503: {"description": "All weather providers failed (API_ERROR)"},
    },
    tags=["Weather"],
)
async def get_weather_by_coordinates(
    lat: Latitude,
    lon: Longitude,
    units: Units = None,
    weather_client: WeatherClient = Depends(get_weather_client),
) -> JSONResponse:
    logger.info("Weather request received", lat=lat, lon=lon)

    result = await weather_client.get_current_weather_by_coordinates(lat, lon)

    logger.info("Weather request completed", lat=lat, lon=lon, success=result.success)
    return _weather_response(result, units)


@router.get(
    "/weather/city",
    response_model=dict[str, Any],
    summary="Weather by city name",
    description="""
    Resolve a city name through OpenWeatherMap geocoding, then fetch its
    weather. City-name lookup requires an OpenWeatherMap API key.
    """,
    responses={
        200: {"description": "Weather data retrieved successfully"},
        404: {"description": "City not found (CITY_NOT_FOUND)"},
        502: {"description": "Geocoding call failed (GEOCODING_ERROR)"},
        503: {"description": "Geocoding or weather unavailable"},
    },
    tags=["Weather"],
)
async def get_weather_by_city(
    name: Annotated[
        str,
        Query(
            description="City name to get weather data for",
            min_length=1,
            max_length=100,
            examples=["London"],
        ),
    ],
    units: Units = None,
    weather_client: WeatherClient = Depends(get_weather_client),
) -> JSONResponse:
    logger.info("City weather request received", city=name)

    result = await weather_client.get_current_weather_by_city(name)

    if not result.success:
        logger.warning(
            "City weather request failed", city=name, error_code=result.error.code
        )
    return _weather_response(result, units)


@router.get(
    "/locations/search",
    response_model=dict[str, Any],
    summary="Search locations",
    description="""
    Search the built-in city directory, supplemented by OpenWeatherMap
    search when few local matches exist. Queries shorter than two
    characters return an empty list.
    """,
    tags=["Locations"],
)
async def search_locations(
    q: Annotated[str, Query(max_length=100, description="Search text")] = "",
    weather_client: WeatherClient = Depends(get_weather_client),
) -> JSONResponse:
    result = await weather_client.search_locations(q)

    logger.info(
        "Location search completed",
        query=q,
        results=len(result.data) if result.data is not None else 0,
    )
    return _to_response(result)


@router.get(
    "/locations/default",
    response_model=dict[str, Any],
    summary="Default location",
    description="""
    Fixed fallback location (New York) for clients that could not detect
    one, with its local time at the moment of the request.
    """,
    tags=["Locations"],
)
async def get_default_location() -> JSONResponse:
    location = default_location()

    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "data": location.model_dump(mode="json", by_alias=True, exclude_none=True),
        },
    )


@router.get(
    "/insights",
    response_model=dict[str, Any],
    summary="Weather insights",
    description="""
    Advice derived from threshold rules over the current conditions and
    forecast for a coordinate pair (heat, cold, rain, wind, UV, humidity,
    visibility, temperature trend, outdoor conditions).
    """,
    tags=["Weather"],
)
async def get_weather_insights(
    lat: Latitude,
    lon: Longitude,
    weather_client: WeatherClient = Depends(get_weather_client),
) -> JSONResponse:
    result = await weather_client.get_current_weather_by_coordinates(lat, lon)
    if not result.success:
        return _to_response(result)

    insights = generate_insights(result.data)
    logger.info("Insights generated", lat=lat, lon=lon, count=len(insights))

    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "data": [insight.model_dump() for insight in insights],
        },
    )
