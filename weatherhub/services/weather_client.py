import logging
from typing import Any

import httpx

from weatherhub.config.settings import Settings
from weatherhub.data.cities import (
    MIN_QUERY_LENGTH,
    CityData,
    get_country_flag,
    search_cities,
)
from weatherhub.models.results import ErrorCode, SearchResult, WeatherResult
from weatherhub.models.weather import SearchLocation
from weatherhub.providers.weather import (
    WeatherProvider,
    create_fallback_provider,
    create_primary_provider,
)
from weatherhub.utils.exceptions import (
    CityNotFoundError,
    ConfigurationError,
    GeocodingError,
    GeocodingUnavailableError,
    WeatherAPIError,
)

logger = logging.getLogger(__name__)

LOCAL_SEARCH_LIMIT = 8
REMOTE_SEARCH_THRESHOLD = 5
MAX_COMBINED_RESULTS = 5


class WeatherClient:
    """
    Async weather client with primary/fallback provider strategy.

    OpenWeatherMap is tried first when an API key is configured; Open-Meteo
    is always tried last. Every public operation returns a result object
    instead of raising, so callers only ever branch on ``success``.
    """

    def __init__(
        self, settings: Settings, http_client: httpx.AsyncClient | None = None
    ):
        self.settings = settings
        self.client: httpx.AsyncClient | None = http_client
        self._owns_client = False
        self.primary = create_primary_provider(settings)
        self.fallback = create_fallback_provider(settings)

        logger.info(
            "Weather provider chain: "
            + " -> ".join(provider.name for provider in self.providers)
        )

    @property
    def providers(self) -> list[WeatherProvider]:
        """Providers in the order they are tried"""
        if self.primary is None:
            return [self.fallback]
        return [self.primary, self.fallback]

    async def __aenter__(self) -> "WeatherClient":
        """Async context manager entry"""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.weather_api_timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit"""
        if self._owns_client and self.client:
            await self.client.aclose()
            self.client = None
            self._owns_client = False

    def _require_client(self) -> httpx.AsyncClient:
        if not self.client:
            raise ConfigurationError(
                "Weather client not initialized. Use async context manager."
            )
        return self.client

    async def get_current_weather_by_coordinates(
        self, latitude: float, longitude: float
    ) -> WeatherResult:
        """Current conditions and forecast for a coordinate pair"""
        try:
            client = self._require_client()
        except ConfigurationError as e:
            logger.error(f"Weather lookup rejected: {e}")
            return WeatherResult.fail(e.message, e.error_code)

        for provider in self.providers:
            try:
                data = await provider.fetch_weather(client, latitude, longitude)
                logger.info(
                    f"Fetched weather for ({latitude}, {longitude}) "
                    f"from {provider.name}"
                )
                return WeatherResult.ok(data)
            except WeatherAPIError as e:
                logger.warning(
                    f"{provider.name} failed for ({latitude}, {longitude}): {e}"
                )
            except Exception as e:
                logger.error(
                    f"Unexpected error from {provider.name} "
                    f"for ({latitude}, {longitude}): {e}"
                )

        return WeatherResult.fail(
            "Failed to fetch weather data. Please try again.", ErrorCode.API_ERROR
        )

    async def get_current_weather_by_city(self, city: str) -> WeatherResult:
        """Resolve a city name to coordinates, then fetch its weather"""
        try:
            client = self._require_client()
            location = await self._geocode_city(client, city)
        except WeatherAPIError as e:
            logger.warning(f"Could not resolve city '{city}': {e}")
            return WeatherResult.fail(e.message, e.error_code)

        return await self.get_current_weather_by_coordinates(
            location.latitude, location.longitude
        )

    async def _geocode_city(
        self, client: httpx.AsyncClient, city: str
    ) -> SearchLocation:
        # Geocoding has no keyless fallback.
        if self.primary is None:
            raise GeocodingUnavailableError()

        city = (city or "").strip()
        if not city:
            raise CityNotFoundError(city)

        try:
            matches = await self.primary.geocode(client, city)
        except WeatherAPIError as e:
            raise GeocodingError(city) from e

        if not matches:
            raise CityNotFoundError(city)
        return matches[0]

    async def search_locations(self, query: str) -> SearchResult:
        """
        Search for locations by name.

        The local city directory is always searched. When it yields fewer
        than five matches and the primary provider is configured, one remote
        search supplements the results; remote failures only get logged.
        """
        if not query or not query.strip() or len(query) < MIN_QUERY_LENGTH:
            return SearchResult.ok([])

        try:
            locations = [
                city_to_search_location(city)
                for city in search_cities(query, LOCAL_SEARCH_LIMIT)
            ]
        except Exception as e:
            logger.error(f"Location search failed for '{query}': {e}")
            return SearchResult.fail(
                "Failed to search locations. Please try again.",
                ErrorCode.SEARCH_ERROR,
            )

        if self.primary is not None and len(locations) < REMOTE_SEARCH_THRESHOLD:
            locations = await self._augment_with_remote(query.strip(), locations)

        return SearchResult.ok(locations)

    async def _augment_with_remote(
        self, query: str, locations: list[SearchLocation]
    ) -> list[SearchLocation]:
        try:
            client = self._require_client()
            remote = await self.primary.find(
                client, query, limit=MAX_COMBINED_RESULTS
            )
        except WeatherAPIError as e:
            logger.warning(
                f"Remote search failed for '{query}', using local results: {e}"
            )
            return locations

        return merge_search_results(locations, remote)


def city_to_search_location(city: CityData) -> SearchLocation:
    return SearchLocation(
        name=city.name,
        country=city.country,
        region=city.region,
        latitude=city.latitude,
        longitude=city.longitude,
        population=city.population,
        flag=get_country_flag(city.country),
    )


def merge_search_results(
    local: list[SearchLocation],
    remote: list[SearchLocation],
    limit: int = MAX_COMBINED_RESULTS,
) -> list[SearchLocation]:
    """Append remote results to local ones, skipping known (name, country) pairs"""
    seen = {(location.name, location.country) for location in local}
    merged = list(local)

    for location in remote:
        if len(merged) >= limit:
            break
        key = (location.name, location.country)
        if key in seen:
            continue
        seen.add(key)
        merged.append(location)

    return merged
