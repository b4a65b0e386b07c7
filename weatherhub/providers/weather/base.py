import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import httpx
from pydantic import ValidationError

from weatherhub.models.weather import WeatherData
from weatherhub.utils.exceptions import (
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
    PayloadError,
)

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")

KMH_PER_MS = 3.6


class WeatherProvider(ABC, Generic[PayloadT]):
    """
    Abstract base class for upstream weather providers.

    A provider owns one call path: it fetches a raw payload of its own shape
    and translates that payload into the normalized WeatherData model.
    """

    name: str = "provider"

    @abstractmethod
    async def fetch_payload(
        self, client: httpx.AsyncClient, latitude: float, longitude: float
    ) -> PayloadT:
        """
        Fetch the raw upstream payload for a coordinate pair

        Args:
            client: HTTP client to issue requests with
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Provider specific payload
        """
        pass

    @abstractmethod
    def translate(self, payload: PayloadT) -> WeatherData:
        """
        Convert a raw payload into WeatherData

        Args:
            payload: Payload returned by fetch_payload

        Returns:
            Normalized weather data
        """
        pass

    async def fetch_weather(
        self, client: httpx.AsyncClient, latitude: float, longitude: float
    ) -> WeatherData:
        """Fetch and translate weather data for a coordinate pair"""
        payload = await self.fetch_payload(client, latitude, longitude)

        try:
            return self.translate(payload)
        except (KeyError, IndexError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"Failed to translate {self.name} payload: {e}")
            raise PayloadError(
                f"Failed to parse weather data: {str(e)}", provider=self.name
            ) from e

    async def _get_json(
        self, client: httpx.AsyncClient, url: str, params: dict[str, Any]
    ) -> Any:
        """Issue a GET request and return the decoded JSON body"""
        try:
            response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"{self.name} request timed out: {url}")
            raise APITimeoutError(url, provider=self.name) from e
        except httpx.RequestError as e:
            logger.error(f"{self.name} request error for {url}: {e}")
            raise ExternalAPIError(
                f"Request failed: {str(e)}", provider=self.name
            ) from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            retry_seconds = (
                int(retry_after) if retry_after and retry_after.isdigit() else None
            )
            raise APIRateLimitError(retry_seconds, provider=self.name)
        elif response.status_code == 401:
            raise ExternalAPIError(
                "Invalid API key",
                response.status_code,
                response.text,
                provider=self.name,
            )
        elif not 200 <= response.status_code < 300:
            raise ExternalAPIError(
                f"API returned status {response.status_code}",
                response.status_code,
                response.text,
                provider=self.name,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response from {self.name}: {e}")
            raise PayloadError(
                f"Invalid JSON response: {str(e)}", provider=self.name
            ) from e
