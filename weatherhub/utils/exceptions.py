from typing import Any

from weatherhub.models.results import ErrorCode


class WeatherAPIError(Exception):
    """Base exception for weather data acquisition errors"""

    error_code = ErrorCode.API_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ExternalAPIError(WeatherAPIError):
    """Exception raised when an upstream weather provider call fails"""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        provider: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.provider = provider


class PayloadError(ExternalAPIError):
    """Exception raised when an upstream payload cannot be parsed or translated"""

    pass


class APITimeoutError(ExternalAPIError):
    """Exception raised when an upstream request times out"""

    def __init__(self, url: str, provider: str | None = None):
        super().__init__(f"Request to {url} timed out", provider=provider)
        self.url = url


class APIRateLimitError(ExternalAPIError):
    """Exception raised when an upstream rate limit is exceeded"""

    def __init__(self, retry_after: int | None = None, provider: str | None = None):
        message = "API rate limit exceeded"
        if retry_after:
            message += f". Retry after {retry_after} seconds"
        super().__init__(message, status_code=429, provider=provider)
        self.retry_after = retry_after


class ConfigurationError(WeatherAPIError):
    """Exception raised when configuration is invalid"""

    pass


class CityNotFoundError(WeatherAPIError):
    """Exception raised when a city name resolves to no coordinates"""

    error_code = ErrorCode.CITY_NOT_FOUND

    def __init__(self, city: str, message: str | None = None):
        super().__init__(
            message or "City not found. Please check the spelling and try again."
        )
        self.city = city


class GeocodingUnavailableError(WeatherAPIError):
    """Exception raised when no provider can resolve city names"""

    error_code = ErrorCode.NO_GEOCODING

    def __init__(self, message: str = "Geocoding service not available"):
        super().__init__(message)


class GeocodingError(WeatherAPIError):
    """Exception raised when the geocoding call itself fails"""

    error_code = ErrorCode.GEOCODING_ERROR

    def __init__(self, city: str, message: str | None = None):
        super().__init__(message or "Failed to geocode city")
        self.city = city
