from enum import Enum

from pydantic import BaseModel, Field

from weatherhub.models.weather import SearchLocation, WeatherData


class ErrorCode(str, Enum):
    """Error codes surfaced to consumers of the weather client"""

    API_ERROR = "API_ERROR"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"
    NO_GEOCODING = "NO_GEOCODING"
    GEOCODING_ERROR = "GEOCODING_ERROR"
    SEARCH_ERROR = "SEARCH_ERROR"


class ErrorInfo(BaseModel):
    message: str = Field(..., description="Human readable error message")
    code: ErrorCode | None = Field(None, description="Machine readable error code")


class WeatherResult(BaseModel):
    """Outcome of a weather lookup; failures are values, not exceptions"""

    success: bool
    data: WeatherData | None = None
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, data: WeatherData) -> "WeatherResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, code: ErrorCode) -> "WeatherResult":
        return cls(success=False, error=ErrorInfo(message=message, code=code))


class SearchResult(BaseModel):
    """Outcome of a location search"""

    success: bool
    data: list[SearchLocation] | None = None
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, data: list[SearchLocation]) -> "SearchResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, code: ErrorCode) -> "SearchResult":
        return cls(success=False, error=ErrorInfo(message=message, code=code))
