import logging
import sys
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse

from weatherhub.api.routes import router
from weatherhub.config.settings import Settings, settings
from weatherhub.config.utils import get_config_summary, validate_configuration
from weatherhub.services.weather_client import WeatherClient
from weatherhub.utils.exceptions import WeatherAPIError


def setup_logging(settings_obj: Settings) -> None:
    """Configure structured logging for the application."""

    log_level = getattr(logging, settings_obj.log_level.upper())

    if settings_obj.log_format == "json" and not settings_obj.is_development:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan - startup and shutdown events.

    The weather client owns one HTTP connection pool for the lifetime of
    the application.
    """
    logger = structlog.get_logger(__name__)
    settings_obj: Settings = app.state.settings

    logger.info("Starting WeatherHub service", version=settings_obj.app_version)

    validation = validate_configuration(settings_obj)
    for warning in validation["warnings"]:
        logger.warning("Configuration warning", warning=warning)
    if not validation["valid"]:
        logger.error("Invalid configuration", errors=validation["errors"])
        raise RuntimeError(f"Invalid configuration: {validation['errors']}")

    logger.info("Configuration loaded", **get_config_summary(settings_obj))

    async with WeatherClient(settings_obj) as weather_client:
        app.state.weather_client = weather_client
        logger.info(
            "Weather client initialized",
            providers=[provider.name for provider in weather_client.providers],
        )

        yield  # Application is running

        logger.info("Shutting down WeatherHub service")


def create_app(settings_obj: Settings = settings) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """

    setup_logging(settings_obj)

    app = FastAPI(
        title=settings_obj.app_name,
        version=settings_obj.app_version,
        description="Weather data with provider fallback and location search",
        docs_url="/docs" if settings_obj.is_development else None,
        redoc_url="/redoc" if settings_obj.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings_obj

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=["*"]
        if settings_obj.is_development
        else ["localhost", "127.0.0.1"],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next) -> Response:
        """Log requests and add processing time headers."""
        logger = structlog.get_logger(__name__)

        start_time = time.time()
        request_id = f"req_{int(start_time * 1000000)}"

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        logger.info("Request started")

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            response.headers["X-Request-ID"] = request_id

            logger.info(
                "Request completed",
                status_code=response.status_code,
                process_time=process_time,
            )

            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                process_time=process_time,
            )
            raise

    @app.exception_handler(WeatherAPIError)
    async def weather_api_error_handler(
        _request: Request, exc: WeatherAPIError
    ) -> JSONResponse:
        """Handle weather errors that escaped the client boundary."""
        logger = structlog.get_logger(__name__)
        logger.error("Weather error", error=str(exc), error_type=type(exc).__name__)

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {"message": exc.message, "code": exc.error_code.value},
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors gracefully."""
        logger = structlog.get_logger(__name__)
        logger.error(
            "Unhandled exception", error=str(exc), error_type=type(exc).__name__
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_SERVER_ERROR",
                "message": "An internal server error occurred",
                "details": str(exc) if settings_obj.is_development else None,
            },
        )

    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint providing basic service information."""
        return {
            "service": settings_obj.app_name,
            "version": settings_obj.app_version,
            "status": "running",
            "docs": "/docs" if settings_obj.is_development else "disabled",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weatherhub.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
