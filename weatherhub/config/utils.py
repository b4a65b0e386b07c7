from .settings import Settings, settings


def validate_configuration(
    settings_obj: Settings = settings,
) -> dict[str, list[str] | bool]:
    """Validate configuration and return validation results."""
    errors = []
    warnings = []

    if not settings_obj.primary_provider_enabled:
        warnings.append(
            "OPENWEATHER_API_KEY is not set; weather falls back to Open-Meteo "
            "and city-name lookup is unavailable"
        )

    if settings_obj.forecast_days <= 0 or settings_obj.forecast_days > 16:
        errors.append("FORECAST_DAYS must be between 1 and 16")

    if settings_obj.weather_api_timeout <= 0:
        errors.append("WEATHER_API_TIMEOUT must be a positive integer")

    if not (1 <= settings_obj.port <= 65535):
        errors.append("PORT must be between 1 and 65535")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def get_config_summary(
    settings_obj: Settings = settings,
) -> dict[str, str | int | bool]:
    """Get a summary of current configuration for logging/debugging."""
    return {
        "app_name": settings_obj.app_name,
        "version": settings_obj.app_version,
        "environment": settings_obj.environment,
        "debug": settings_obj.debug,
        "log_level": settings_obj.log_level,
        "api_endpoint": f"{settings_obj.host}:{settings_obj.port}",
        "forecast_days": settings_obj.forecast_days,
        "primary_provider_configured": settings_obj.primary_provider_enabled,
    }
