"""
Weather insights derived from simple threshold rules.

Rules read the current conditions and the first forecast days of a
WeatherData and produce short, actionable advice.
"""

from statistics import mean
from typing import Literal

from pydantic import BaseModel

from weatherhub.models.weather import WeatherData

MAX_INSIGHTS = 6

HOT_TEMPERATURE_C = 25
COLD_TEMPERATURE_C = 5
RAIN_PROBABILITY = 70
WINDY_KMH = 30
HIGH_UV = 6
HIGH_HUMIDITY = 80
POOR_VISIBILITY_KM = 5
TREND_DELTA_C = 5


class Insight(BaseModel):
    title: str
    description: str
    type: Literal["warning", "info", "danger", "success"]
    action: str


def generate_insights(weather: WeatherData) -> list[Insight]:
    """Evaluate every rule in order and keep the first MAX_INSIGHTS hits"""
    current = weather.current
    today = weather.forecast[0] if weather.forecast else None
    insights: list[Insight] = []

    if current.temperature > HOT_TEMPERATURE_C:
        insights.append(
            Insight(
                title="Hot Weather Alert",
                description="Stay hydrated and seek shade during peak hours "
                "(11 AM - 4 PM)",
                type="warning",
                action="Drink water regularly",
            )
        )
    elif current.temperature < COLD_TEMPERATURE_C:
        insights.append(
            Insight(
                title="Cold Weather Advisory",
                description="Dress warmly and protect exposed skin from frostbite",
                type="info",
                action="Layer up and wear gloves",
            )
        )

    if today is not None and today.precipitation.probability > RAIN_PROBABILITY:
        insights.append(
            Insight(
                title="Rain Expected",
                description=(
                    f"{today.precipitation.probability:g}% chance of rain today"
                ),
                type="warning",
                action="Bring an umbrella",
            )
        )

    if current.wind_speed > WINDY_KMH:
        insights.append(
            Insight(
                title="Windy Conditions",
                description="Strong winds may affect outdoor activities and driving",
                type="warning",
                action="Secure loose objects",
            )
        )

    if current.uv_index > HIGH_UV:
        insights.append(
            Insight(
                title="High UV Index",
                description="UV radiation is high. Use sunscreen and protective "
                "clothing",
                type="danger",
                action="Apply SPF 30+ sunscreen",
            )
        )

    if current.humidity > HIGH_HUMIDITY:
        insights.append(
            Insight(
                title="High Humidity",
                description="It may feel warmer than the actual temperature",
                type="info",
                action="Stay cool and dry",
            )
        )

    if current.visibility < POOR_VISIBILITY_KM:
        insights.append(
            Insight(
                title="Poor Visibility",
                description="Fog or haze may affect driving conditions",
                type="warning",
                action="Drive carefully with lights on",
            )
        )

    if len(weather.forecast) > 3:
        upcoming_max = mean(day.temperature.max for day in weather.forecast[1:4])
        if upcoming_max > current.temperature + TREND_DELTA_C:
            insights.append(
                Insight(
                    title="Temperature Rising",
                    description="Expect warmer weather in the coming days",
                    type="info",
                    action="Plan for lighter clothing",
                )
            )
        elif upcoming_max < current.temperature - TREND_DELTA_C:
            insights.append(
                Insight(
                    title="Temperature Dropping",
                    description="Cooler weather ahead, plan accordingly",
                    type="info",
                    action="Prepare warmer clothing",
                )
            )

    if (
        today is not None
        and 15 < current.temperature < 28
        and today.precipitation.probability < 30
        and current.wind_speed < 20
    ):
        insights.append(
            Insight(
                title="Perfect Outdoor Weather",
                description="Great conditions for outdoor activities and exercise",
                type="success",
                action="Enjoy the outdoors!",
            )
        )

    return insights[:MAX_INSIGHTS]
