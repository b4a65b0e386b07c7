from datetime import datetime, timezone

import httpx
import pytest
from conftest import (
    JUNE_11_UTC,
    OWM_FIND_URL,
    OWM_GEOCODE_URL,
    OWM_WEATHER_URL,
    THREE_HOURS,
    forecast_entry,
    make_response,
    mock_http_client,
)

from weatherhub.providers.weather.openweather import (
    OpenWeatherPayload,
    OpenWeatherProvider,
    group_forecast_by_day,
    translate_current,
    translate_location,
)
from weatherhub.utils.exceptions import (
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
    PayloadError,
)

NOW = datetime(2024, 6, 11, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def provider():
    return OpenWeatherProvider(
        api_key="test-api-key",
        base_url="https://api.openweathermap.org/data/2.5/",
        geocoding_url="https://api.openweathermap.org/geo/1.0",
    )


class TestTranslateCurrent:
    """Current conditions normalization"""

    def test_wind_is_converted_to_kmh(self, openweather_current):
        """Test 10 m/s wind and 15 m/s gusts become 36 and 54 km/h"""
        current = translate_current(openweather_current, NOW)

        assert current.wind_speed == pytest.approx(36.0)
        assert current.wind_gust == pytest.approx(54.0)
        assert current.wind_direction == 240

    def test_visibility_is_converted_to_km(self, openweather_current):
        current = translate_current(openweather_current, NOW)

        assert current.visibility == pytest.approx(8.0)

    @pytest.mark.parametrize("visibility", [None, 0])
    def test_missing_visibility_defaults_to_ten_km(
        self, openweather_current, visibility
    ):
        """Test absent or zero visibility is reported as 10 km"""
        openweather_current["visibility"] = visibility

        current = translate_current(openweather_current, NOW)

        assert current.visibility == 10

    def test_missing_gust_is_none(self, openweather_current):
        del openweather_current["wind"]["gust"]

        current = translate_current(openweather_current, NOW)

        assert current.wind_gust is None

    def test_fields_copied_from_payload(self, openweather_current):
        current = translate_current(openweather_current, NOW)

        assert current.temperature == 17.4
        assert current.feels_like == 16.9
        assert current.condition == "Clouds"
        assert current.description == "scattered clouds"
        assert current.icon == "03d"
        assert current.humidity == 62
        assert current.pressure == 1014
        assert current.cloud_cover == 40
        assert current.uv_index == 0
        assert current.dew_point == 0
        assert current.timestamp == NOW.isoformat()


class TestTranslateLocation:
    def test_location_from_payload(self, openweather_current):
        """Test the location carries the UTC offset in local_time only"""
        location = translate_location(openweather_current, NOW)

        assert location.name == "London"
        assert location.country == "GB"
        assert location.latitude == 51.5074
        assert location.longitude == -0.1278
        assert location.timezone == "UTC"
        assert location.local_time == "2024-06-11T13:00:00+01:00"

    def test_missing_offset_is_utc(self, openweather_current):
        del openweather_current["timezone"]

        location = translate_location(openweather_current, NOW)

        assert location.local_time == "2024-06-11T12:00:00+00:00"


class TestGroupForecastByDay:
    """Three-hourly forecast aggregation"""

    def test_entries_grouped_by_utc_date(self, openweather_forecast):
        days = group_forecast_by_day(openweather_forecast["list"])

        assert [day.date for day in days] == ["2024-06-11", "2024-06-12"]
        assert days[0].temperature.min == 12
        assert days[0].temperature.max == 20
        assert days[1].temperature.min == 10
        assert days[1].temperature.max == 11

    def test_full_day_of_entries_collapses_to_one_day(self):
        """Test eight three-hourly entries on one UTC date give a single day"""
        temps = [12, 14, 17, 21, 23, 20, 16, 13]
        pops = [0, 0.1, 0.3, 0.9, 0.5, 0.2, 0, 0]
        entries = [
            forecast_entry(JUNE_11_UTC + i * THREE_HOURS, temp, pop=pop)
            for i, (temp, pop) in enumerate(zip(temps, pops))
        ]

        days = group_forecast_by_day(entries)

        assert len(days) == 1
        assert days[0].date == "2024-06-11"
        assert days[0].temperature.max == 23
        assert days[0].temperature.min == 12
        assert days[0].precipitation.probability == pytest.approx(90)

    def test_late_evening_entry_stays_on_its_utc_day(self):
        """Test 23:00 UTC and 00:00 UTC entries land on different days"""
        entries = [
            forecast_entry(JUNE_11_UTC - 3600, 9),
            forecast_entry(JUNE_11_UTC, 14),
        ]

        days = group_forecast_by_day(entries)

        assert [day.date for day in days] == ["2024-06-10", "2024-06-11"]

    def test_precipitation_uses_max_probability_and_summed_rain(self):
        entries = [
            forecast_entry(JUNE_11_UTC, 15, pop=0.2, rain_3h=0.5),
            forecast_entry(JUNE_11_UTC + THREE_HOURS, 16, pop=0.8, rain_3h=1.25),
            forecast_entry(JUNE_11_UTC + 2 * THREE_HOURS, 17, pop=0.4),
        ]

        day = group_forecast_by_day(entries)[0]

        assert day.precipitation.probability == pytest.approx(80)
        assert day.precipitation.amount == pytest.approx(1.75)

    def test_first_entry_supplies_representative_values(self):
        entries = [
            forecast_entry(
                JUNE_11_UTC,
                15,
                main="Rain",
                description="light rain",
                icon="10n",
                humidity=90,
                wind_speed=2.5,
                wind_deg=90,
            ),
            forecast_entry(JUNE_11_UTC + THREE_HOURS, 20, main="Clear", icon="01d"),
        ]

        day = group_forecast_by_day(entries)[0]

        assert day.condition == "Rain"
        assert day.description == "light rain"
        assert day.icon == "10n"
        assert day.humidity == 90
        assert day.wind_speed == pytest.approx(9.0)
        assert day.wind_direction == 90
        assert day.uv_index == 0
        assert day.sunrise == ""
        assert day.sunset == ""

    def test_at_most_five_days(self):
        entries = [forecast_entry(JUNE_11_UTC + i * 86400, 10 + i) for i in range(7)]

        days = group_forecast_by_day(entries)

        assert len(days) == 5
        assert days[-1].date == "2024-06-15"

    def test_empty_list_gives_empty_forecast(self):
        assert group_forecast_by_day([]) == []


class TestOpenWeatherProvider:
    """HTTP behaviour of the OpenWeatherMap provider"""

    def test_base_urls_are_normalized(self, provider):
        assert provider.base_url == "https://api.openweathermap.org/data/2.5"

    def test_translate_combines_both_payloads(
        self, provider, openweather_current, openweather_forecast
    ):
        payload = OpenWeatherPayload(
            current=openweather_current, forecast=openweather_forecast
        )

        data = provider.translate(payload)

        assert data.location.name == "London"
        assert len(data.forecast) == 2
        assert data.alerts == []

    async def test_unauthorized_raises_invalid_key(self, provider):
        http = mock_http_client(
            {OWM_WEATHER_URL: make_response(OWM_WEATHER_URL, {"cod": 401}, 401)}
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await provider._get_json(http, OWM_WEATHER_URL, {})

        assert exc_info.value.message == "Invalid API key"
        assert exc_info.value.status_code == 401
        assert exc_info.value.provider == "openweathermap"

    async def test_rate_limit_reads_retry_after(self, provider):
        http = mock_http_client(
            {
                OWM_WEATHER_URL: httpx.Response(
                    429,
                    headers={"Retry-After": "30"},
                    request=httpx.Request("GET", OWM_WEATHER_URL),
                )
            }
        )

        with pytest.raises(APIRateLimitError) as exc_info:
            await provider._get_json(http, OWM_WEATHER_URL, {})

        assert exc_info.value.retry_after == 30
        assert "Retry after 30 seconds" in exc_info.value.message

    async def test_server_error_raises_external_error(self, provider):
        http = mock_http_client(
            {OWM_WEATHER_URL: make_response(OWM_WEATHER_URL, {"message": "x"}, 500)}
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await provider._get_json(http, OWM_WEATHER_URL, {})

        assert exc_info.value.status_code == 500
        assert "500" in exc_info.value.message

    async def test_timeout_raises_timeout_error(self, provider):
        http = mock_http_client({OWM_WEATHER_URL: httpx.ReadTimeout("slow")})

        with pytest.raises(APITimeoutError) as exc_info:
            await provider._get_json(http, OWM_WEATHER_URL, {})

        assert exc_info.value.url == OWM_WEATHER_URL

    async def test_invalid_json_raises_payload_error(self, provider):
        http = mock_http_client(
            {
                OWM_WEATHER_URL: httpx.Response(
                    200,
                    content=b"not json",
                    request=httpx.Request("GET", OWM_WEATHER_URL),
                )
            }
        )

        with pytest.raises(PayloadError):
            await provider._get_json(http, OWM_WEATHER_URL, {})

    async def test_geocode_parses_matches(self, provider):
        http = mock_http_client(
            {
                OWM_GEOCODE_URL: [
                    {
                        "name": "Paris",
                        "lat": 48.8566,
                        "lon": 2.3522,
                        "country": "FR",
                        "state": "Ile-de-France",
                    }
                ]
            }
        )

        matches = await provider.geocode(http, "Paris")

        assert len(matches) == 1
        assert matches[0].name == "Paris"
        assert matches[0].country == "FR"
        assert matches[0].region == "Ile-de-France"
        assert matches[0].latitude == 48.8566

    async def test_geocode_rejects_non_list_body(self, provider):
        http = mock_http_client({OWM_GEOCODE_URL: {"message": "bad"}})

        with pytest.raises(PayloadError):
            await provider.geocode(http, "Paris")

    async def test_find_parses_results(self, provider):
        http = mock_http_client(
            {
                OWM_FIND_URL: {
                    "list": [
                        {
                            "name": "Portland",
                            "sys": {"country": "US"},
                            "coord": {"lat": 45.5152, "lon": -122.6784},
                            "population": 652503,
                        }
                    ]
                }
            }
        )

        results = await provider.find(http, "portland", limit=3)

        assert results[0].name == "Portland"
        assert results[0].population == 652503
        assert results[0].flag == "🇺🇸"
        assert http.get.call_args.kwargs["params"]["limit"] == 3

    async def test_find_without_list_returns_empty(self, provider):
        http = mock_http_client({OWM_FIND_URL: {"count": 0}})

        assert await provider.find(http, "nowhere") == []
