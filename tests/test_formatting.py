import pytest

from weatherhub.utils.formatting import (
    format_pressure,
    format_temperature,
    format_wind_speed,
    round_half_up,
    uv_index_level,
    wind_direction_to_compass,
)


class TestRounding:
    @pytest.mark.parametrize(
        "value, expected", [(22.5, 23), (22.4, 22), (-0.5, 0), (-1.5, -1), (0, 0)]
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestFormatters:
    def test_temperature(self):
        assert format_temperature(18.4) == "18°C"
        assert format_temperature(20, "F") == "68°F"

    def test_wind_speed(self):
        assert format_wind_speed(36) == "36 km/h"
        assert format_wind_speed(100, "mph") == "62 mph"

    def test_pressure(self):
        assert format_pressure(1013.25) == "1013 hPa"
        assert format_pressure(1013.25, "inHg") == "29.92 inHg"

    @pytest.mark.parametrize(
        "degrees, expected",
        [(0, "N"), (11.25, "NNE"), (90, "E"), (225, "SW"), (300, "WNW"), (359, "N")],
    )
    def test_wind_direction_to_compass(self, degrees, expected):
        assert wind_direction_to_compass(degrees) == expected

    @pytest.mark.parametrize(
        "uv, expected",
        [
            (0, "Low"),
            (2, "Low"),
            (3, "Moderate"),
            (6, "High"),
            (8, "Very High"),
            (11, "Extreme"),
        ],
    )
    def test_uv_index_level(self, uv, expected):
        assert uv_index_level(uv) == expected
