import pytest

from pi_clock.domain.errors import ConfigurationError, FetchError, FetchErrorKind, RenderError
from pi_clock.domain.models import ConditionCategory, TemperatureUnits


class TestConditionCategory:
    @pytest.mark.parametrize("condition", ["Rain", "Snow", "Drizzle", "Thunderstorm"])
    def test_precipitation(self, condition):
        assert ConditionCategory(condition).is_precipitation

    @pytest.mark.parametrize("condition", ["Clear", "Clouds", "Fog", "Mist", "Tornado", "Squall"])
    def test_not_precipitation(self, condition):
        assert not ConditionCategory(condition).is_precipitation


class TestTemperatureUnits:
    @pytest.mark.parametrize("raw,char", [("imperial", "F"), ("METRIC", "C"), ("standard", "K")])
    def test_from_string(self, raw, char):
        assert TemperatureUnits.from_string(raw).as_char() == char

    def test_unknown_units(self):
        with pytest.raises(ConfigurationError):
            TemperatureUnits.from_string("kelvin")


class TestErrors:
    def test_fetch_error_message(self):
        e = FetchError(FetchErrorKind.HTTP_STATUS, "bad gateway", status_code=502)
        assert str(e) == "http_status: bad gateway"
        assert e.status_code == 502

    def test_render_error_message(self):
        e = RenderError("console16x2", "write", "broken pipe")
        assert str(e) == "console16x2 write failed: broken pipe"

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
