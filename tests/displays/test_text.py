from datetime import datetime, timedelta

import pytest

from factories import NOW, entry, snapshot
from pi_clock.displays.text import (
    date_str,
    high_low_short,
    high_text,
    low_text,
    page_text,
    precipitation_text,
    split_time,
    summarize,
    temp_str,
    time_str,
    truncate_to_characters,
)
from pi_clock.domain.models import ConditionCategory as C
from pi_clock.domain.models import NoChange, Start, Stop, TemperatureUnits
from pi_clock.domain.rotation import Page


class TestTruncate:
    @pytest.mark.parametrize("text,length,expected", [
        ("Thunderstorm", 7, "T'storm"),
        ("Clouds", 7, "Clouds"),
        ("Drizzle", 7, "Drizzle"),
        ("abcd", 3, "a'd"),
        ("abc", 3, "abc"),
        ("", 3, ""),
    ])
    def test_truncate(self, text, length, expected):
        result = truncate_to_characters(text, length)
        assert result == expected
        assert len(result) <= length


class TestTimeFormatting:
    @pytest.mark.parametrize("h,m,digits", [
        (0, 0, [0, 0, 0, 0]),
        (9, 5, [0, 9, 0, 5]),
        (12, 34, [1, 2, 3, 4]),
        (23, 59, [2, 3, 5, 9]),
    ])
    def test_split_time(self, h, m, digits):
        assert split_time(datetime(2026, 1, 1, h, m)) == digits

    @pytest.mark.parametrize("h,m,expected", [(7, 3, "07:03"), (0, 0, "00:00"), (23, 59, "23:59")])
    def test_time_str(self, h, m, expected):
        assert time_str(datetime(2026, 1, 1, h, m)) == expected

    def test_date_str_is_ten_characters(self):
        assert date_str(datetime(2026, 10, 18)) == "Sun Oct 18"
        assert date_str(datetime(2026, 10, 5)) == "Mon Oct 5 "

    @pytest.mark.parametrize("temperature,units,expected", [
        (68.4, TemperatureUnits.IMPERIAL, " 68°F"),
        (-3.6, TemperatureUnits.METRIC, " -4°C"),
        (290.0, TemperatureUnits.STANDARD, "290°K"),
    ])
    def test_temp_str(self, temperature, units, expected):
        assert temp_str(temperature, units) == expected


class TestPrecipitationText:
    at = NOW + timedelta(hours=2)

    @pytest.mark.parametrize("change,long,short", [
        (Start(at=at, kind=C.RAIN), "Rain at 14:00", "Rain@14:00"),
        (Start(at=at, kind=C.THUNDERSTORM), "Thunderstorm at 14:00", "T'rm@14:00"),
        (Stop(at=at, kind=C.SNOW), "Snow ends 14:00", "Dry@14:00"),
        (NoChange(current=None), "No rain all day", "No rain"),
        (NoChange(current=C.DRIZZLE), "Drizzle all day", "D'zzle 24h"),
    ])
    def test_text(self, change, long, short):
        assert precipitation_text(change, NOW) == long
        assert precipitation_text(change, NOW, short=True) == short

    def test_unknown_change(self):
        with pytest.raises(TypeError):
            precipitation_text("rain", NOW)


class TestSummary:
    def test_summarize(self, clear_snapshot):
        summary = summarize(clear_snapshot, NOW)

        assert summary.condition == "Clear"
        assert summary.change == NoChange(current=None)
        assert summary.high_low.high.temperature == 82.0
        assert high_low_short(summary) == "H82 L65"
        assert high_text(summary, NOW) == "High: 82°F at 13:00"
        assert low_text(summary, NOW) == "Low: 65°F at 14:00"

    def test_summary_without_forecast(self):
        summary = summarize(snapshot(C.RAIN), NOW)

        assert summary.high_low is None
        assert high_low_short(summary) == "H-- L--"
        assert high_text(summary, NOW) == "High: --"
        assert low_text(summary, NOW) == "Low: --"

    def test_page_text(self):
        summary = summarize(snapshot(C.THUNDERSTORM, [entry(1, 60.0, C.CLEAR)]), NOW)

        assert page_text(Page.CONDITION, summary, NOW, 10) == "T'storm"
        assert page_text(Page.PRECIPITATION, summary, NOW, 10) == "Dry@13:00"
        assert page_text(Page.HIGH_LOW, summary, NOW, 10) == "H60 L60"
