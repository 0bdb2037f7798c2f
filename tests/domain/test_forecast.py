from datetime import timedelta

import pytest

from factories import NOW, entry, snapshot
from pi_clock.domain.errors import ForecastError
from pi_clock.domain.forecast import high_low_temp, next_precipitation_change
from pi_clock.domain.models import ConditionCategory as C
from pi_clock.domain.models import NoChange, Start, Stop


class TestNextPrecipitationChange:
    def test_dry_all_day(self):
        snap = snapshot(C.CLEAR, [entry(h, condition=C.CLOUDS) for h in range(5)])
        assert next_precipitation_change(snap, NOW) == NoChange(current=None)

    def test_rain_starts(self):
        snap = snapshot(C.CLEAR, [entry(1), entry(2, condition=C.RAIN), entry(3, condition=C.SNOW)])
        assert next_precipitation_change(snap, NOW) == Start(at=NOW + timedelta(hours=2), kind=C.RAIN)

    def test_rain_stops(self):
        snap = snapshot(C.RAIN, [entry(1, condition=C.RAIN), entry(2, condition=C.CLOUDS)])
        assert next_precipitation_change(snap, NOW) == Stop(at=NOW + timedelta(hours=2), kind=C.RAIN)

    def test_rain_all_day(self):
        snap = snapshot(C.RAIN, [entry(h, condition=C.RAIN) for h in range(24)])
        assert next_precipitation_change(snap, NOW) == NoChange(current=C.RAIN)

    def test_change_of_type_is_not_a_transition(self):
        """Rain turning to snow keeps reporting rain"""
        snap = snapshot(C.RAIN, [entry(1, condition=C.SNOW), entry(2, condition=C.SNOW)])
        assert next_precipitation_change(snap, NOW) == NoChange(current=C.RAIN)

    def test_stop_after_type_change_reports_original_kind(self):
        snap = snapshot(C.RAIN, [entry(1, condition=C.SNOW), entry(2, condition=C.CLEAR)])
        assert next_precipitation_change(snap, NOW) == Stop(at=NOW + timedelta(hours=2), kind=C.RAIN)

    def test_ignores_past_entries(self):
        snap = snapshot(C.CLEAR, [entry(-1, condition=C.RAIN), entry(1)])
        assert next_precipitation_change(snap, NOW) == NoChange(current=None)

    def test_entry_exactly_at_horizon_counts(self):
        snap = snapshot(C.CLEAR, [entry(24, condition=C.DRIZZLE)])
        assert next_precipitation_change(snap, NOW) == Start(at=NOW + timedelta(hours=24), kind=C.DRIZZLE)

    def test_ignores_entries_past_horizon(self):
        snap = snapshot(C.CLEAR, [entry(25, condition=C.RAIN)])
        assert next_precipitation_change(snap, NOW) == NoChange(current=None)

    def test_empty_forecast(self):
        assert next_precipitation_change(snapshot(C.THUNDERSTORM), NOW) == NoChange(current=C.THUNDERSTORM)

    def test_non_precipitation_current_reports_none(self):
        snap = snapshot(C.FOG, [entry(1, condition=C.MIST)])
        assert next_precipitation_change(snap, NOW) == NoChange(current=None)


class TestHighLowTemp:
    def test_high_and_low(self, clear_snapshot):
        result = high_low_temp(clear_snapshot, NOW)
        assert result.high.temperature == 82.0
        assert result.high.at == NOW + timedelta(hours=1)
        assert result.low.temperature == 65.0
        assert result.low.at == NOW + timedelta(hours=2)

    def test_ties_keep_earliest(self):
        snap = snapshot(hourly=[entry(1, 70.0), entry(2, 70.0), entry(3, 70.0)])
        result = high_low_temp(snap, NOW)
        assert result.high.at == NOW + timedelta(hours=1)
        assert result.low.at == NOW + timedelta(hours=1)

    def test_window_is_half_open(self):
        """Entries before now or at now+24h are excluded"""
        snap = snapshot(hourly=[entry(-1, 100.0), entry(0, 60.0), entry(23, 61.0), entry(24, -20.0)])
        result = high_low_temp(snap, NOW)
        assert result.high.temperature == 61.0
        assert result.low.temperature == 60.0

    def test_single_entry_is_both(self):
        snap = snapshot(hourly=[entry(5, 55.0)])
        result = high_low_temp(snap, NOW)
        assert result.high == result.low

    def test_empty_window_raises(self):
        snap = snapshot(hourly=[entry(-3), entry(30)])
        with pytest.raises(ForecastError):
            high_low_temp(snap, NOW)
