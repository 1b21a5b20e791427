"""Tests for the daylight service."""
from datetime import date, datetime, timedelta, timezone
import numpy as np
import pytest

from flyability.errors import SolarCalculationError
from flyability.models.site import Coordinates
from flyability.models.weather import WeatherData
from flyability.services.daylight_service import (
    AstralSolarCalculator,
    DaylightFilter,
    fallback_window,
)

AMSTERDAM = Coordinates(52.37, 4.89)


def hourly_weather(day: date):
    start = datetime.combine(day, datetime.min.time(), tzinfo=timezone.utc)
    return [WeatherData(timestamp=start + timedelta(hours=h)) for h in range(24)]


class FixedSolarCalculator:
    """Returns preset sunrise/sunset times."""

    def __init__(self, sunrise, sunset):
        self.sunrise = sunrise
        self.sunset = sunset

    def sunrise_sunset(self, coordinates, day):
        return self.sunrise, self.sunset


class FailingSolarCalculator:
    def sunrise_sunset(self, coordinates, day):
        raise SolarCalculationError("no solution")


class TestAstralSolarCalculator:
    """Tests for AstralSolarCalculator."""

    def test_mid_latitude_summer(self):
        """Test sunrise/sunset for mid-latitude location in summer."""
        calculator = AstralSolarCalculator(depression_angle=0)

        sunrise, sunset = calculator.sunrise_sunset(AMSTERDAM, date(2024, 6, 21))

        assert sunrise is not None
        assert sunset is not None
        # Summer in Amsterdam: sunrise around 3:15-3:30 UTC, sunset around 20:00-20:30 UTC
        assert sunrise.hour < 5
        assert sunset.hour > 19

    def test_mid_latitude_winter(self):
        """Test sunrise/sunset for mid-latitude location in winter."""
        calculator = AstralSolarCalculator(depression_angle=0)

        sunrise, sunset = calculator.sunrise_sunset(AMSTERDAM, date(2024, 12, 21))

        # Winter in Amsterdam: sunrise around 7:30-8:00 UTC, sunset around 15:30-16:00 UTC
        assert sunrise.hour >= 7
        assert sunset.hour < 17

    def test_equator_has_twelve_hour_day(self):
        """Test sunrise/sunset at equator (consistent ~12h daylight)."""
        calculator = AstralSolarCalculator(depression_angle=0)

        sunrise, sunset = calculator.sunrise_sunset(Coordinates(-0.18, -78.47), date(2024, 3, 20))

        daylight_hours = (sunset - sunrise).total_seconds() / 3600
        assert 11 < daylight_hours < 13

    def test_civil_twilight_widens_window(self):
        """Test that a 6 degree depression starts earlier and ends later."""
        day = date(2024, 6, 21)
        dawn, dusk = AstralSolarCalculator(depression_angle=6).sunrise_sunset(AMSTERDAM, day)
        sunrise, sunset = AstralSolarCalculator(depression_angle=0).sunrise_sunset(AMSTERDAM, day)

        assert dawn < sunrise
        assert dusk > sunset

    def test_times_are_utc(self):
        """Test that returned times are timezone-aware UTC."""
        sunrise, sunset = AstralSolarCalculator().sunrise_sunset(AMSTERDAM, date(2024, 6, 21))

        assert sunrise.utcoffset() == timedelta(0)
        assert sunset.utcoffset() == timedelta(0)

    def test_polar_day_returns_whole_date(self):
        """Test that midnight sun yields the full UTC day."""
        calculator = AstralSolarCalculator()
        day = date(2024, 6, 21)

        sunrise, sunset = calculator.sunrise_sunset(Coordinates(78.22, 15.65), day)

        assert sunrise == datetime(2024, 6, 21, 0, 0, tzinfo=timezone.utc)
        assert sunset.date() == day
        assert sunset.hour == 23

    def test_polar_night_returns_none(self):
        """Test that polar night yields no daylight."""
        calculator = AstralSolarCalculator()

        assert calculator.sunrise_sunset(Coordinates(78.22, 15.65), date(2024, 12, 21)) == (None, None)

    def test_cache_returns_same_result(self):
        """Test that caching works (same result for repeated calls)."""
        calculator = AstralSolarCalculator()
        day = date(2024, 6, 21)

        assert calculator.sunrise_sunset(AMSTERDAM, day) == calculator.sunrise_sunset(AMSTERDAM, day)

    def test_clear_cache(self):
        """Test that cache can be cleared."""
        calculator = AstralSolarCalculator()
        calculator.sunrise_sunset(AMSTERDAM, date(2024, 6, 21))
        assert len(calculator._cache) > 0

        calculator.clear_cache()
        assert len(calculator._cache) == 0

    def test_cache_is_bounded(self):
        """Test that the oldest entries are evicted beyond the cache size."""
        calculator = AstralSolarCalculator(cache_size=2)
        for day in (date(2024, 6, 20), date(2024, 6, 21), date(2024, 6, 22)):
            calculator.sunrise_sunset(AMSTERDAM, day)

        assert len(calculator._cache) == 2
        assert [key[2] for key in calculator._cache] == [date(2024, 6, 21), date(2024, 6, 22)]

    def test_cache_hit_refreshes_entry(self):
        """Test that a recently used entry survives eviction."""
        calculator = AstralSolarCalculator(cache_size=2)
        calculator.sunrise_sunset(AMSTERDAM, date(2024, 6, 20))
        calculator.sunrise_sunset(AMSTERDAM, date(2024, 6, 21))
        calculator.sunrise_sunset(AMSTERDAM, date(2024, 6, 20))
        calculator.sunrise_sunset(AMSTERDAM, date(2024, 6, 22))

        assert [key[2] for key in calculator._cache] == [date(2024, 6, 20), date(2024, 6, 22)]

    def test_year_boundary(self):
        """Test that year boundaries are handled correctly."""
        calculator = AstralSolarCalculator()

        sunrise_dec, _ = calculator.sunrise_sunset(AMSTERDAM, date(2024, 12, 31))
        sunrise_jan, _ = calculator.sunrise_sunset(AMSTERDAM, date(2025, 1, 1))

        assert abs(sunrise_jan.hour - sunrise_dec.hour) <= 1


class TestDaylightFilter:
    """Tests for DaylightFilter."""

    def test_mask_filters_nighttime(self):
        """Test create_daylight_mask properly filters nighttime hours."""
        daylight = DaylightFilter(solar_calculator=AstralSolarCalculator(depression_angle=0))
        timestamps = np.array([
            np.datetime64(f"2024-06-21T{h:02d}:00:00") for h in range(24)
        ])

        mask = daylight.create_daylight_mask(AMSTERDAM, date(2024, 6, 21), timestamps)

        assert 0 < mask.sum() < len(mask)
        assert mask[12] == True
        # Early morning (00:00-02:00 UTC) is night in Amsterdam
        assert mask[0] == False
        assert mask[2] == False

    def test_filter_keeps_inclusive_window(self):
        """Test that hours at sunrise and sunset are kept."""
        day = date(2024, 6, 21)
        calculator = FixedSolarCalculator(
            datetime(2024, 6, 21, 6, 0, tzinfo=timezone.utc),
            datetime(2024, 6, 21, 18, 0, tzinfo=timezone.utc),
        )
        daylight = DaylightFilter(solar_calculator=calculator)

        kept = daylight.filter_daylight(hourly_weather(day), AMSTERDAM, day)

        assert [w.timestamp.hour for w in kept] == list(range(6, 19))

    def test_filter_preserves_order(self):
        """Test that the daylight subsequence keeps the input order."""
        day = date(2024, 6, 21)
        daylight = DaylightFilter(solar_calculator=AstralSolarCalculator())

        kept = daylight.filter_daylight(hourly_weather(day), AMSTERDAM, day)

        timestamps = [w.timestamp for w in kept]
        assert timestamps == sorted(timestamps)

    def test_polar_night_filters_everything(self):
        """Test that no hours survive when the sun stays down."""
        day = date(2024, 12, 21)
        daylight = DaylightFilter(solar_calculator=FixedSolarCalculator(None, None))

        assert daylight.filter_daylight(hourly_weather(day), AMSTERDAM, day) == []

    def test_window_spanning_utc_midnight(self):
        """Test a sunset before sunrise in UTC keeps both ends of the day."""
        day = date(2024, 6, 21)
        calculator = FixedSolarCalculator(
            datetime(2024, 6, 20, 19, 0, tzinfo=timezone.utc),
            datetime(2024, 6, 21, 10, 0, tzinfo=timezone.utc),
        )
        daylight = DaylightFilter(solar_calculator=calculator)

        kept = daylight.filter_daylight(hourly_weather(day), Coordinates(35.68, 139.69), day)

        assert [w.timestamp.hour for w in kept] == list(range(0, 11))

    def test_failure_falls_back_to_fixed_window(self, caplog):
        """Test that a solar failure uses the 06:00-20:00 UTC window and logs it."""
        day = date(2024, 6, 21)
        daylight = DaylightFilter(solar_calculator=FailingSolarCalculator())

        with caplog.at_level("WARNING"):
            kept = daylight.filter_daylight(hourly_weather(day), AMSTERDAM, day)

        assert [w.timestamp.hour for w in kept] == list(range(6, 21))
        assert "using fixed window" in caplog.text

    def test_empty_input(self):
        """Test that no weather yields no daylight hours."""
        assert DaylightFilter().filter_daylight([], AMSTERDAM, date(2024, 6, 21)) == []

    def test_fallback_window_bounds(self):
        """Test the fixed fallback window."""
        start, end = fallback_window(date(2024, 6, 21))

        assert start == datetime(2024, 6, 21, 6, 0, tzinfo=timezone.utc)
        assert end == datetime(2024, 6, 21, 20, 0, tzinfo=timezone.utc)
