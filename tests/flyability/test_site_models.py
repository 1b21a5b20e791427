"""Tests for site models."""
import pytest

from flyability.models.site import (
    Coordinates,
    LaunchDirectionRange,
    ParaglidingSite,
    SiteType,
)


class TestCoordinates:
    """Tests for Coordinates."""

    def test_valid(self):
        """Test construction with valid values."""
        point = Coordinates(47.5, 11.0)
        assert point.latitude == 47.5
        assert point.longitude == 11.0

    @pytest.mark.parametrize("lat,lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)])
    def test_out_of_range(self, lat, lon):
        """Test that out-of-range coordinates are rejected."""
        with pytest.raises(ValueError):
            Coordinates(lat, lon)

    def test_nan_rejected(self):
        """Test that NaN is rejected."""
        with pytest.raises(ValueError):
            Coordinates(float("nan"), 0.0)

    def test_distance_to(self):
        """Test distance between two points."""
        assert Coordinates(47.0, 11.0).distance_to(Coordinates(48.0, 11.0)) == pytest.approx(111.19, abs=0.1)


class TestLaunchDirectionRange:
    """Tests for LaunchDirectionRange."""

    def test_normalizes_degrees(self):
        """Test that bounds are normalized to [0, 360)."""
        launch = LaunchDirectionRange(-20.0, 380.0)
        assert launch.start_degrees == 340.0
        assert launch.stop_degrees == 20.0

    def test_contains_simple(self):
        """Test containment for a non-wrapping arc, edges included."""
        launch = LaunchDirectionRange(200.0, 250.0)
        assert launch.contains(200.0)
        assert launch.contains(225.0)
        assert launch.contains(250.0)
        assert not launch.contains(260.0)

    def test_contains_wrapping(self):
        """Test containment for an arc crossing north."""
        launch = LaunchDirectionRange(340.0, 20.0)
        assert launch.wraps
        assert launch.contains(0.0)
        assert launch.contains(350.0)
        assert launch.contains(15.0)
        assert not launch.contains(180.0)

    def test_min_distance(self):
        """Test distance to the nearest arc edge."""
        launch = LaunchDirectionRange(200.0, 250.0)
        assert launch.min_distance(225.0) == 0.0
        assert launch.min_distance(270.0) == pytest.approx(20.0)
        assert launch.min_distance(180.0) == pytest.approx(20.0)

    def test_from_text(self):
        """Test building ranges from compass text."""
        ranges = LaunchDirectionRange.from_text("SSW-WSW")
        assert ranges == [LaunchDirectionRange(202.5, 247.5)]


class TestParaglidingSite:
    """Tests for ParaglidingSite."""

    def test_defaults(self):
        """Test default site type and empty launch ranges."""
        site = ParaglidingSite(id="s1", name="Test", coordinates=Coordinates(47.0, 11.0))
        assert site.site_type == SiteType.HANG
        assert site.launch_direction_ranges == ()
        assert not site.has_launch_directions

    def test_ranges_stored_as_tuple(self):
        """Test that launch ranges are stored immutably."""
        site = ParaglidingSite(
            id="s1",
            name="Test",
            coordinates=Coordinates(47.0, 11.0),
            launch_direction_ranges=[LaunchDirectionRange(200.0, 250.0)],
        )
        assert isinstance(site.launch_direction_ranges, tuple)
        assert site.has_launch_directions
