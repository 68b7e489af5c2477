"""Tests for location models."""

import pytest

from event_weather.models.location import (
    Coordinates,
    LocationCoordinates,
    RegionBounds,
    round_half_away,
)


class TestCoordinates:
    """Tests for the Coordinates model."""

    def test_valid_coordinates(self):
        """Test creating valid coordinates."""
        coords = Coordinates(latitude=59.3293, longitude=18.0686)
        assert coords.latitude == 59.3293
        assert coords.longitude == 18.0686

    def test_invalid_latitude(self):
        """Test that invalid latitude raises error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=91, longitude=0)

        with pytest.raises(ValueError):
            Coordinates(latitude=-91, longitude=0)

    def test_invalid_longitude(self):
        """Test that invalid longitude raises error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=0, longitude=181)

    def test_immutable(self):
        """Coordinates cannot be changed once created."""
        coords = Coordinates(latitude=59.3, longitude=18.1)
        with pytest.raises(ValueError):
            coords.latitude = 60.0

    def test_str_representation(self):
        """Test string representation of coordinates."""
        coords = Coordinates(latitude=59.3293, longitude=18.0686)
        assert str(coords) == "59.3293,18.0686"

    def test_to_tuple(self):
        """Test converting to tuple."""
        coords = Coordinates(latitude=59.3293, longitude=18.0686)
        assert coords.to_tuple() == (59.3293, 18.0686)


class TestGridRounding:
    """Tests for snapping coordinates to the 0.1 degree forecast grid."""

    def test_nearby_points_share_grid_cell(self):
        """Two points in central Stockholm snap to the same cell."""
        a = Coordinates(latitude=59.33, longitude=18.06).snap_to_grid()
        b = Coordinates(latitude=59.34, longitude=18.09).snap_to_grid()
        assert a == b
        assert a.to_tuple() == (59.3, 18.1)

    def test_half_rounds_away_from_zero(self):
        """Exact halves round away from zero in both directions."""
        assert round_half_away(59.35) == 59.4
        assert round_half_away(18.05) == 18.1
        assert round_half_away(-0.05) == -0.1
        assert round_half_away(-10.25) == -10.3

    def test_below_half_rounds_down(self):
        assert round_half_away(59.34999) == 59.3

    def test_grid_points_unchanged(self):
        coords = Coordinates(latitude=59.3, longitude=18.1)
        assert coords.snap_to_grid() == coords


class TestLocationCoordinates:
    """Tests for geocoded coordinates."""

    def test_display_name_prefers_clean_address(self):
        coords = LocationCoordinates(
            latitude=59.33,
            longitude=18.06,
            formatted_address="Drottninggatan 1, 111 51 Stockholm, Sverige",
            clean_address="1, Drottninggatan, Stockholm",
        )
        assert coords.display_name() == "1, Drottninggatan, Stockholm"

    def test_display_name_falls_back_to_formatted(self):
        coords = LocationCoordinates(
            latitude=59.33, longitude=18.06, formatted_address="Stockholm, Sverige"
        )
        assert coords.clean_address is None
        assert coords.display_name() == "Stockholm, Sverige"

    def test_snap_returns_plain_coordinates(self):
        coords = LocationCoordinates(
            latitude=59.33, longitude=18.06, formatted_address="Stockholm"
        )
        snapped = coords.snap_to_grid()
        assert type(snapped) is Coordinates
        assert snapped.to_tuple() == (59.3, 18.1)


class TestRegionBounds:
    """Tests for the supported region rectangle."""

    def test_default_is_sweden(self):
        region = RegionBounds()
        assert region.name == "Sweden"
        assert (region.min_latitude, region.max_latitude) == (55.0, 69.0)
        assert (region.min_longitude, region.max_longitude) == (11.0, 24.0)

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (59.3293, 18.0686),  # Stockholm
            (55.6050, 13.0038),  # Malmö
            (65.5848, 22.1567),  # Luleå
            (55.0, 11.0),  # south-west corner
            (69.0, 24.0),  # north-east corner
        ],
    )
    def test_contains_inside(self, lat, lon):
        assert RegionBounds().contains(Coordinates(latitude=lat, longitude=lon))

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (59.9139, 10.7522),  # Oslo
            (60.1699, 24.9384),  # Helsinki
            (54.99, 13.0),  # just south
            (69.01, 20.0),  # just north
            (40.7128, -74.0060),  # New York
        ],
    )
    def test_contains_outside(self, lat, lon):
        assert not RegionBounds().contains(Coordinates(latitude=lat, longitude=lon))

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError, match="must not exceed"):
            RegionBounds(min_latitude=70.0, max_latitude=55.0)
