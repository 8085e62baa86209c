"""Tests for the Geometry value object and grid/rectangle helpers."""

import pytest

from stacklayout.layout.geometry_ops import same_bounds, snap_to_grid
from stacklayout.models.geometry import Geometry


class TestGeometry:
    """Test Geometry copy and comparison semantics."""

    def test_defaults(self):
        geo = Geometry()
        assert geo.to_list() == [0, 0, 0, 0]

    def test_clone_is_independent(self):
        """Mutating a clone leaves the original untouched."""
        original = Geometry(x=1, y=2, width=3, height=4)
        copy = original.clone()
        copy.width = 30

        assert original.width == 3
        assert copy.width == 30

    def test_same_bounds(self):
        geo = Geometry(x=1, y=2, width=3, height=4)
        assert geo.same_bounds(Geometry(x=1, y=2, width=3, height=4))
        assert not geo.same_bounds(Geometry(x=1, y=2, width=3, height=5))
        assert not geo.same_bounds(None)

    def test_trailing_edges(self):
        geo = Geometry(x=10, y=20, width=5, height=7)
        assert geo.right == 15
        assert geo.bottom == 27

    def test_from_list(self):
        geo = Geometry.from_list([1, 2, 3, 4])
        assert (geo.x, geo.y, geo.width, geo.height) == (1, 2, 3, 4)

    def test_from_list_wrong_length(self):
        with pytest.raises(ValueError) as exc_info:
            Geometry.from_list([1, 2])
        assert "[x, y, width, height]" in str(exc_info.value)


class TestSnapToGrid:
    """Test grid snapping."""

    @pytest.mark.parametrize("value", [0, 3, 10, 14, 15, 16, 27.5, 99, 250])
    def test_multiple_of_grid_and_at_least_one_unit(self, value):
        """Snapped values are grid multiples of at least one unit."""
        snapped = snap_to_grid(value, 10)
        assert snapped % 10 == 0
        assert snapped >= 10

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, 10),
            (14, 10),
            (15, 10),    # exactly half rounds down
            (16, 20),
            (27.5, 30),
            (40, 40),
        ],
    )
    def test_rounding(self, value, expected):
        assert snap_to_grid(value, 10) == expected

    @pytest.mark.parametrize("grid_size", [0, -5, None])
    def test_disabled_grid_returns_value(self, grid_size):
        assert snap_to_grid(13.7, grid_size) == 13.7


class TestSameBounds:
    """Test None-safe rectangle equality."""

    def test_equal(self):
        assert same_bounds(Geometry(x=1), Geometry(x=1))

    def test_different(self):
        assert not same_bounds(Geometry(x=1), Geometry(x=2))

    def test_none(self):
        assert same_bounds(None, None)
        assert not same_bounds(Geometry(), None)
        assert not same_bounds(None, Geometry())
