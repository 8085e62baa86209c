"""Pure geometry helpers used by the stack layout."""

from typing import Optional

from stacklayout.models.geometry import Geometry


def snap_to_grid(value: float, grid_size: Optional[float]) -> float:
    """Snap a coordinate or length to the grid.

    Values are clamped to at least one grid unit, then rounded to the
    nearest multiple. A remainder of exactly half a unit rounds down.

    Args:
        value: Coordinate or length in model units
        grid_size: Grid unit; None or <= 0 leaves value unchanged

    Returns:
        Snapped value
    """
    if grid_size is None or grid_size <= 0:
        return value

    value = max(value, grid_size)

    if value / grid_size > 1:
        mod = value % grid_size
        value += grid_size - mod if mod > grid_size / 2 else -mod

    return value


def same_bounds(a: Optional[Geometry], b: Optional[Geometry]) -> bool:
    """Field-by-field rectangle equality; None only matches None."""
    if a is None or b is None:
        return a is b
    return a.same_bounds(b)
