"""Geometry value object for cells laid out by the stack engine.

A Geometry is immutable by convention: callers clone before changing a
geometry that may still be referenced as the current one elsewhere.
Documents store and return copies, so a geometry handed to a write is
never aliased by the store.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Geometry(BaseModel):
    """Axis-aligned bounds of a cell in model units.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent
    """

    x: float = Field(default=0.0, description="Left edge")
    y: float = Field(default=0.0, description="Top edge")
    width: float = Field(default=0.0, description="Horizontal extent")
    height: float = Field(default=0.0, description="Vertical extent")

    def clone(self) -> "Geometry":
        """Return an independent copy of this geometry."""
        return self.model_copy()

    def same_bounds(self, other: Optional["Geometry"]) -> bool:
        """Check whether other has identical x, y, width and height.

        Args:
            other: Geometry to compare against (None never matches)

        Returns:
            True if all four fields are equal
        """
        if other is None:
            return False
        return (
            self.x == other.x
            and self.y == other.y
            and self.width == other.width
            and self.height == other.height
        )

    @property
    def right(self) -> float:
        """Trailing edge along x."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Trailing edge along y."""
        return self.y + self.height

    @classmethod
    def from_list(cls, bounds: List[float]) -> "Geometry":
        """Create Geometry from [x, y, width, height].

        Raises:
            ValueError: If bounds doesn't have exactly 4 elements
        """
        if len(bounds) != 4:
            raise ValueError(f"Bounds must be [x, y, width, height], got {len(bounds)} elements")
        return cls(x=bounds[0], y=bounds[1], width=bounds[2], height=bounds[3])

    def to_list(self) -> List[float]:
        """Convert to list format [x, y, width, height]."""
        return [self.x, self.y, self.width, self.height]
