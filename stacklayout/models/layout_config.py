"""Stack layout configuration.

LayoutConfig carries every tunable of a stack layout pass. It is set by the
caller at construction (or by field assignment) and read-only while a pass
runs. Non-positive thresholds disable their feature instead of failing.
"""

import logging
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stacklayout.models import style as st

logger = logging.getLogger(__name__)


class LayoutConfig(BaseModel):
    """Tunables for StackLayout.

    Attributes:
        orientation: Stack axis ("horizontal" stacks along x)
        spacing: Gap between adjacent cells
        x0: Horizontal origin
        y0: Vertical origin
        border: Border added around the stack (also shrinks fill)
        margin_top: Top margin of the child area
        margin_left: Left margin of the child area
        margin_right: Right margin of the child area
        margin_bottom: Bottom margin of the child area
        keep_first_location: Leave the first cell's axis coordinate untouched
        fill: Stretch cells across the cross axis of the parent
        resize_parent: Resize the parent to fit the stack
        resize_parent_max: Only ever grow the parent when resizing
        resize_last: Stretch the last cell to the parent's far edge
        wrap: Line length at which a new row/column starts (None disables)
        border_collapse: Ignore child stroke widths when spacing cells
        allow_gaps: Keep user-made gaps instead of compacting
        grid_size: Grid unit for positions and sizes (0 disables)
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    orientation: Literal["horizontal", "vertical"] = Field(
        default="horizontal", description="Stack axis"
    )
    spacing: float = Field(default=0.0, description="Gap between adjacent cells")
    x0: float = Field(default=0.0, description="Horizontal origin")
    y0: float = Field(default=0.0, description="Vertical origin")
    border: float = Field(default=0.0, description="Border around the stack")
    margin_top: float = Field(default=0.0, description="Top margin")
    margin_left: float = Field(default=0.0, description="Left margin")
    margin_right: float = Field(default=0.0, description="Right margin")
    margin_bottom: float = Field(default=0.0, description="Bottom margin")
    keep_first_location: bool = Field(default=False)
    fill: bool = Field(default=False)
    resize_parent: bool = Field(default=False)
    resize_parent_max: bool = Field(default=False)
    resize_last: bool = Field(default=False)
    wrap: Optional[float] = Field(default=None, description="Wrap threshold")
    border_collapse: bool = Field(default=True)
    allow_gaps: bool = Field(default=False)
    grid_size: float = Field(default=0.0, description="Grid unit (0 disables)")

    @field_validator("wrap")
    @classmethod
    def _disable_non_positive_wrap(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            return None
        return value

    @field_validator("grid_size")
    @classmethod
    def _disable_negative_grid(cls, value: float) -> float:
        return max(value, 0.0)

    @property
    def horizontal(self) -> bool:
        """True when cells stack along x."""
        return self.orientation == "horizontal"

    @classmethod
    def from_style(
        cls,
        style: Optional[Mapping[str, Any]],
        base: Optional["LayoutConfig"] = None,
    ) -> "LayoutConfig":
        """Build a config from a container style.

        Keys missing from the style keep the value of base (or the field
        default), so presets can be refined per cell.

        Args:
            style: Resolved container style
            base: Optional config supplying values for absent keys

        Returns:
            New LayoutConfig
        """
        base = base or cls()
        if not style:
            return base.model_copy()

        wrap = st.get_number(style, st.STYLE_STACK_WRAP, base.wrap or 0)
        config = cls(
            orientation=(
                "horizontal"
                if st.get_bool(style, st.STYLE_HORIZONTAL_STACK, base.horizontal)
                else "vertical"
            ),
            spacing=st.get_number(style, st.STYLE_STACK_SPACING, base.spacing),
            x0=base.x0,
            y0=base.y0,
            border=st.get_number(style, st.STYLE_STACK_BORDER, base.border),
            margin_top=st.get_number(style, st.STYLE_MARGIN_TOP, base.margin_top),
            margin_left=st.get_number(style, st.STYLE_MARGIN_LEFT, base.margin_left),
            margin_right=st.get_number(style, st.STYLE_MARGIN_RIGHT, base.margin_right),
            margin_bottom=st.get_number(style, st.STYLE_MARGIN_BOTTOM, base.margin_bottom),
            keep_first_location=base.keep_first_location,
            fill=st.get_bool(style, st.STYLE_STACK_FILL, base.fill),
            resize_parent=st.get_bool(style, st.STYLE_RESIZE_PARENT, base.resize_parent),
            resize_parent_max=st.get_bool(
                style, st.STYLE_RESIZE_PARENT_MAX, base.resize_parent_max
            ),
            resize_last=st.get_bool(style, st.STYLE_RESIZE_LAST, base.resize_last),
            wrap=wrap,
            border_collapse=base.border_collapse,
            allow_gaps=st.get_bool(style, st.STYLE_ALLOW_GAPS, base.allow_gaps),
            grid_size=st.get_number(style, st.STYLE_STACK_UNIT_SIZE, base.grid_size),
        )
        logger.debug(f"Built stack layout config from style: {config.model_dump()}")
        return config
