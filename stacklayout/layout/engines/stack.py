"""Stack layout engine.

Arranges the children of a container in a horizontal or vertical stack,
with spacing, margins, wrapping into new lines, cross-axis fill, grid
snapping and optional resizing of the parent or the last child. Cells do
not need to be connected.

Writes are change-detecting: a geometry is only written when it differs
from the stored one, so a second pass over an unchanged container
records nothing.

Example:
    layout = StackLayout(document, LayoutConfig(spacing=5))
    layout.execute(container)
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from stacklayout.core.document import Cell, DocumentModel
from stacklayout.layout.engines.base import GraphLayout
from stacklayout.layout.geometry_ops import same_bounds, snap_to_grid
from stacklayout.managers.transaction_manager import TransactionManager
from stacklayout.models import style as st
from stacklayout.models.geometry import Geometry
from stacklayout.models.layout_config import LayoutConfig

logger = logging.getLogger(__name__)


@dataclass
class StackCursor:
    """Running state of one layout pass."""
    x0: float                            # Origin of the current line
    y0: float
    tmp: float = 0.0                     # Largest cross-axis size in the current line
    last: Optional[Geometry] = None      # Previous geometry in the current line
    last_value: float = 0.0              # Trailing edge of the previous cell
    last_child: Optional[Cell] = None


class StackLayout(GraphLayout):
    """Horizontal or vertical stack of the children of a container."""

    def __init__(
        self,
        document: DocumentModel,
        config: Optional[LayoutConfig] = None,
        transactions: Optional[TransactionManager] = None,
    ):
        """Initialize the stack layout.

        Args:
            document: Document whose cells are laid out
            config: Layout tunables (defaults to a horizontal stack without spacing)
            transactions: Batch manager shared with the host
        """
        super().__init__(document, transactions)
        self.config = config or LayoutConfig()

    @property
    def name(self) -> str:
        return "stack"

    def is_horizontal(self) -> bool:
        return self.config.horizontal

    def snap(self, value: float) -> float:
        return snap_to_grid(value, self.config.grid_size)

    # ========================================================================
    # Reordering
    # ========================================================================

    def move_cell(self, cell: Optional[Cell], x: float, y: float) -> None:
        """Move cell to the sibling slot that brackets the drop point.

        Only the child order changes; no geometry is written.

        Args:
            cell: Dragged cell
            x: Screen x of the drop point
            y: Screen y of the drop point
        """
        if cell is None:
            return
        if not self.document.contains(cell):
            logger.debug(f"Cell {cell!r} is not in the document, nothing to move")
            return
        parent = self.document.get_parent(cell)
        if parent is None:
            return

        horizontal = self.is_horizontal()
        value = x if horizontal else y
        pstate = self.document.get_state_origin(parent)

        if pstate is not None:
            value -= pstate[0] if horizontal else pstate[1]

        value /= self.document.get_scale()

        children = self.document.get_children(parent)
        index = len(children)
        last = 0.0

        for i, child in enumerate(children):
            if child == cell:
                continue
            bounds = self.document.get_geometry(child)
            if bounds is None:
                continue

            center = (
                bounds.x + bounds.width / 2 if horizontal else bounds.y + bounds.height / 2
            )
            if last <= value and center > value:
                index = i
                break
            last = center

        current = self.document.get_index(cell)
        index = max(0, index - (1 if index > current else 0))

        if index == current:
            logger.debug(f"Cell {cell!r} keeps index {index} in {parent!r}")
            return

        with self.transactions.batch({"layout": self.name, "operation": "move_cell"}) as txn:
            txn.move_child(parent, cell, index)

    # ========================================================================
    # Cell selection
    # ========================================================================

    def get_layout_cells(self, parent: Cell) -> List[Cell]:
        """Movable, non-ignored children of parent in stack order.

        With allow_gaps the cells are sorted by their axis coordinate
        (stable for ties); cells without geometry go last.
        """
        cells = [
            child
            for child in self.document.get_children(parent)
            if not self.is_vertex_ignored(child) and self.is_vertex_movable(child)
        ]

        if self.config.allow_gaps:
            horizontal = self.is_horizontal()

            def axis_coordinate(cell: Cell) -> float:
                geo = self.document.get_geometry(cell)
                if geo is None:
                    return math.inf
                return geo.x if horizontal else geo.y

            cells.sort(key=axis_coordinate)

        return cells

    # ========================================================================
    # Layout pass
    # ========================================================================

    def execute(self, parent: Optional[Cell]) -> None:
        """Lay out the children of parent in one edit batch.

        Args:
            parent: Container to lay out (None is a no-op)
        """
        if parent is None:
            return
        if not self.document.contains(parent):
            logger.debug(f"Container {parent!r} is not in the document, skipping layout")
            return

        cfg = self.config
        horizontal = self.is_horizontal()
        pgeo = self.get_parent_size(parent)
        fill_value: Optional[float] = None

        if pgeo is not None:
            fill_value = (
                pgeo.height - cfg.margin_top - cfg.margin_bottom
                if horizontal
                else pgeo.width - cfg.margin_left - cfg.margin_right
            )
            fill_value -= 2 * cfg.border

        x0 = cfg.x0 + cfg.border + cfg.margin_left
        y0 = cfg.y0 + cfg.border + cfg.margin_top

        # Swimlane header
        if self.document.is_swimlane(parent):
            style = self.document.get_style(parent)
            start = st.get_number(style, st.STYLE_STARTSIZE, st.DEFAULT_STARTSIZE)
            horz = st.get_bool(style, st.STYLE_HORIZONTAL, True)

            if pgeo is not None:
                start = min(start, pgeo.height if horz else pgeo.width)

            if horizontal == horz and fill_value is not None:
                fill_value -= start

            if horz:
                y0 += start
            else:
                x0 += start

        with self.transactions.batch({"layout": self.name, "parent": parent}):
            cursor = StackCursor(x0=x0, y0=y0)

            for child in self.get_layout_cells(parent):
                self._place_cell(child, cursor, fill_value)

            last = cursor.last
            if (
                cfg.resize_parent
                and pgeo is not None
                and last is not None
                and not self.document.is_collapsed(parent)
            ):
                self.update_parent_geometry(parent, pgeo, last)
            elif (
                cfg.resize_last
                and pgeo is not None
                and last is not None
                and cursor.last_child is not None
            ):
                last = last.clone()
                if horizontal:
                    last.width = (
                        pgeo.width - last.x - cfg.spacing - cfg.margin_right - cfg.margin_left
                    )
                else:
                    last.height = pgeo.height - last.y - cfg.spacing - cfg.margin_bottom

                self.set_child_geometry(cursor.last_child, last)

    def _place_cell(
        self,
        child: Cell,
        cursor: StackCursor,
        fill_value: Optional[float],
    ) -> None:
        """Position and size one cell, advancing cursor."""
        geo = self.document.get_geometry(child)
        if geo is None:
            return

        cfg = self.config
        horizontal = self.is_horizontal()

        if cfg.wrap is not None and cursor.last is not None:
            last = cursor.last
            line_end = (
                last.x + last.width + geo.width
                if horizontal
                else last.y + last.height + geo.height
            )
            if line_end + 2 * cfg.spacing > cfg.wrap:
                cursor.last = None
                if horizontal:
                    cursor.y0 += cursor.tmp + cfg.spacing
                else:
                    cursor.x0 += cursor.tmp + cfg.spacing
                cursor.tmp = 0.0

        cursor.tmp = max(cursor.tmp, geo.height if horizontal else geo.width)
        sw = 0.0

        if not cfg.border_collapse:
            sw = st.get_number(
                self.document.get_style(child), st.STYLE_STROKEWIDTH, st.DEFAULT_STROKEWIDTH
            )
        half_stroke = math.floor(sw / 2)

        if cursor.last is not None:
            temp = cursor.last_value + cfg.spacing + half_stroke

            if horizontal:
                position = max(temp, geo.x) if cfg.allow_gaps else temp
                geo.x = self.snap(position - cfg.margin_left) + cfg.margin_left
            else:
                position = max(temp, geo.y) if cfg.allow_gaps else temp
                geo.y = self.snap(position - cfg.margin_top) + cfg.margin_top
        elif not cfg.keep_first_location:
            if horizontal:
                geo.x = (
                    max(self.snap(geo.x - cfg.margin_left) + cfg.margin_left, cursor.x0)
                    if cfg.allow_gaps and geo.x > cursor.x0
                    else cursor.x0
                )
            else:
                geo.y = (
                    max(self.snap(geo.y - cfg.margin_top) + cfg.margin_top, cursor.y0)
                    if cfg.allow_gaps and geo.y > cursor.y0
                    else cursor.y0
                )

        if horizontal:
            geo.y = cursor.y0
        else:
            geo.x = cursor.x0

        if cfg.fill and fill_value is not None:
            if horizontal:
                geo.height = fill_value
            else:
                geo.width = fill_value

        if horizontal:
            geo.width = self.snap(geo.width)
        else:
            geo.height = self.snap(geo.height)

        self.set_child_geometry(child, geo)
        cursor.last_child = child
        cursor.last = geo
        cursor.last_value = (
            geo.x + geo.width + half_stroke if horizontal else geo.y + geo.height + half_stroke
        )

    # ========================================================================
    # Geometry commit
    # ========================================================================

    def set_child_geometry(self, child: Cell, geo: Geometry) -> bool:
        """Write geo for child unless it equals the stored geometry.

        Returns:
            True if a write was requested
        """
        current = self.document.get_geometry(child)

        if same_bounds(geo, current):
            logger.debug(f"Geometry of {child!r} unchanged, skipping write")
            return False

        with self.transactions.batch() as txn:
            txn.set_geometry(child, geo)
        return True

    def update_parent_geometry(self, parent: Cell, pgeo: Geometry, last: Geometry) -> bool:
        """Resize parent along the stack axis so the stack fits.

        With resize_parent_max the parent only grows.

        Args:
            parent: Container
            pgeo: Current size of parent
            last: Geometry of the last laid out cell

        Returns:
            True if a write was requested
        """
        cfg = self.config
        pgeo2 = pgeo.clone()

        if self.is_horizontal():
            extent = last.x + last.width + cfg.margin_right + cfg.border
            pgeo2.width = max(pgeo2.width, extent) if cfg.resize_parent_max else extent
        else:
            extent = last.y + last.height + cfg.margin_bottom + cfg.border
            pgeo2.height = max(pgeo2.height, extent) if cfg.resize_parent_max else extent

        if same_bounds(pgeo, pgeo2):
            return False

        with self.transactions.batch() as txn:
            txn.set_geometry(parent, pgeo2)
        return True
