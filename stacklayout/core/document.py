"""Document capability interface consumed by layout engines.

Layouts never depend on a concrete tree implementation. A host editor
exposes its container/child tree, geometry store, style resolution and view
metrics through DocumentModel; tests use the in-memory GraphDocument.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Optional, Tuple

from stacklayout.models.geometry import Geometry
from stacklayout.models import style as st

Cell = Hashable


class DocumentError(Exception):
    """Base exception for document errors."""
    pass


class CellNotFoundError(DocumentError):
    """Raised when a cell id is not part of the document."""

    def __init__(self, cell: Cell):
        self.cell = cell
        super().__init__(f"Cell {cell!r} not found")


class DuplicateCellError(DocumentError):
    """Raised when inserting a cell id that already exists."""

    def __init__(self, cell: Cell):
        self.cell = cell
        super().__init__(f"Cell {cell!r} already exists")


class DocumentModel(ABC):
    """Capability set a host document offers to layouts.

    Covers tree navigation, geometry read/write, child reordering, style
    lookup, cell predicates and view metrics. Writes are primitive; batching
    them is the job of TransactionManager.
    """

    # ------------------------------------------------------------------
    # Tree navigation
    # ------------------------------------------------------------------

    @abstractmethod
    def contains(self, cell: Cell) -> bool:
        """True if cell is part of the document."""
        ...

    @abstractmethod
    def get_parent(self, cell: Cell) -> Optional[Cell]:
        """Parent of cell, or None for the root."""
        ...

    @abstractmethod
    def get_children(self, cell: Cell) -> List[Cell]:
        """Children of cell in sibling order."""
        ...

    def get_child_count(self, cell: Cell) -> int:
        return len(self.get_children(cell))

    def get_index(self, cell: Cell) -> int:
        """Index of cell among its siblings (-1 without a parent)."""
        parent = self.get_parent(cell)
        if parent is None:
            return -1
        return self.get_children(parent).index(cell)

    # ------------------------------------------------------------------
    # Geometry and order
    # ------------------------------------------------------------------

    @abstractmethod
    def get_geometry(self, cell: Cell) -> Optional[Geometry]:
        """Copy of the stored geometry of cell, or None."""
        ...

    @abstractmethod
    def set_geometry(self, cell: Cell, geometry: Optional[Geometry]) -> None:
        """Store geometry (a copy) as the current geometry of cell."""
        ...

    @abstractmethod
    def add(self, parent: Cell, cell: Cell, index: Optional[int] = None) -> None:
        """Move cell under parent at index (append when index is None)."""
        ...

    # ------------------------------------------------------------------
    # Style and predicates
    # ------------------------------------------------------------------

    @abstractmethod
    def get_style(self, cell: Cell) -> Dict[str, Any]:
        """Resolved key/value style of cell."""
        ...

    def is_layer(self, cell: Cell) -> bool:
        """A layer is a direct child of the root."""
        parent = self.get_parent(cell)
        return parent is not None and self.get_parent(parent) is None

    def is_swimlane(self, cell: Cell) -> bool:
        return self.get_style(cell).get(st.STYLE_SHAPE) == st.STYLE_SWIMLANE

    @abstractmethod
    def is_collapsed(self, cell: Cell) -> bool:
        ...

    def is_movable(self, cell: Cell) -> bool:
        return st.get_bool(self.get_style(cell), st.STYLE_MOVABLE, True)

    @abstractmethod
    def is_layout_ignored(self, cell: Cell) -> bool:
        """True for cells layouts must not touch (edges, hidden cells)."""
        ...

    # ------------------------------------------------------------------
    # View metrics
    # ------------------------------------------------------------------

    def get_scale(self) -> float:
        return 1.0

    def get_state_origin(self, cell: Cell) -> Optional[Tuple[float, float]]:
        """Rendered screen position of cell, or None when not rendered."""
        return None

    def get_viewport_size(self) -> Optional[Tuple[float, float]]:
        """Pixel width and height of the viewport, or None without one."""
        return None

    def is_current_root(self, cell: Cell) -> bool:
        return False
