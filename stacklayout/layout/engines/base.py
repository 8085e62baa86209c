"""Base layout engine.

Defines the interface that all layout engines must implement and the
helpers they share: cell predicates and parent sizing.
"""

from abc import ABC, abstractmethod
from typing import Optional

from stacklayout.config.settings import is_enabled
from stacklayout.core.document import Cell, DocumentModel
from stacklayout.managers.transaction_manager import TransactionManager
from stacklayout.models.geometry import Geometry


class GraphLayout(ABC):
    """Abstract base class for layout engines.

    Layout engines arrange the children of a container through an injected
    DocumentModel. All writes of one pass go through a single edit batch of
    the engine's TransactionManager.
    """

    def __init__(
        self,
        document: DocumentModel,
        transactions: Optional[TransactionManager] = None,
    ):
        """Initialize the engine.

        Args:
            document: Document whose cells are laid out
            transactions: Batch manager shared with the host (created if not provided)
        """
        self.document = document
        self.transactions = transactions or TransactionManager(document)

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name (e.g., 'stack')."""
        ...

    @abstractmethod
    def execute(self, parent: Optional[Cell]) -> None:
        """Lay out the children of parent."""
        ...

    def move_cell(self, cell: Optional[Cell], x: float, y: float) -> None:
        """Notified when cell is dragged to the screen point (x, y).

        Engines without drag semantics ignore the notification.
        """
        return None

    def is_vertex_ignored(self, cell: Cell) -> bool:
        return self.document.is_layout_ignored(cell)

    def is_vertex_movable(self, cell: Cell) -> bool:
        return self.document.is_movable(cell)

    def get_parent_size(self, parent: Cell) -> Optional[Geometry]:
        """Size available to the children of parent.

        A layer without geometry, or the cell the view is drilled into, is
        sized from the viewport (one pixel smaller on each axis).
        """
        pgeo = self.document.get_geometry(parent)
        viewport = self.document.get_viewport_size()

        if (
            viewport is not None
            and is_enabled('viewport_fallback')
            and (
                (pgeo is None and self.document.is_layer(parent))
                or self.document.is_current_root(parent)
            )
        ):
            width, height = viewport
            pgeo = Geometry(x=0, y=0, width=width - 1, height=height - 1)

        return pgeo
