"""In-memory document backed by a NetworkX directed graph.

The container/child tree is stored as parent -> child edges; the adjacency
order of a node's successors is its sibling order. Node attributes hold the
geometry, style and state flags of each cell.

Usage:
    from stacklayout.core.graph_document import GraphDocument

    doc = GraphDocument()
    layer = doc.add_layer()
    lane = doc.insert(layer, "lane", Geometry(x=0, y=0, width=200, height=100))
    doc.insert(lane, "a", Geometry(width=20, height=10))
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from stacklayout.core.document import (
    Cell,
    CellNotFoundError,
    DocumentError,
    DocumentModel,
    DuplicateCellError,
)
from stacklayout.models.geometry import Geometry

logger = logging.getLogger(__name__)


@dataclass
class GraphView:
    """View metrics of the editor showing a document."""
    scale: float = 1.0
    translate: Tuple[float, float] = (0.0, 0.0)
    viewport_size: Optional[Tuple[float, float]] = None   # Pixel size of the viewport
    current_root: Optional[Cell] = None                   # Cell the view is drilled into


class GraphDocument(DocumentModel):
    """Thread-safe in-memory implementation of DocumentModel.

    Geometries are copied on the way in and on the way out, so no caller
    ever holds a reference to the stored value.
    """

    def __init__(self, view: Optional[GraphView] = None, root: Cell = "0"):
        """Initialize an empty document with a root cell.

        Args:
            view: Optional view metrics (defaults to scale 1, no viewport)
            root: Id of the root cell
        """
        self.graph = nx.DiGraph()
        self.root = root
        self.view = view or GraphView()
        self._lock = threading.RLock()
        self._add_node(root, None, None, collapsed=False, visible=True, edge=False)

    # ========================================================================
    # Construction
    # ========================================================================

    def insert(
        self,
        parent: Cell,
        cell: Cell,
        geometry: Optional[Geometry] = None,
        style: Optional[Dict[str, Any]] = None,
        index: Optional[int] = None,
        collapsed: bool = False,
        visible: bool = True,
        edge: bool = False,
    ) -> Cell:
        """Insert a new cell under parent.

        Args:
            parent: Existing parent cell
            cell: Id of the new cell
            geometry: Optional geometry (copied)
            style: Optional resolved style (copied)
            index: Sibling index (append when None)
            collapsed: Collapsed state of a container
            visible: Hidden cells are ignored by layouts
            edge: Edges are ignored by layouts

        Returns:
            The inserted cell id

        Raises:
            CellNotFoundError: If parent does not exist
            DuplicateCellError: If cell already exists
        """
        with self._lock:
            self._require(parent)
            if cell in self.graph:
                raise DuplicateCellError(cell)

            self._add_node(cell, geometry, style, collapsed=collapsed, visible=visible, edge=edge)
            self._attach(parent, cell, index)
            logger.debug(f"Inserted cell {cell!r} under {parent!r}")
            return cell

    def add_layer(self, cell: Cell = "1", style: Optional[Dict[str, Any]] = None) -> Cell:
        """Insert a layer (geometry-less child of the root)."""
        return self.insert(self.root, cell, style=style)

    def set_style(self, cell: Cell, style: Dict[str, Any]) -> None:
        with self._lock:
            self._require(cell)
            self.graph.nodes[cell]["style"] = dict(style)

    def set_collapsed(self, cell: Cell, collapsed: bool) -> None:
        with self._lock:
            self._require(cell)
            self.graph.nodes[cell]["collapsed"] = collapsed

    # ========================================================================
    # DocumentModel: tree navigation
    # ========================================================================

    def contains(self, cell: Cell) -> bool:
        with self._lock:
            return cell in self.graph

    def get_parent(self, cell: Cell) -> Optional[Cell]:
        with self._lock:
            self._require(cell)
            parents = list(self.graph.predecessors(cell))
            return parents[0] if parents else None

    def get_children(self, cell: Cell) -> List[Cell]:
        with self._lock:
            self._require(cell)
            return list(self.graph.successors(cell))

    def get_depth(self, cell: Cell) -> int:
        """Number of edges between the root and cell."""
        with self._lock:
            self._require(cell)
            return nx.shortest_path_length(self.graph, self.root, cell)

    # ========================================================================
    # DocumentModel: geometry and order
    # ========================================================================

    def get_geometry(self, cell: Cell) -> Optional[Geometry]:
        with self._lock:
            self._require(cell)
            geometry = self.graph.nodes[cell]["geometry"]
            return geometry.clone() if geometry is not None else None

    def set_geometry(self, cell: Cell, geometry: Optional[Geometry]) -> None:
        with self._lock:
            self._require(cell)
            self.graph.nodes[cell]["geometry"] = geometry.clone() if geometry is not None else None

    def add(self, parent: Cell, cell: Cell, index: Optional[int] = None) -> None:
        """Move an existing cell under parent at index.

        Raises:
            CellNotFoundError: If parent or cell does not exist
            DocumentError: If parent is cell itself or one of its descendants
        """
        with self._lock:
            self._require(parent)
            self._require(cell)
            if nx.has_path(self.graph, cell, parent):
                raise DocumentError(f"Cannot move {cell!r} into its own subtree {parent!r}")

            previous = self.get_parent(cell)
            if previous is not None:
                self.graph.remove_edge(previous, cell)
            self._attach(parent, cell, index)

    # ========================================================================
    # DocumentModel: style and predicates
    # ========================================================================

    def get_style(self, cell: Cell) -> Dict[str, Any]:
        with self._lock:
            self._require(cell)
            return dict(self.graph.nodes[cell]["style"])

    def is_collapsed(self, cell: Cell) -> bool:
        with self._lock:
            self._require(cell)
            return self.graph.nodes[cell]["collapsed"]

    def is_layout_ignored(self, cell: Cell) -> bool:
        with self._lock:
            self._require(cell)
            data = self.graph.nodes[cell]
            return data["edge"] or not data["visible"]

    # ========================================================================
    # DocumentModel: view metrics
    # ========================================================================

    def get_scale(self) -> float:
        return self.view.scale

    def get_state_origin(self, cell: Cell) -> Optional[Tuple[float, float]]:
        """Screen position of cell: (absolute origin + translate) * scale."""
        with self._lock:
            if cell not in self.graph or cell == self.root:
                return None

            x, y = 0.0, 0.0
            current: Optional[Cell] = cell
            while current is not None and current != self.root:
                geometry = self.graph.nodes[current]["geometry"]
                if geometry is not None:
                    x += geometry.x
                    y += geometry.y
                current = self.get_parent(current)

            tx, ty = self.view.translate
            return (x + tx) * self.view.scale, (y + ty) * self.view.scale

    def get_viewport_size(self) -> Optional[Tuple[float, float]]:
        return self.view.viewport_size

    def is_current_root(self, cell: Cell) -> bool:
        return self.view.current_root is not None and cell == self.view.current_root

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def _add_node(
        self,
        cell: Cell,
        geometry: Optional[Geometry],
        style: Optional[Dict[str, Any]],
        collapsed: bool,
        visible: bool,
        edge: bool,
    ) -> None:
        self.graph.add_node(
            cell,
            geometry=geometry.clone() if geometry is not None else None,
            style=dict(style or {}),
            collapsed=collapsed,
            visible=visible,
            edge=edge,
        )

    def _attach(self, parent: Cell, cell: Cell, index: Optional[int]) -> None:
        """Rebuild parent's out-edges so cell sits at index."""
        siblings = [c for c in self.graph.successors(parent) if c != cell]
        if index is None or index > len(siblings):
            index = len(siblings)
        siblings.insert(max(0, index), cell)

        self.graph.remove_edges_from(list(self.graph.out_edges(parent)))
        self.graph.add_edges_from((parent, child) for child in siblings)

    def _require(self, cell: Cell) -> None:
        if cell not in self.graph:
            raise CellNotFoundError(cell)

    def __contains__(self, cell: Cell) -> bool:
        return self.contains(cell)

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self.graph.nodes))
