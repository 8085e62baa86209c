"""Stack layout engine for diagram editors.

Lays out the children of a container along one axis and keeps the sibling
order stable while cells are dragged within the stack.

Usage:
    from stacklayout import GraphDocument, Geometry, LayoutConfig, StackLayout

    doc = GraphDocument()
    layer = doc.add_layer()
    doc.insert(layer, "a", Geometry(width=20, height=5))
    doc.insert(layer, "b", Geometry(width=30, height=8))

    StackLayout(doc, LayoutConfig(spacing=5)).execute(layer)
"""

from stacklayout.models import Geometry, LayoutConfig
from stacklayout.core import DocumentModel, GraphDocument, GraphView
from stacklayout.managers import TransactionManager
from stacklayout.layout import StackLayout, get_engine, get_preset, snap_to_grid
from stacklayout.managers.layout_manager import LayoutManager

__version__ = "0.1.0"

__all__ = [
    "Geometry",
    "LayoutConfig",
    "DocumentModel",
    "GraphDocument",
    "GraphView",
    "TransactionManager",
    "StackLayout",
    "LayoutManager",
    "get_engine",
    "get_preset",
    "snap_to_grid",
]
