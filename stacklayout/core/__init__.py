"""
Core Layer - document capability interface and its in-memory implementation

Modules:
- document: DocumentModel capability set consumed by layouts, document errors
- graph_document: GraphDocument, a NetworkX-backed DocumentModel
"""

from .document import (
    Cell,
    DocumentModel,
    DocumentError,
    CellNotFoundError,
    DuplicateCellError,
)
from .graph_document import (
    GraphDocument,
    GraphView,
)

__all__ = [
    'Cell',
    'DocumentModel',
    'DocumentError',
    'CellNotFoundError',
    'DuplicateCellError',
    'GraphDocument',
    'GraphView',
]
