"""Value objects shared by the layout engine and its host document.

Geometry and LayoutConfig are pydantic models; style exposes the keys and
typed lookups used to read resolved cell styles.
"""

from .geometry import Geometry
from .layout_config import LayoutConfig
from . import style

__all__ = [
    "Geometry",
    "LayoutConfig",
    "style",
]
