"""Layout module for automatic positioning of container children.

This module provides:
- Layout engine abstraction (GraphLayout)
- Stack layout (StackLayout) with drag reordering
- Grid snapping and rectangle helpers
- Named YAML presets for LayoutConfig
"""

from stacklayout.layout.engines.base import GraphLayout
from stacklayout.layout.engines.stack import StackLayout
from stacklayout.layout.engines import ENGINES, get_engine
from stacklayout.layout.geometry_ops import same_bounds, snap_to_grid
from stacklayout.layout.presets import (
    PresetLoadError,
    PresetNotFoundError,
    get_preset,
    load_presets,
)

__all__ = [
    "GraphLayout",
    "StackLayout",
    "ENGINES",
    "get_engine",
    "same_bounds",
    "snap_to_grid",
    "PresetLoadError",
    "PresetNotFoundError",
    "get_preset",
    "load_presets",
]
