"""Layout engines registry.

Available engines:
- stack: horizontal or vertical stack of a container's children
"""

from stacklayout.layout.engines.base import GraphLayout
from stacklayout.layout.engines.stack import StackCursor, StackLayout

# Engine registry
ENGINES = {
    "stack": StackLayout,
}


def get_engine(name: str) -> type:
    """Get layout engine class by name.

    Args:
        name: Engine name ('stack')

    Returns:
        Layout engine class

    Raises:
        ValueError: If engine not found
    """
    if name not in ENGINES:
        raise ValueError(f"Unknown layout engine: {name}. Available: {list(ENGINES.keys())}")
    return ENGINES[name]


__all__ = [
    "GraphLayout",
    "StackCursor",
    "StackLayout",
    "ENGINES",
    "get_engine",
]
