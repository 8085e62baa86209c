"""Style keys and typed lookups for resolved cell styles.

Styles arrive from the host as flat key/value mappings where values may be
strings ("1", "20") or already-typed numbers and booleans.
"""

from typing import Any, Mapping, Optional

# Keys read from container and child styles
STYLE_SHAPE = "shape"
STYLE_SWIMLANE = "swimlane"
STYLE_STARTSIZE = "startSize"
STYLE_HORIZONTAL = "horizontal"
STYLE_STROKEWIDTH = "strokeWidth"
STYLE_MOVABLE = "movable"
STYLE_CHILD_LAYOUT = "childLayout"

# Stack layout keys
STACK_LAYOUT = "stackLayout"
STYLE_STACK_PRESET = "stackPreset"
STYLE_HORIZONTAL_STACK = "horizontalStack"
STYLE_STACK_SPACING = "stackSpacing"
STYLE_STACK_BORDER = "stackBorder"
STYLE_STACK_FILL = "stackFill"
STYLE_STACK_UNIT_SIZE = "stackUnitSize"
STYLE_STACK_WRAP = "stackWrap"
STYLE_RESIZE_PARENT = "resizeParent"
STYLE_RESIZE_PARENT_MAX = "resizeParentMax"
STYLE_RESIZE_LAST = "resizeLast"
STYLE_ALLOW_GAPS = "allowGaps"
STYLE_MARGIN_TOP = "marginTop"
STYLE_MARGIN_LEFT = "marginLeft"
STYLE_MARGIN_RIGHT = "marginRight"
STYLE_MARGIN_BOTTOM = "marginBottom"

DEFAULT_STARTSIZE = 40.0
DEFAULT_STROKEWIDTH = 1.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_value(style: Optional[Mapping[str, Any]], key: str, default: Any = None) -> Any:
    """Return the raw style value for key, or default when absent."""
    if style is None:
        return default
    value = style.get(key)
    return default if value is None else value


def get_number(style: Optional[Mapping[str, Any]], key: str, default: float = 0.0) -> float:
    """Return the style value for key as a float.

    Unparseable values fall back to default.
    """
    value = get_value(style, key)
    if value is None:
        return float(default)
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def get_bool(style: Optional[Mapping[str, Any]], key: str, default: bool = False) -> bool:
    """Return the style value for key as a boolean ("1"/"true" are truthy)."""
    value = get_value(style, key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().lower() in _TRUE_VALUES
