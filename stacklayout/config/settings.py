"""
Configuration and Feature Flags for the stack layout engine

Flags are controlled via environment variables so a host editor can toggle
behaviour without code changes.

Usage:
    from stacklayout.config.settings import is_enabled

    if is_enabled('viewport_fallback'):
        # Layers without geometry are sized from the viewport
        ...

Environment Variables:
    STACKLAYOUT_VIEWPORT_FALLBACK=true/false - Size geometry-less layers and
                                               the current view root from the
                                               viewport
    STACKLAYOUT_LOG_LEVEL=DEBUG/INFO/...     - Level used by configure_logging()
"""

import logging
import os
from typing import Dict, Optional


# Feature flags with environment variable overrides
FEATURE_FLAGS: Dict[str, bool] = {
    'viewport_fallback': os.getenv('STACKLAYOUT_VIEWPORT_FALLBACK', 'true').lower() == 'true',
}

DEFAULT_LOG_LEVEL = 'WARNING'


def is_enabled(flag: str) -> bool:
    """
    Check if a feature flag is enabled.

    Args:
        flag: Feature flag name (e.g., 'viewport_fallback')

    Returns:
        True if flag is enabled, False otherwise

    Raises:
        KeyError: If flag name is not recognized

    Example:
        >>> is_enabled('viewport_fallback')
        True  # Default
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    return FEATURE_FLAGS[flag]


def get_all_flags() -> Dict[str, bool]:
    """
    Get all feature flags and their current state.

    Returns:
        Dictionary of flag names to boolean values
    """
    return FEATURE_FLAGS.copy()


def set_flag(flag: str, enabled: bool) -> None:
    """
    Programmatically set a feature flag (for testing only).

    Args:
        flag: Feature flag name
        enabled: True to enable, False to disable

    Raises:
        KeyError: If flag name is not recognized
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    FEATURE_FLAGS[flag] = enabled


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for hosts that embed the engine.

    Args:
        level: Level name; falls back to STACKLAYOUT_LOG_LEVEL, then WARNING
    """
    level_name = (level or os.getenv('STACKLAYOUT_LOG_LEVEL', DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING))
