"""Named stack layout presets loaded from YAML.

The packaged presets.yaml holds a `presets` mapping of name -> LayoutConfig
fields. Hosts may point load_presets() at their own file.

Usage:
    from stacklayout.layout.presets import get_preset

    config = get_preset("list")
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import ValidationError

from stacklayout.models.layout_config import LayoutConfig

logger = logging.getLogger(__name__)

DEFAULT_PRESETS_PATH = Path(__file__).parent / "presets.yaml"

_cache: Dict[str, Dict[str, LayoutConfig]] = {}


class PresetNotFoundError(Exception):
    """Raised when a preset name is not defined."""

    def __init__(self, name: str, available: list):
        self.name = name
        self.available = available
        super().__init__(f"Unknown layout preset: '{name}'. Available presets: {', '.join(available)}")


class PresetLoadError(Exception):
    """Raised when a preset file cannot be parsed."""
    pass


def load_presets(path: Optional[Union[str, Path]] = None) -> Dict[str, LayoutConfig]:
    """Load presets from a YAML file.

    Args:
        path: Preset file (defaults to the packaged presets.yaml)

    Returns:
        Mapping of preset name to LayoutConfig

    Raises:
        FileNotFoundError: If the file does not exist
        PresetLoadError: If the file is not valid YAML or a preset is invalid
    """
    preset_path = Path(path) if path is not None else DEFAULT_PRESETS_PATH
    key = str(preset_path.resolve())
    if key in _cache:
        return {name: config.model_copy() for name, config in _cache[key].items()}

    if not preset_path.exists():
        raise FileNotFoundError(f"Preset file not found: {preset_path}")

    with open(preset_path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise PresetLoadError(f"Invalid YAML in {preset_path}: {e}") from e

    raw_presets = data.get('presets', {}) if isinstance(data, dict) else None
    if not isinstance(raw_presets, dict):
        raise PresetLoadError(f"{preset_path} must contain a 'presets' mapping")

    presets: Dict[str, LayoutConfig] = {}
    for name, fields in raw_presets.items():
        try:
            presets[name] = LayoutConfig(**(fields or {}))
        except (TypeError, ValidationError) as e:
            raise PresetLoadError(f"Invalid preset '{name}' in {preset_path}: {e}") from e

    _cache[key] = presets
    logger.debug(f"Loaded {len(presets)} layout presets from {preset_path}")
    return {name: config.model_copy() for name, config in presets.items()}


def get_preset(name: str, path: Optional[Union[str, Path]] = None) -> LayoutConfig:
    """Return a fresh copy of the named preset.

    Raises:
        PresetNotFoundError: If name is not defined
    """
    presets = load_presets(path)
    if name not in presets:
        raise PresetNotFoundError(name, sorted(presets))
    return presets[name]


def clear_cache() -> None:
    """Forget loaded preset files (for testing or after editing a file)."""
    _cache.clear()
