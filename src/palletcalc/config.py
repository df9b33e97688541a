from __future__ import annotations

import copy
import logging
import os
from typing import Any, Callable, Dict

import yaml

from .models import PalletEnvelope
from .units import parse_float, parse_length

logger = logging.getLogger(__name__)

SETTINGS_ENV = "PALLETCALC_SETTINGS"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "pallet_presets": {
        "48x40": {"label": '48" x 40"', "width": 48.0, "depth": 40.0, "height": 5.5},
        "48x48": {"label": '48" x 48"', "width": 48.0, "depth": 48.0, "height": 5.5},
        "48x80": {"label": '48" x 80"', "width": 48.0, "depth": 80.0, "height": 5.5},
    },
    "default_pallet": "48x40",
    "default_max_height": 72.0,
    "debounce_seconds": 0.3,
}

_PRESET_DIMENSIONS = ("width", "depth", "height")


def settings_path() -> str:
    env_path = os.getenv(SETTINGS_ENV)
    if env_path:
        return os.path.abspath(os.path.expanduser(env_path))
    return os.path.join(os.path.dirname(__file__), "settings.yaml")


def _to_float(value: Any, parse: Callable[[str], float] = parse_float) -> float:
    if isinstance(value, str):
        return parse(value)
    return float(value)


def _parse_presets(raw: Any) -> Dict[str, Dict[str, Any]]:
    presets: Dict[str, Dict[str, Any]] = {}
    if not isinstance(raw, dict):
        return presets
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            continue
        try:
            dims = {key: _to_float(entry[key], parse_length) for key in _PRESET_DIMENSIONS}
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed pallet preset %r", name)
            continue
        dims["label"] = str(entry.get("label", name))
        presets[str(name)] = dims
    return presets


def load_settings(path: str | None = None) -> Dict[str, Any]:
    """Read settings from YAML, falling back to defaults per key."""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    path = path or settings_path()
    if not os.path.exists(path):
        return settings
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("Could not read settings from %s, using defaults", path, exc_info=True)
        return settings
    if not isinstance(loaded, dict):
        return settings

    presets = _parse_presets(loaded.get("pallet_presets"))
    if presets:
        settings["pallet_presets"] = presets
    if "default_pallet" in loaded:
        settings["default_pallet"] = str(loaded["default_pallet"])
    for key, parse in (("default_max_height", parse_length), ("debounce_seconds", parse_float)):
        if key not in loaded:
            continue
        try:
            settings[key] = _to_float(loaded[key], parse)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s=%r in %s", key, loaded[key], path)
    return settings


def pallet_from_preset(
    name: str | None = None,
    max_height: float | None = None,
    settings: Dict[str, Any] | None = None,
) -> PalletEnvelope:
    settings = settings if settings is not None else load_settings()
    name = name or settings["default_pallet"]
    preset = settings["pallet_presets"][name]
    return PalletEnvelope(
        width=preset["width"],
        depth=preset["depth"],
        height=preset["height"],
        max_height=settings["default_max_height"] if max_height is None else max_height,
        type=name,
    )
