"""Preset library for adjustment parameters.

Provides pre-configured FilterParameters for common looks, with support
for loading from and saving to dict and JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tonekit.config.values import FilterParameters

logger = logging.getLogger(__name__)

# ============================================================================
# Presets
# ============================================================================

NEUTRAL = FilterParameters()

WARM = FilterParameters(temperature=35, saturation=10)

COOL = FilterParameters(temperature=-35, tint=-5)

VIVID = FilterParameters(contrast=10, saturation=35, shadows=5)

MUTED = FilterParameters(contrast=-10, saturation=-35)

DRAMATIC = FilterParameters(contrast=25, highlights=-10, shadows=-10, saturation=-10)

HIGH_KEY = FilterParameters(exposure=25, contrast=-10, shadows=15)

LOW_KEY = FilterParameters(exposure=-20, contrast=15, highlights=-15)

BLACK_AND_WHITE = FilterParameters(saturation=-100, contrast=10)

VINTAGE = FilterParameters(sepia=60, contrast=-10, saturation=-20, temperature=10)

SEPIA_TONE = FilterParameters(sepia=100)

PRESETS: dict[str, FilterParameters] = {
    "neutral": NEUTRAL,
    "warm": WARM,
    "cool": COOL,
    "vivid": VIVID,
    "muted": MUTED,
    "dramatic": DRAMATIC,
    "high_key": HIGH_KEY,
    "low_key": LOW_KEY,
    "black_and_white": BLACK_AND_WHITE,
    "vintage": VINTAGE,
    "sepia_tone": SEPIA_TONE,
}


def get_preset(name: str) -> FilterParameters:
    """Get preset by name.

    :param name: Preset name (case-insensitive)
    :returns: FilterParameters preset
    :raises KeyError: If preset not found
    """
    name_lower = name.lower()
    if name_lower not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[name_lower]


# ============================================================================
# Dict/JSON Loading and Saving
# ============================================================================


def params_from_dict(d: dict) -> FilterParameters:
    """Create FilterParameters from a dictionary.

    Unknown keys are ignored; missing keys default to 0.

    Example:
        >>> params_from_dict({"exposure": 20, "sepia": 50})
        FilterParameters(exposure=20, sepia=50)
    """
    return FilterParameters.from_dict(d)


def params_to_dict(values: FilterParameters) -> dict:
    return values.to_dict()


def load_params_json(path: str | Path) -> FilterParameters:
    """Load FilterParameters from a JSON file.

    :param path: Path to JSON file
    :returns: FilterParameters instance
    """
    with open(path) as f:
        d = json.load(f)
    logger.debug("[presets] Loaded parameters from %s", path)
    return params_from_dict(d)


def save_params_json(values: FilterParameters, path: str | Path) -> None:
    """Save FilterParameters to a JSON file.

    :param values: FilterParameters instance
    :param path: Output path
    """
    with open(path, "w") as f:
        json.dump(params_to_dict(values), f, indent=2)
    logger.debug("[presets] Saved parameters to %s", path)
