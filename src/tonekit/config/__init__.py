"""Configuration module for tonekit adjustments.

Usage:
    from tonekit.config import CONFIG, FilterParameters
    CONFIG.sepia.max_value  # 100.0
    FilterParameters(exposure=20).is_neutral()  # False
"""

from tonekit.config.operations import ControlSpec
from tonekit.config.params import CONFIG, ParamsConfig
from tonekit.config.presets import (
    BLACK_AND_WHITE,
    COOL,
    DRAMATIC,
    HIGH_KEY,
    LOW_KEY,
    MUTED,
    NEUTRAL,
    PRESETS,
    SEPIA_TONE,
    VINTAGE,
    VIVID,
    WARM,
    get_preset,
    load_params_json,
    params_from_dict,
    params_to_dict,
    save_params_json,
)
from tonekit.config.values import FilterParameters

__all__ = [
    # Core types
    "ControlSpec",
    "ParamsConfig",
    "FilterParameters",
    # Singleton
    "CONFIG",
    # Presets
    "NEUTRAL",
    "WARM",
    "COOL",
    "VIVID",
    "MUTED",
    "DRAMATIC",
    "HIGH_KEY",
    "LOW_KEY",
    "BLACK_AND_WHITE",
    "VINTAGE",
    "SEPIA_TONE",
    "PRESETS",
    # Loading functions
    "get_preset",
    "params_from_dict",
    "params_to_dict",
    "load_params_json",
    "save_params_json",
]
