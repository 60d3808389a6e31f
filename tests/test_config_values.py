"""Tests for adjustment parameters, control specs and presets."""

import json

import numpy as np
import pytest

from tonekit.config import (
    CONFIG,
    PRESETS,
    ControlSpec,
    FilterParameters,
    get_preset,
    load_params_json,
    params_from_dict,
    params_to_dict,
    save_params_json,
)

CONTROL_NAMES = [
    "exposure",
    "contrast",
    "temperature",
    "tint",
    "saturation",
    "highlights",
    "shadows",
    "sepia",
]


class TestControlSpecs:
    """Declared ranges and identity values."""

    def test_pipeline_order(self):
        assert list(CONFIG.get_all_specs()) == CONTROL_NAMES

    @pytest.mark.parametrize("name", [n for n in CONTROL_NAMES if n != "sepia"])
    def test_symmetric_ranges(self, name):
        spec = CONFIG.get_spec(name)

        assert (spec.min_value, spec.max_value) == (-100.0, 100.0)
        assert spec.neutral == 0.0
        assert spec.default == 0.0

    def test_sepia_range(self):
        assert (CONFIG.sepia.min_value, CONFIG.sepia.max_value) == (0.0, 100.0)

    def test_unknown_control(self):
        with pytest.raises(ValueError, match='Unknown control "vignette"'):
            CONFIG.get_spec("vignette")

    def test_validate(self):
        spec = ControlSpec("amount", -1.0, 1.0)

        assert spec.validate(1) == 1.0
        with pytest.raises(ValueError, match=r"amount=2 is outside valid range \[-1, 1\]"):
            spec.validate(2)
        with pytest.raises(TypeError):
            spec.validate("0.5")
        with pytest.raises(TypeError):
            spec.validate(False)

    def test_clamp_and_neutral(self):
        spec = CONFIG.sepia

        assert spec.clamp(-20) == 0.0
        assert spec.clamp(150) == 100.0
        assert spec.is_neutral(0.0)
        assert not spec.is_neutral(1.0)

    def test_validate_numpy_scalars(self):
        spec = CONFIG.exposure

        assert spec.validate(np.int64(10)) == 10.0
        assert type(spec.validate(np.float32(-2.5))) is float
        with pytest.raises(ValueError):
            spec.validate(np.int16(101))

    def test_to_unit(self):
        assert CONFIG.saturation.to_unit(-100) == -1.0
        assert CONFIG.exposure.to_unit(40) == 40.0


class TestFilterParameters:
    """FilterParameters value semantics."""

    def test_defaults_are_identity(self):
        params = FilterParameters()

        assert params.is_neutral()
        assert params.contrast_factor == 1.0
        assert params.sepia_unit == 0.0

    def test_contrast_factor(self):
        assert FilterParameters(contrast=-100).contrast_factor == 0.0
        assert FilterParameters(contrast=100).contrast_factor == 4.0
        assert FilterParameters(contrast=50).contrast_factor == pytest.approx(2.25)

    def test_units(self):
        params = FilterParameters(highlights=50, shadows=-25, saturation=-100, sepia=60)

        assert params.highlights_unit == 0.5
        assert params.shadows_unit == -0.25
        assert params.saturation_unit == -1.0
        assert params.sepia_unit == pytest.approx(0.6)

    def test_frozen(self):
        params = FilterParameters()

        with pytest.raises(AttributeError):
            params.exposure = 10

    def test_equality(self):
        assert FilterParameters(tint=5) == FilterParameters(tint=5.0)
        assert FilterParameters(tint=5) != FilterParameters(tint=-5)

    def test_clamp(self):
        params = FilterParameters(exposure=300, sepia=-10, contrast=-250).clamp()

        assert params == FilterParameters(exposure=100, sepia=0, contrast=-100)

    def test_validate(self):
        params = FilterParameters(exposure=20)

        assert params.validate() is params
        with pytest.raises(ValueError, match="sepia"):
            FilterParameters(sepia=-1).validate()

    def test_replace(self):
        params = FilterParameters(exposure=20).replace(contrast=10)

        assert params == FilterParameters(exposure=20, contrast=10)

    def test_replace_unknown(self):
        with pytest.raises(ValueError, match="Unknown control"):
            FilterParameters().replace(gamma=1.2)

    def test_dict_round_trip(self):
        params = FilterParameters(exposure=12.5, tint=-3, sepia=40)

        assert FilterParameters.from_dict(params.to_dict()) == params
        assert list(params.to_dict()) == CONTROL_NAMES

    def test_from_dict_ignores_unknown_keys(self):
        params = FilterParameters.from_dict({"exposure": "10", "comment": "ignored"})

        assert params == FilterParameters(exposure=10)

    def test_repr_lists_changed_fields(self):
        assert repr(FilterParameters()) == "FilterParameters()"
        assert repr(FilterParameters(exposure=10, sepia=2.5)) == (
            "FilterParameters(exposure=10, sepia=2.5)"
        )


class TestPresets:
    """Preset library and JSON persistence."""

    def test_all_presets_in_range(self):
        for name, preset in PRESETS.items():
            assert preset.validate() is preset, name

    def test_neutral_is_identity(self):
        assert get_preset("neutral").is_neutral()

    def test_lookup_is_case_insensitive(self):
        assert get_preset("Black_And_White") == PRESETS["black_and_white"]
        assert get_preset("black_and_white").saturation == -100

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Unknown preset 'teal'"):
            get_preset("teal")

    def test_params_dict_helpers(self):
        values = get_preset("vintage")

        assert params_from_dict(params_to_dict(values)) == values

    def test_json_round_trip(self, tmp_path):
        path = tmp_path / "look.json"
        values = FilterParameters(exposure=-5, saturation=30, sepia=15)

        save_params_json(values, path)

        assert json.loads(path.read_text())["saturation"] == 30.0
        assert load_params_json(path) == values

    def test_json_partial_file(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"contrast": 25}))

        assert load_params_json(path) == FilterParameters(contrast=25)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
