from __future__ import annotations

"""
Unit tests for configuration validation and TraversalConfig building.
"""

import os

import pytest

from dirscope.core.validator import build_traversal_config, validate_config
from dirscope.domain.tree_models import ErrorPolicy, RenderMode


def test_defaults_pass_without_warnings():
    clean, warnings = validate_config({})

    assert warnings == []
    assert clean["max_depth"] == -1
    assert clean["mode"] == "full"
    assert clean["root_path"] == os.path.abspath(os.getcwd())


def test_non_dict_falls_back_to_defaults():
    clean, warnings = validate_config(["not", "a", "dict"])
    assert clean["mode"] == "full"
    assert warnings

    with pytest.raises(TypeError):
        validate_config("bad", strict=True)


def test_extensions_are_normalized():
    clean, warnings = validate_config({"extensions": "PY, .Md,,py"})

    assert clean["extensions"] == [".py", ".md"]
    assert any("normalized" in w for w in warnings)


def test_bool_and_depth_coercion():
    clean, warnings = validate_config({"show_size": "yes", "max_depth": "2"})

    assert clean["show_size"] is True
    assert clean["max_depth"] == 2
    assert len(warnings) == 2


def test_invalid_depth_and_mode_fall_back():
    clean, warnings = validate_config({"max_depth": -5, "mode": "sideways"})

    assert clean["max_depth"] == -1
    assert clean["mode"] == "full"
    assert len(warnings) == 2


def test_strict_mode_raises_on_bad_values():
    with pytest.raises(ValueError):
        validate_config({"mode": "sideways"}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"show_size": "yes"}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"extensions": ["py"]}, strict=True)


def test_build_traversal_config(tmp_path):
    clean, _ = validate_config({
        "root_path": str(tmp_path),
        "mode": "FILES",
        "max_depth": 3,
        "extensions": [".txt"],
        "pattern": "  a*  ",
        "error_policy": "raise",
    })
    cfg = build_traversal_config(clean)

    assert cfg.mode is RenderMode.FILES
    assert cfg.max_depth == 3
    assert cfg.include_extensions == frozenset({".txt"})
    assert cfg.search_pattern == "a*"
    assert clean["error_policy"] == ErrorPolicy.RAISE.value


def test_detailed_mode_enables_both_details_by_default(tmp_path):
    clean, _ = validate_config({"root_path": str(tmp_path), "mode": "detailed"})
    cfg = build_traversal_config(clean)
    assert cfg.detail.size and cfg.detail.modified_at

    clean, _ = validate_config({"root_path": str(tmp_path), "mode": "detailed", "show_modified": True})
    cfg = build_traversal_config(clean)
    assert not cfg.detail.size and cfg.detail.modified_at
