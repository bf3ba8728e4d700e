from __future__ import annotations

"""
Unit tests for the domain models.
"""

import dataclasses

import pytest

from dirscope.domain.tree_models import (
    DetailFlags,
    DirectoryEntry,
    Frame,
    RenderMode,
    RenderState,
    TraversalConfig,
    normalize_extensions,
)


def test_entry_extension_is_lowercase_with_dot():
    assert DirectoryEntry(path="/r/A.TXT", name="A.TXT", is_directory=False).extension == ".txt"
    assert DirectoryEntry(path="/r/Makefile", name="Makefile", is_directory=False).extension == ""
    assert DirectoryEntry(path="/r/pkg.d", name="pkg.d", is_directory=True).extension == ""


def test_snapshots_are_immutable():
    entry = DirectoryEntry(path="/r/a", name="a", is_directory=False)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.name = "b"  # type: ignore[misc]

    cfg = TraversalConfig(root_path="/r")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.max_depth = 3  # type: ignore[misc]


def test_traversal_config_normalizes_inputs():
    cfg = TraversalConfig(
        root_path="/r",
        include_extensions=frozenset({"PY", ".Md", " "}),
        search_pattern="   ",
        mode="folders",  # type: ignore[arg-type]
    )

    assert cfg.include_extensions == frozenset({".py", ".md"})
    assert cfg.search_pattern is None
    assert cfg.mode is RenderMode.FOLDERS


def test_metadata_requirements_follow_mode_and_flags():
    assert TraversalConfig(root_path="/r").wants_metadata is False
    assert TraversalConfig(root_path="/r", mode=RenderMode.FILES).wants_size is True
    assert TraversalConfig(root_path="/r", detail=DetailFlags(modified_at=True)).wants_metadata is True


def test_normalize_extensions_handles_none():
    assert normalize_extensions(None) == frozenset()


def test_render_state_pops_first_sibling_first():
    state = RenderState()
    frames = [
        Frame(entry=DirectoryEntry(path=f"/r/{n}", name=n, is_directory=False), depth=1, prefix="", is_last=False)
        for n in ("a", "b", "c")
    ]
    state.push_all(frames)

    assert [state.stack.pop().entry.name for _ in range(3)] == ["a", "b", "c"]
