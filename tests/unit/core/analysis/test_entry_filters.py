from __future__ import annotations

"""
Unit tests for the entry visibility rules.

Verifies:
1. Precedence: folder-only mode, then extensions, then the glob pattern.
2. Directories are never hidden by extension or pattern rules.
"""

from dirscope.core.analysis.filters import (
    describe_filters,
    is_visible,
    matches_pattern,
    visible_files,
)
from dirscope.domain.tree_models import DirectoryEntry, RenderMode, TraversalConfig


def _file(name: str) -> DirectoryEntry:
    return DirectoryEntry(path=f"/r/{name}", name=name, is_directory=False)


def _dir(name: str) -> DirectoryEntry:
    return DirectoryEntry(path=f"/r/{name}", name=name, is_directory=True)


def test_no_filters_shows_everything():
    cfg = TraversalConfig(root_path="/r")
    assert is_visible(_file("a.txt"), cfg) is True
    assert is_visible(_dir("sub"), cfg) is True


def test_folder_mode_hides_every_file():
    cfg = TraversalConfig(root_path="/r", mode=RenderMode.FOLDERS)
    assert is_visible(_file("a.txt"), cfg) is False
    assert is_visible(_dir("sub"), cfg) is True


def test_extension_whitelist_is_case_insensitive():
    cfg = TraversalConfig(root_path="/r", include_extensions=frozenset({"TXT"}))
    assert cfg.include_extensions == frozenset({".txt"})
    assert is_visible(_file("A.TXT"), cfg) is True
    assert is_visible(_file("b.md"), cfg) is False
    assert is_visible(_file("Makefile"), cfg) is False


def test_directories_ignore_extension_and_pattern_rules():
    cfg = TraversalConfig(
        root_path="/r",
        include_extensions=frozenset({".txt"}),
        search_pattern="*.txt",
    )
    assert is_visible(_dir("docs.d"), cfg) is True


def test_pattern_applies_after_extensions():
    cfg = TraversalConfig(
        root_path="/r",
        include_extensions=frozenset({".py"}),
        search_pattern="test_*",
    )
    assert is_visible(_file("test_core.py"), cfg) is True
    assert is_visible(_file("core.py"), cfg) is False
    assert is_visible(_file("test_notes.txt"), cfg) is False


def test_glob_wildcards():
    assert matches_pattern("a1.log", "a?.log") is True
    assert matches_pattern("a12.log", "a?.log") is False
    assert matches_pattern("anything", "*") is True
    assert matches_pattern("anything", None) is True


def test_visible_files_preserves_order():
    cfg = TraversalConfig(root_path="/r", include_extensions=frozenset({".txt"}))
    files = [_file("z.txt"), _file("m.md"), _file("a.txt")]
    assert [f.name for f in visible_files(files, cfg)] == ["z.txt", "a.txt"]


def test_describe_filters():
    assert describe_filters(TraversalConfig(root_path="/r")) == "(all files)"
    cfg = TraversalConfig(root_path="/r", include_extensions=frozenset({".py", ".md"}), search_pattern="a*")
    assert describe_filters(cfg) == "(filtered by .md, .py; a*)"
