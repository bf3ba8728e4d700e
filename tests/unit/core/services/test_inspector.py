from __future__ import annotations

"""
Unit tests for the metadata inspector views.
"""

import errno
import os

import pytest

from dirscope.core.services.inspector import describe_file, list_files, search_files
from dirscope.domain.errors import (
    DirscopeError,
    NotADirectoryPathError,
    PathNotFoundError,
    ScanAccessError,
)
from dirscope.infra import fs


def test_list_files_returns_sorted_top_level_files_with_sizes(flat_tree):
    files = list_files(str(flat_tree))

    assert [(f.name, f.size) for f in files] == [("a.txt", 10), ("b.md", 2048)]


def test_list_files_applies_pattern(flat_tree):
    assert [f.name for f in list_files(str(flat_tree), "*.md")] == ["b.md"]


def test_list_files_requires_directory(flat_tree):
    with pytest.raises(NotADirectoryPathError):
        list_files(str(flat_tree / "a.txt"))


def test_search_files_recursive(nested_tree):
    matches = search_files(str(nested_tree), "*.py")

    assert matches == sorted([
        os.path.join(str(nested_tree), "setup.py"),
        os.path.join(str(nested_tree), "src", "main.py"),
        os.path.join(str(nested_tree), "src", "pkg", "core.py"),
    ])


def test_search_files_top_level_only(nested_tree):
    assert search_files(str(nested_tree), "*.py", recursive=False) == [
        os.path.join(str(nested_tree), "setup.py")
    ]


def test_search_files_no_match(nested_tree):
    assert search_files(str(nested_tree), "*.rs") == []


def test_describe_file(flat_tree):
    details = describe_file(str(flat_tree / "b.md"))

    assert details.name == "b.md"
    assert details.size == 2048
    assert details.extension == ".md"
    assert details.full_path == str(flat_tree / "b.md")


def test_describe_file_errors(flat_tree):
    with pytest.raises(PathNotFoundError):
        describe_file(str(flat_tree / "missing.txt"))
    with pytest.raises(DirscopeError):
        describe_file(str(flat_tree / "sub"))


def test_list_files_unreadable_directory_raises_scan_access(flat_tree, monkeypatch):
    def fake_scan(path, with_metadata=False):
        raise PermissionError(errno.EACCES, "Permission denied", path)

    monkeypatch.setattr(fs, "scan_directory", fake_scan)

    with pytest.raises(ScanAccessError) as exc:
        list_files(str(flat_tree))

    assert exc.value.path == str(flat_tree)


def test_describe_file_unreadable_raises_scan_access(flat_tree, monkeypatch):
    def fake_details(path):
        raise PermissionError(errno.EACCES, "Permission denied", path)

    monkeypatch.setattr(fs, "read_file_details", fake_details)

    with pytest.raises(ScanAccessError):
        describe_file(str(flat_tree / "a.txt"))
