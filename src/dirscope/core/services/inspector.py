from __future__ import annotations

"""
Metadata Inspector Service.

Flat, metadata-only views complementing the tree: a single-level file
listing, a glob search across the tree and a detail view of one file.
File contents are never opened.
"""

import logging
import os
from typing import List

from dirscope.core.analysis.filters import matches_pattern
from dirscope.domain.errors import DirscopeError, PathNotFoundError, ScanAccessError
from dirscope.domain.tree_models import DirectoryEntry, FileDetails
from dirscope.infra import fs

logger = logging.getLogger(__name__)


def list_files(directory: str, pattern: str = "*") -> List[DirectoryEntry]:
    """
    List the files directly inside a directory, with their sizes.

    Args:
        directory: Directory to list.
        pattern: Glob that file names must match.

    Returns:
        List[DirectoryEntry]: Matching files sorted by name.

    Raises:
        PathNotFoundError: If the directory does not exist.
        NotADirectoryPathError: If the path is not a directory.
        ScanAccessError: If the directory cannot be listed.
    """
    root = fs.require_directory(directory)
    try:
        _, files = fs.scan_directory(root, with_metadata=True)
    except OSError as e:
        raise ScanAccessError(root, e.strerror or str(e)) from e
    matched = [f for f in files if matches_pattern(f.name, pattern)]
    return sorted(matched, key=lambda e: e.name)


def search_files(root_path: str, pattern: str, recursive: bool = True) -> List[str]:
    """
    Find files whose names match a glob pattern.

    Unreadable subdirectories are skipped with a warning.

    Args:
        root_path: Directory to search from.
        pattern: Glob applied to file names.
        recursive: Search every level instead of the top level only.

    Returns:
        List[str]: Absolute paths of matching files, sorted.
    """
    root = fs.require_directory(root_path)
    logger.info(f"Searching '{pattern}' under: {root} (recursive={recursive})")

    def _on_error(err: OSError) -> None:
        logger.warning(f"Skipping unreadable directory: {err.filename} ({err.strerror or err})")

    found: List[str] = []
    for current, _dirs, file_names in os.walk(root, onerror=_on_error):
        found.extend(
            os.path.join(current, name) for name in file_names if matches_pattern(name, pattern)
        )
        if not recursive:
            break

    return sorted(found)


def describe_file(path: str) -> FileDetails:
    """
    Read the metadata of a single file.

    Raises:
        PathNotFoundError: If the path does not exist.
        DirscopeError: If the path is a directory.
        ScanAccessError: If the metadata cannot be read.
    """
    try:
        return fs.read_file_details(path)
    except IsADirectoryError as e:
        raise DirscopeError(str(e)) from e
    except PathNotFoundError:
        raise
    except OSError as e:
        raise ScanAccessError(path, e.strerror or str(e)) from e
