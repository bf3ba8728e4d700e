from __future__ import annotations

"""
Entry Visibility Rules.

Decides which entries a tree view prints. Rules are evaluated in
precedence order: folder-only mode hides every file, then the extension
whitelist, then the glob search pattern. Directories are never hidden by
extension or pattern rules and stay traversable regardless of the mode.
"""

import fnmatch
from typing import Iterable, List, Optional

from dirscope.domain.tree_models import DirectoryEntry, RenderMode, TraversalConfig

# -----------------------------------------------------------------------------
# PATTERN MATCHING
# -----------------------------------------------------------------------------

def matches_pattern(name: str, pattern: Optional[str]) -> bool:
    """
    Glob match of a file name ('*' any run, '?' one character).

    Case sensitivity follows the platform through fnmatch's normcase.
    An unset pattern matches everything.
    """
    if not pattern:
        return True
    return fnmatch.fnmatch(name, pattern)


def matches_extension(entry: DirectoryEntry, extensions: Iterable[str]) -> bool:
    """Check the lowercase extension of a file against a whitelist. Empty allows all."""
    allowed = set(extensions)
    if not allowed:
        return True
    return entry.extension in allowed

# -----------------------------------------------------------------------------
# VISIBILITY
# -----------------------------------------------------------------------------

def is_visible(entry: DirectoryEntry, config: TraversalConfig) -> bool:
    """
    Decide whether an entry is printed under the given configuration.

    Args:
        entry: Candidate entry.
        config: Active traversal settings.

    Returns:
        bool: True if the entry should appear in the output.
    """
    if entry.is_directory:
        return True

    if config.mode is RenderMode.FOLDERS:
        return False
    if not matches_extension(entry, config.include_extensions):
        return False
    if not matches_pattern(entry.name, config.search_pattern):
        return False
    return True


def visible_files(files: List[DirectoryEntry], config: TraversalConfig) -> List[DirectoryEntry]:
    """Apply the visibility rules to a file listing, preserving order."""
    return [f for f in files if is_visible(f, config)]


def describe_filters(config: TraversalConfig) -> str:
    """Short human description of the active file filters."""
    parts: List[str] = []
    if config.include_extensions:
        parts.append(", ".join(sorted(config.include_extensions)))
    if config.search_pattern:
        parts.append(config.search_pattern)
    if not parts:
        return "(all files)"
    return f"(filtered by {'; '.join(parts)})"
