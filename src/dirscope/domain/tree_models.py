from __future__ import annotations

"""
Directory Tree Data Models.

Provides the immutable snapshots, traversal settings and per-call render
state shared by the tree renderer, the aggregate counter and the report
layer.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Set

# -----------------------------------------------------------------------------
# RENDERING CONSTANTS
# -----------------------------------------------------------------------------

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "

DIRECTORY_ICON = "📁"
FILE_ICON = "📄"

ACCESS_DENIED = "[Access Denied]"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------


class RenderMode(str, Enum):
    """Available tree views."""
    FULL = "full"
    DETAILED = "detailed"
    FILES = "files"
    FOLDERS = "folders"


class ErrorPolicy(str, Enum):
    """Reaction of the aggregate scan to an unreadable nested directory."""
    SKIP = "skip"
    RAISE = "raise"

# -----------------------------------------------------------------------------
# SNAPSHOTS
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class DirectoryEntry:
    """
    Snapshot of a single file or directory taken at visit time.

    Attributes:
        path: Absolute filesystem path.
        name: Base name of the entry.
        is_directory: True for directories (including links to directories).
        size: Size in bytes, only populated for files when requested.
        modified_at: Last modification time, only populated when requested.
        is_symlink: True when the entry itself is a symbolic link.
    """
    path: str
    name: str
    is_directory: bool
    size: Optional[int] = None
    modified_at: Optional[datetime] = None
    is_symlink: bool = False

    @property
    def extension(self) -> str:
        """Lowercase extension including the leading dot, empty for directories."""
        if self.is_directory:
            return ""
        return os.path.splitext(self.name)[1].lower()


@dataclass(frozen=True)
class FileDetails:
    """Metadata view of one file, used by the inspector."""
    name: str
    full_path: str
    size: int
    created_at: datetime
    modified_at: datetime
    extension: str


@dataclass(frozen=True)
class Statistics:
    """
    Aggregate counters produced by one scan.

    Attributes:
        file_count: Number of files found.
        directory_count: Number of directories found (root excluded).
        total_bytes: Sum of file sizes.
        inaccessible: Directories that could not be listed and were skipped.
    """
    file_count: int = 0
    directory_count: int = 0
    total_bytes: int = 0
    inaccessible: int = 0

# -----------------------------------------------------------------------------
# TRAVERSAL SETTINGS
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class DetailFlags:
    """Per-call toggles for the size and modification-time suffixes."""
    size: bool = False
    modified_at: bool = False


def normalize_extensions(extensions: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Lowercase every extension and make sure it carries a leading dot."""
    out = set()
    for ext in extensions or ():
        e = ext.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        out.add(e)
    return frozenset(out)


@dataclass(frozen=True)
class TraversalConfig:
    """
    Read-only settings for one tree rendering call.

    Attributes:
        root_path: Directory to render.
        max_depth: -1 for unlimited, otherwise the number of descents
            allowed below the root's immediate children.
        include_extensions: Extensions (".txt") that files must carry.
            Empty means every extension.
        search_pattern: Optional glob that file names must match.
        detail: Size and modification-time suffix toggles.
        mode: Active view.
        follow_symlinks: Descend into symbolic links to directories.
    """
    root_path: str
    max_depth: int = -1
    include_extensions: FrozenSet[str] = field(default_factory=frozenset)
    search_pattern: Optional[str] = None
    detail: DetailFlags = field(default_factory=DetailFlags)
    mode: RenderMode = RenderMode.FULL
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "include_extensions", normalize_extensions(self.include_extensions))
        object.__setattr__(self, "mode", RenderMode(self.mode))
        if self.search_pattern is not None and not self.search_pattern.strip():
            object.__setattr__(self, "search_pattern", None)

    @property
    def wants_size(self) -> bool:
        return self.detail.size or self.mode is RenderMode.FILES

    @property
    def wants_metadata(self) -> bool:
        return self.wants_size or self.detail.modified_at

# -----------------------------------------------------------------------------
# PER-CALL STATE
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Frame:
    """Pending entry on the render work stack."""
    entry: DirectoryEntry
    depth: int
    prefix: str
    is_last: bool


@dataclass
class RenderState:
    """
    Mutable accumulator owned by exactly one rendering call.

    Attributes:
        lines: Ordered output buffer.
        stack: Explicit work stack replacing native recursion.
        expanded: Real paths already expanded (symlink cycle guard).
    """
    lines: List[str] = field(default_factory=list)
    stack: List[Frame] = field(default_factory=list)
    expanded: Set[str] = field(default_factory=set)

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def push_all(self, frames: List[Frame]) -> None:
        """Queue sibling frames so that the first one is popped first."""
        self.stack.extend(reversed(frames))

