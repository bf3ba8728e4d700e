from __future__ import annotations

"""
Tree Renderer.

Walks a directory depth-first and draws it with ASCII connectors. One
parameterized renderer serves every view (full, detailed, file-only and
folder-only); the mode, detail flags and filters all come from the
TraversalConfig.

The walk uses an explicit work stack instead of native recursion so that
deep trees cannot exhaust the interpreter stack. Failures to list a
directory are reported inline and never abort the rest of the walk.
"""

import logging
import os
from typing import List, Optional

from dirscope.core.analysis.filters import visible_files
from dirscope.core.analysis.size_format import format_size
from dirscope.domain.tree_models import (
    ACCESS_DENIED,
    BRANCH,
    DIRECTORY_ICON,
    FILE_ICON,
    LAST_BRANCH,
    PIPE_INDENT,
    SPACE_INDENT,
    TIMESTAMP_FORMAT,
    DirectoryEntry,
    Frame,
    RenderMode,
    RenderState,
    TraversalConfig,
)
from dirscope.infra import fs

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(config: TraversalConfig) -> List[str]:
    """
    Render the directory described by config as a list of text lines.

    The first line is the synthesized root entry. Every visited entry then
    contributes exactly one line, directories before files at each level,
    each group sorted by name.

    Args:
        config: Traversal settings, including the root path.

    Returns:
        List[str]: Rendered lines, without trailing newlines.

    Raises:
        PathNotFoundError: If the root does not exist.
        NotADirectoryPathError: If the root is not a directory.
    """
    root_path = fs.require_directory(config.root_path)
    logger.info(f"Rendering {config.mode.value} tree for: {root_path}")

    state = RenderState()
    state.emit(f"{DIRECTORY_ICON} {fs.display_name(root_path)}")
    _expand(root_path, 0, "", config, state)

    while state.stack:
        frame = state.stack.pop()
        state.emit(_format_line(frame, config))
        if frame.entry.is_directory:
            child_prefix = frame.prefix + (SPACE_INDENT if frame.is_last else PIPE_INDENT)
            _expand(frame.entry.path, frame.depth, child_prefix, config, state)

    logger.debug(f"Tree rendered: {len(state.lines)} lines")
    return state.lines


def render_tree_text(config: TraversalConfig) -> str:
    """Convenience wrapper joining render_tree output with newlines."""
    return "\n".join(render_tree(config))

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (EXPANSION)
# -----------------------------------------------------------------------------

def _expand(
        path: str,
        depth: int,
        prefix: str,
        config: TraversalConfig,
        state: RenderState,
) -> None:
    """
    List one directory and queue its visible children on the work stack.

    Children of the directory sit at depth + 1. Expansion is skipped once
    the directory lies deeper than max_depth allows.
    """
    if 0 <= config.max_depth < depth:
        return
    if not _may_descend(path, depth, config, state):
        return

    try:
        directories, files = fs.scan_directory(path, with_metadata=config.wants_metadata)
    except PermissionError:
        logger.warning(f"Access denied while listing: {path}")
        state.emit(f"{prefix}{LAST_BRANCH}{ACCESS_DENIED}")
        return
    except OSError as e:
        logger.warning(f"Failed to list '{path}': {e}")
        state.emit(f"{prefix}{LAST_BRANCH}[Error: {e.strerror or e}]")
        return

    # The single ordered visit list decides which sibling is last
    items = sorted(directories, key=_sort_key) + sorted(visible_files(files, config), key=_sort_key)
    total = len(items)
    frames = [
        Frame(entry=item, depth=depth + 1, prefix=prefix, is_last=(i == total - 1))
        for i, item in enumerate(items)
    ]
    state.push_all(frames)


def _may_descend(path: str, depth: int, config: TraversalConfig, state: RenderState) -> bool:
    """Guard symbolic links: skip them unless following, then expand each target once."""
    if depth > 0 and os.path.islink(path) and not config.follow_symlinks:
        return False
    if not config.follow_symlinks:
        return True

    real = os.path.realpath(path)
    if real in state.expanded:
        logger.debug(f"Skipping already expanded directory: {path} -> {real}")
        return False
    state.expanded.add(real)
    return True


def _sort_key(entry: DirectoryEntry) -> str:
    return entry.name

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (FORMATTING)
# -----------------------------------------------------------------------------

def _format_line(frame: Frame, config: TraversalConfig) -> str:
    """Build 'prefix + connector + icon + name + details' for one entry."""
    entry = frame.entry
    connector = LAST_BRANCH if frame.is_last else BRANCH
    icon = DIRECTORY_ICON if entry.is_directory else FILE_ICON

    name = entry.name
    if entry.is_directory and config.mode is RenderMode.FILES:
        name += "/"

    return f"{frame.prefix}{connector}{icon} {name}{_detail_suffix(entry, config)}"


def _detail_suffix(entry: DirectoryEntry, config: TraversalConfig) -> str:
    """Optional ' [size] [timestamp]' suffix requested by the detail flags."""
    parts: List[str] = []
    if config.wants_size and not entry.is_directory and entry.size is not None:
        parts.append(f"[{format_size(entry.size)}]")
    if config.detail.modified_at:
        stamp = _format_timestamp(entry)
        if stamp:
            parts.append(f"[{stamp}]")
    if not parts:
        return ""
    return " " + " ".join(parts)


def _format_timestamp(entry: DirectoryEntry) -> Optional[str]:
    if entry.modified_at is None:
        return None
    return entry.modified_at.strftime(TIMESTAMP_FORMAT)
