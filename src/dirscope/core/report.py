from __future__ import annotations

"""
Report Assembler.

Wraps renderer, counter and inspector calls with a header naming the root
and the active view, producing the final text returned to callers. Also
provides the JSON-ready payloads used by the CLI's --json output.
"""

import os
from typing import Any, Dict, List, Union

from dirscope.core.analysis.counter import aggregate
from dirscope.core.analysis.filters import describe_filters
from dirscope.core.analysis.size_format import format_size
from dirscope.core.analysis.tree_renderer import render_tree
from dirscope.core.services import inspector
from dirscope.domain.tree_models import (
    ErrorPolicy,
    FileDetails,
    RenderMode,
    Statistics,
    TraversalConfig,
)

DETAIL_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# -----------------------------------------------------------------------------
# TREE VIEWS
# -----------------------------------------------------------------------------

def render_report(config: TraversalConfig) -> str:
    """Header line, optional filter line for the file view, then the tree."""
    lines = render_tree(config)
    header = [f"Directory tree: {os.path.abspath(config.root_path)} (mode: {config.mode.value})"]
    if config.mode is RenderMode.FILES:
        header.append(describe_filters(config))
    return "\n".join(header + lines)

# -----------------------------------------------------------------------------
# STATISTICS
# -----------------------------------------------------------------------------

def statistics_report(
        root_path: str,
        recursive: bool = True,
        policy: Union[ErrorPolicy, str] = ErrorPolicy.SKIP,
) -> str:
    stats = aggregate(root_path, recursive=recursive, policy=policy)
    return format_statistics(os.path.abspath(root_path), stats)


def format_statistics(root_path: str, stats: Statistics) -> str:
    lines = [
        f"Directory Statistics for: {root_path}",
        f"Total Files: {stats.file_count}",
        f"Total Directories: {stats.directory_count}",
        f"Total Size: {format_size(stats.total_bytes)}",
    ]
    if stats.inaccessible:
        lines.append(f"Inaccessible Directories: {stats.inaccessible}")
    return "\n".join(lines)


def statistics_to_dict(root_path: str, stats: Statistics) -> Dict[str, Any]:
    return {
        "root": root_path,
        "file_count": stats.file_count,
        "directory_count": stats.directory_count,
        "total_bytes": stats.total_bytes,
        "total_size": format_size(stats.total_bytes),
        "inaccessible": stats.inaccessible,
    }

# -----------------------------------------------------------------------------
# INSPECTOR VIEWS
# -----------------------------------------------------------------------------

def listing_report(directory: str, pattern: str = "*") -> str:
    files = inspector.list_files(directory, pattern)
    lines = [f"Files in {os.path.abspath(directory)}:"]
    lines.extend(f"  {f.name} ({f.size} bytes)" for f in files)
    return "\n".join(lines)


def search_report(root_path: str, pattern: str, recursive: bool = True) -> str:
    matches = inspector.search_files(root_path, pattern, recursive=recursive)
    if not matches:
        return f"No files found matching pattern: {pattern}"
    lines: List[str] = [f"Found {len(matches)} file(s) matching '{pattern}':"]
    lines.extend(f"  {m}" for m in matches)
    return "\n".join(lines)


def file_info_report(path: str) -> str:
    details = inspector.describe_file(path)
    return "\n".join([
        f"File: {details.name}",
        f"Full Path: {details.full_path}",
        f"Size: {details.size} bytes ({format_size(details.size)})",
        f"Created: {details.created_at.strftime(DETAIL_TIMESTAMP_FORMAT)}",
        f"Modified: {details.modified_at.strftime(DETAIL_TIMESTAMP_FORMAT)}",
        f"Extension: {details.extension}",
    ])


def file_details_to_dict(details: FileDetails) -> Dict[str, Any]:
    return {
        "name": details.name,
        "full_path": details.full_path,
        "size": details.size,
        "created_at": details.created_at.isoformat(),
        "modified_at": details.modified_at.isoformat(),
        "extension": details.extension,
    }
