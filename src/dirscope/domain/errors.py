from __future__ import annotations

"""
Domain Error Hierarchy.

Call-level failures surfaced to callers. Node-level problems met during a
traversal are reported inline and never escape as one of these.
"""


class DirscopeError(Exception):
    """Base class for all errors raised by the engine."""


class PathNotFoundError(DirscopeError, FileNotFoundError):
    """The path does not exist, or vanished before it could be classified."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class NotADirectoryPathError(DirscopeError, NotADirectoryError):
    """A directory was required but the path points at something else."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path is not a directory: {path}")
        self.path = path


class ScanAccessError(DirscopeError, PermissionError):
    """A directory or file could not be read (strict scans and inspector views)."""

    def __init__(self, path: str, reason: str = "") -> None:
        msg = f"Cannot access: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.path = path
