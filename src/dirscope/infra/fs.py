from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Read-only primitives consumed by the analysis engine: path classification,
single-level directory listing and metadata snapshots. Also resolves the
OS-specific user data directory used for configuration and logs.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional, Tuple

from dirscope.domain.errors import NotADirectoryPathError, PathNotFoundError, ScanAccessError
from dirscope.domain.tree_models import DirectoryEntry, FileDetails

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Dirscope"
UNIX_APP_DIR_NAME = ".dirscope"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Dirscope
    - Linux/Mac: ~/.dirscope

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and the user home shortcut. Reverts to
    fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def display_name(path: str) -> str:
    """Base name of a path, or the path itself for filesystem roots."""
    stripped = path.rstrip("/\\")
    return os.path.basename(stripped) or path

# -----------------------------------------------------------------------------
# PATH CLASSIFICATION
# -----------------------------------------------------------------------------

def classify_path(path: str, with_metadata: bool = False) -> DirectoryEntry:
    """
    Snapshot an existing path as a file or directory entry.

    Args:
        path: Path to classify.
        with_metadata: Also capture size (files) and modification time.

    Returns:
        DirectoryEntry: Immutable snapshot of the path.

    Raises:
        PathNotFoundError: If the path does not exist (or vanished).
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        raise PathNotFoundError(path) from None

    is_dir = os.path.isdir(path)
    size: Optional[int] = None
    modified: Optional[datetime] = None
    if with_metadata:
        modified = datetime.fromtimestamp(st.st_mtime)
        if not is_dir:
            size = st.st_size

    return DirectoryEntry(
        path=os.path.abspath(path),
        name=display_name(path),
        is_directory=is_dir,
        size=size,
        modified_at=modified,
        is_symlink=os.path.islink(path),
    )


def require_directory(path: str) -> str:
    """
    Validate a call-level root directory.

    Returns:
        str: The absolute path.

    Raises:
        PathNotFoundError: If the path does not exist.
        NotADirectoryPathError: If the path is not a directory.
        ScanAccessError: If the path cannot be examined at all.
    """
    abs_path = os.path.abspath(path)
    try:
        entry = classify_path(abs_path)
    except PathNotFoundError:
        raise
    except OSError as e:
        raise ScanAccessError(abs_path, e.strerror or str(e)) from e
    if not entry.is_directory:
        raise NotADirectoryPathError(abs_path)
    return entry.path

# -----------------------------------------------------------------------------
# LISTING API
# -----------------------------------------------------------------------------

def scan_directory(
        path: str,
        with_metadata: bool = False,
) -> Tuple[List[DirectoryEntry], List[DirectoryEntry]]:
    """
    List the immediate children of a directory, split into folders and files.

    Entries that vanish between listing and classification are skipped.
    Failures to open the directory itself propagate to the caller.

    Args:
        path: Directory to list.
        with_metadata: Capture size and modification time of each child.

    Returns:
        Tuple[List[DirectoryEntry], List[DirectoryEntry]]: (directories, files),
        in listing order.

    Raises:
        PermissionError: If the directory cannot be opened.
        OSError: For any other failure to list the directory.
    """
    directories: List[DirectoryEntry] = []
    files: List[DirectoryEntry] = []

    with os.scandir(path) as it:
        for dirent in it:
            try:
                entry = _entry_from_dirent(dirent, with_metadata)
            except FileNotFoundError:
                logger.debug(f"Entry vanished during listing: {dirent.path}")
                continue
            if entry.is_directory:
                directories.append(entry)
            else:
                files.append(entry)

    return directories, files


def read_file_details(path: str) -> FileDetails:
    """
    Read the metadata of a single file.

    Raises:
        PathNotFoundError: If the path does not exist.
        IsADirectoryError: If the path is a directory.
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        raise PathNotFoundError(path) from None
    if os.path.isdir(path):
        raise IsADirectoryError(f"Path is a directory: {path}")

    name = display_name(path)
    return FileDetails(
        name=name,
        full_path=os.path.abspath(path),
        size=st.st_size,
        created_at=datetime.fromtimestamp(_creation_time(st)),
        modified_at=datetime.fromtimestamp(st.st_mtime),
        extension=os.path.splitext(name)[1],
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _entry_from_dirent(dirent: os.DirEntry, with_metadata: bool) -> DirectoryEntry:
    """
    Build an entry from a scandir result, following links for the type.

    A child whose metadata cannot be read is still returned, with size and
    modification time left empty.
    """
    is_dir = dirent.is_dir(follow_symlinks=True)
    size: Optional[int] = None
    modified: Optional[datetime] = None
    if with_metadata:
        st = _stat_dirent(dirent)
        if st is not None:
            modified = datetime.fromtimestamp(st.st_mtime)
            if not is_dir:
                size = st.st_size

    return DirectoryEntry(
        path=dirent.path,
        name=dirent.name,
        is_directory=is_dir,
        size=size,
        modified_at=modified,
        is_symlink=dirent.is_symlink(),
    )


def _stat_dirent(dirent: os.DirEntry) -> Optional[os.stat_result]:
    try:
        return dirent.stat(follow_symlinks=True)
    except FileNotFoundError:
        # Dangling link: describe the link itself
        if not dirent.is_symlink():
            raise
        return dirent.stat(follow_symlinks=False)
    except OSError as e:
        logger.warning(f"Cannot read metadata of: {dirent.path} ({e.strerror or e})")
        return None


def _creation_time(st: os.stat_result) -> float:
    """Birth time where the platform exposes it, else the inode change time."""
    return getattr(st, "st_birthtime", None) or st.st_ctime
