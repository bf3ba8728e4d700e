from __future__ import annotations

"""
Aggregate Directory Statistics.

Counts files, directories and total bytes below a root. Unlike the tree
renderer no per-entry output is produced, so the scan is a flat walk.
"""

import logging
import os
from typing import Union

from dirscope.domain.errors import ScanAccessError
from dirscope.domain.tree_models import ErrorPolicy, Statistics
from dirscope.infra import fs

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def aggregate(
        root_path: str,
        recursive: bool = True,
        policy: Union[ErrorPolicy, str] = ErrorPolicy.SKIP,
) -> Statistics:
    """
    Count the contents of a directory.

    Args:
        root_path: Directory to scan. The root itself is not counted.
        recursive: Scan every level instead of the top level only.
        policy: What to do with a nested directory that cannot be listed.
            SKIP counts it as a directory, ignores its contents and records
            it in Statistics.inaccessible. A file whose size cannot be read
            is counted without bytes. RAISE aborts the call in both cases.

    Returns:
        Statistics: Counters for the scanned tree.

    Raises:
        PathNotFoundError: If the root does not exist.
        NotADirectoryPathError: If the root is not a directory.
        ScanAccessError: On an unreadable directory or file when policy is RAISE.
    """
    policy = ErrorPolicy(policy)
    root = fs.require_directory(root_path)
    logger.info(f"Counting contents of: {root} (recursive={recursive}, policy={policy.value})")

    files = 0
    directories = 0
    total_bytes = 0
    inaccessible = 0

    def _on_error(err: OSError) -> None:
        nonlocal inaccessible
        failed = err.filename or root
        if policy is ErrorPolicy.RAISE:
            raise ScanAccessError(failed, err.strerror or str(err)) from err
        logger.warning(f"Skipping unreadable directory: {failed} ({err.strerror or err})")
        inaccessible += 1

    for current, dir_names, file_names in os.walk(root, onerror=_on_error):
        directories += len(dir_names)
        for name in file_names:
            file_path = os.path.join(current, name)
            try:
                total_bytes += os.stat(file_path).st_size
            except FileNotFoundError:
                logger.debug(f"File vanished during scan: {file_path}")
                continue
            except OSError as e:
                if policy is ErrorPolicy.RAISE:
                    raise ScanAccessError(file_path, e.strerror or str(e)) from e
                # Counted, but its size is unknown
                logger.warning(f"Cannot read size of: {file_path} ({e.strerror or e})")
            files += 1

        if not recursive:
            break

    stats = Statistics(
        file_count=files,
        directory_count=directories,
        total_bytes=total_bytes,
        inaccessible=inaccessible,
    )
    logger.debug(f"Scan finished: {stats}")
    return stats
