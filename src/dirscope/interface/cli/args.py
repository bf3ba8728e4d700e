from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (one sub-command per view) and translates
the parsed namespace into configuration overrides for the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

from dirscope.domain.tree_models import ErrorPolicy, RenderMode

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dirscope CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", dest="json_output", action="store_true",
                        help="Emit machine-readable JSON instead of text.")
    common.add_argument("--debug", action="store_true",
                        help="Elevate logging verbosity to DEBUG.")
    common.add_argument("--log-file", dest="log_file", default=None,
                        help="Also write diagnostics to this rotating log file.")
    common.add_argument("--config", dest="config_file", default=None,
                        help="Read defaults from this JSON file instead of the user config.")
    common.add_argument("--use-defaults", action="store_true",
                        help="Ignore the stored configuration file.")
    common.add_argument("--dump-config", action="store_true",
                        help="Print the effective configuration and exit.")

    p = argparse.ArgumentParser(
        prog="dirscope",
        description="Render directory trees and statistics from filesystem metadata.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Tree views ---
    tree = sub.add_parser("tree", parents=[common], help="Draw a directory tree.")
    tree.add_argument("path", nargs="?", default=None, help="Root directory (default: current).")
    tree.add_argument(
        "--mode",
        choices=[m.value for m in RenderMode],
        default=None,
        help="View: full, detailed (size and date), files, folders.",
    )
    tree.add_argument("-d", "--max-depth", dest="max_depth", type=int, default=None,
                      help="Levels to descend below the root's children (-1 = unlimited).")
    tree.add_argument("--ext", dest="extensions", default=None,
                      help="Comma-separated extensions to show, e.g. .py,.md")
    tree.add_argument("--pattern", default=None, help="Glob that file names must match.")
    tree.add_argument("--size", dest="show_size", action="store_true", help="Append file sizes.")
    tree.add_argument("--mtime", dest="show_modified", action="store_true",
                      help="Append modification times.")
    tree.add_argument("--follow-symlinks", action="store_true",
                      help="Descend into symbolic links to directories.")

    # --- Statistics ---
    stats = sub.add_parser("stats", parents=[common], help="Count files, folders and bytes.")
    stats.add_argument("path", nargs="?", default=None, help="Root directory (default: current).")
    stats.add_argument("--no-recursive", action="store_true", help="Count the top level only.")
    stats.add_argument("--strict", action="store_true",
                       help="Fail on unreadable subdirectories instead of skipping them.")

    # --- Inspector views ---
    ls = sub.add_parser("ls", parents=[common], help="List files of one directory with sizes.")
    ls.add_argument("path", nargs="?", default=None, help="Directory (default: current).")
    ls.add_argument("--pattern", default=None, help="Glob that file names must match.")

    find = sub.add_parser("find", parents=[common], help="Search files by name pattern.")
    find.add_argument("pattern", help="Glob applied to file names, e.g. '*.py'.")
    find.add_argument("path", nargs="?", default=None, help="Root directory (default: current).")
    find.add_argument("--no-recursive", action="store_true", help="Search the top level only.")

    info = sub.add_parser("info", parents=[common], help="Show metadata of one file.")
    info.add_argument("path", help="File to describe.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually set are returned, so stored
    configuration values survive unless explicitly overridden.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if getattr(args, "path", None):
        overrides["root_path"] = args.path

    # Tree view overrides
    if getattr(args, "mode", None):
        overrides["mode"] = args.mode
    if getattr(args, "max_depth", None) is not None:
        overrides["max_depth"] = args.max_depth
    if getattr(args, "extensions", None):
        overrides["extensions"] = _split_csv(args.extensions)
    if getattr(args, "pattern", None) and args.command != "find":
        overrides["pattern"] = args.pattern
    if getattr(args, "show_size", False):
        overrides["show_size"] = True
    if getattr(args, "show_modified", False):
        overrides["show_modified"] = True
    if getattr(args, "follow_symlinks", False):
        overrides["follow_symlinks"] = True

    # Statistics and search overrides
    if getattr(args, "no_recursive", False):
        overrides["recursive"] = False
    if getattr(args, "strict", False):
        overrides["error_policy"] = ErrorPolicy.RAISE.value

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of sanitized strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
