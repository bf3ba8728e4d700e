from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, stored file, command-line overrides), dispatch to
the requested view and rendering of the result as text or JSON.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from dirscope.core import report
from dirscope.core.analysis.counter import aggregate
from dirscope.core.analysis.tree_renderer import render_tree
from dirscope.core.services import inspector
from dirscope.core.validator import build_traversal_config, validate_config
from dirscope.domain.config import get_default_config, load_config
from dirscope.domain.errors import DirscopeError, NotADirectoryPathError, PathNotFoundError
from dirscope.infra.logging import LoggingConfig, configure_logging, get_logger
from dirscope.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_PATH = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 2 bad path, 1 other failure).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))
    logger.debug(f"CLI command '{args.command}' initiated. Resolving configuration...")

    # 3. Configuration hierarchy: defaults < stored file < CLI overrides
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_file)
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Dispatch
    try:
        if args.json_output:
            output = json.dumps(_run_json(args, clean_conf), ensure_ascii=False, indent=2)
        else:
            output = _run_text(args, clean_conf)
    except (PathNotFoundError, NotADirectoryPathError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_PATH
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except DirscopeError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(output)
    return EXIT_OK

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _run_text(args: Any, conf: Dict[str, Any]) -> str:
    """Produce the human-readable report for the selected command."""
    root = conf["root_path"]

    if args.command == "tree":
        return report.render_report(build_traversal_config(conf))
    if args.command == "stats":
        return report.statistics_report(root, recursive=conf["recursive"], policy=conf["error_policy"])
    if args.command == "ls":
        return report.listing_report(root, conf["pattern"] or "*")
    if args.command == "find":
        return report.search_report(root, args.pattern, recursive=conf["recursive"])
    if args.command == "info":
        return report.file_info_report(args.path)

    raise DirscopeError(f"Unknown command: {args.command}")


def _run_json(args: Any, conf: Dict[str, Any]) -> Dict[str, Any]:
    """Produce the JSON payload for the selected command."""
    root = conf["root_path"]

    if args.command == "tree":
        traversal = build_traversal_config(conf)
        return {"root": root, "mode": traversal.mode.value, "lines": render_tree(traversal)}
    if args.command == "stats":
        stats = aggregate(root, recursive=conf["recursive"], policy=conf["error_policy"])
        return report.statistics_to_dict(root, stats)
    if args.command == "ls":
        files = inspector.list_files(root, conf["pattern"] or "*")
        return {"directory": root, "files": [{"name": f.name, "size": f.size} for f in files]}
    if args.command == "find":
        matches = inspector.search_files(root, args.pattern, recursive=conf["recursive"])
        return {"root": root, "pattern": args.pattern, "matches": matches}
    if args.command == "info":
        return report.file_details_to_dict(inspector.describe_file(args.path))

    raise DirscopeError(f"Unknown command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
