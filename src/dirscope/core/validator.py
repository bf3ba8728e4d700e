from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (JSON file, CLI) and the
engine. Coerces types, normalizes paths and extensions, injects defaults,
and finally builds the immutable TraversalConfig consumed by the renderer.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from dirscope.domain.config import get_default_config
from dirscope.domain.tree_models import (
    DetailFlags,
    ErrorPolicy,
    RenderMode,
    TraversalConfig,
)
from dirscope.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    bool_fields = ["show_size", "show_modified", "follow_symlinks", "recursive"]
    choice_fields = {
        "mode": [m.value for m in RenderMode],
        "error_policy": [p.value for p in ErrorPolicy],
    }

    # 3. Field Processing & Normalization
    merged["root_path"] = normalize_path(
        _as_str(merged.get("root_path"), defaults["root_path"], "root_path", warnings, strict),
        defaults["root_path"],
    )

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field, choices in choice_fields.items():
        merged[field] = _as_choice(merged.get(field), choices, defaults[field], field, warnings, strict)

    merged["max_depth"] = _as_depth(merged.get("max_depth"), warnings, strict)
    merged["pattern"] = _as_optional_str(merged.get("pattern"), "pattern", warnings, strict)
    merged["extensions"] = _normalize_extensions(
        _as_list_str(merged.get("extensions"), [], "extensions", warnings, strict),
        warnings,
        strict,
    )

    return merged, warnings


def build_traversal_config(clean: Dict[str, Any]) -> TraversalConfig:
    """
    Convert a validated configuration dictionary into a TraversalConfig.

    The detailed view always shows some detail: with neither flag set it
    falls back to both.
    """
    mode = RenderMode(clean["mode"])
    show_size = bool(clean["show_size"])
    show_modified = bool(clean["show_modified"])
    if mode is RenderMode.DETAILED and not (show_size or show_modified):
        show_size = show_modified = True

    return TraversalConfig(
        root_path=clean["root_path"],
        max_depth=int(clean["max_depth"]),
        include_extensions=frozenset(clean["extensions"]),
        search_pattern=clean["pattern"],
        detail=DetailFlags(size=show_size, modified_at=show_modified),
        mode=mode,
        follow_symlinks=bool(clean["follow_symlinks"]),
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Ignored.")
    return None


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_depth(value: Any, warnings: List[str], strict: bool) -> int:
    """Accept -1 (unlimited) or any non-negative integer."""
    if value is None:
        return -1

    depth: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        depth = value
    elif isinstance(value, str) and not strict:
        try:
            depth = int(value.strip())
            warnings.append(f"Field 'max_depth' converted from '{value}' to {depth}.")
        except ValueError:
            depth = None

    if depth is None:
        msg = f"Invalid field 'max_depth': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using unlimited depth.")
        return -1

    if depth < -1:
        msg = f"Invalid field 'max_depth': {depth} is below -1."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using unlimited depth.")
        return -1

    return depth


def _as_choice(
        value: Any,
        choices: List[str],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()

    msg = f"Invalid field '{field}': {value!r} is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, (list, tuple, set, frozenset)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Lowercase extensions and make sure each one starts with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' normalized to '.{e}'.")
            e = "." + e
        if e not in out:
            out.append(e)
    return out
