from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the configuration mapping coming from the CLI or a JSON file
into strictly typed values, filling gaps with the domain defaults.
"""

import codecs
import logging
from typing import Any, Dict, List, Tuple

from filecombiner.domain.config import DEFAULT_CHARSET, get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["output_path", "charset"]
_BOOL_FIELDS = ["verbose", "separator", "eliminate_unused", "dry_run"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on bad values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an unknown charset.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["inputs"] = _as_list_str(merged.get("inputs"), field="inputs", warnings=warnings, strict=strict)
    merged["charset"] = _normalize_charset(merged["charset"], warnings, strict)

    return merged, warnings


def is_known_charset(charset: Any) -> bool:
    """True if charset names a codec in the registry."""
    if not isinstance(charset, str) or not charset.strip():
        return False
    try:
        codecs.lookup(charset.strip())
    except LookupError:
        return False
    return True


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip() or fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


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


def _as_list_str(value: Any, field: str, warnings: List[str], strict: bool) -> List[str]:
    """Accept a list of strings or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [x.strip() for x in value.split(",") if x.strip()]
    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for item in value:
            if isinstance(item, str) and item.strip():
                out.append(item.strip())
            elif not isinstance(item, str):
                msg = f"Invalid entry in '{field}': expected str, received {type(item).__name__}."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Dropped.")
        return out

    msg = f"Invalid field '{field}': expected list, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using empty list.")
    return []


def _normalize_charset(charset: str, warnings: List[str], strict: bool) -> str:
    """Resolve the charset through the codec registry."""
    try:
        return codecs.lookup(charset).name
    except LookupError:
        msg = f"Unknown charset '{charset}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using {DEFAULT_CHARSET}.")
        return DEFAULT_CHARSET
