"""Conversion between nested translation mappings and flat dotted keys.

``flatten`` turns ``{"auth": {"failed": "Bad creds"}}`` into
``{"auth.failed": "Bad creds"}`` and ``inflate`` reverses it. Both are pure
functions that build new dictionaries.
"""

import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

KEY_SEPARATOR = '.'

SCALAR_TYPES = (str, int, float, bool)


def join_key(prefix: str, segment: Any) -> str:
    """Join a key prefix and a path segment (no separator when prefix is empty)."""
    return f"{prefix}{KEY_SEPARATOR}{segment}" if prefix else str(segment)


def scalar_to_string(value: Any) -> Optional[str]:
    """Convert a scalar leaf to the string stored in the sheet.

    Returns None for values that are neither scalars nor None.
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, SCALAR_TYPES):
        return str(value)
    return None


def flatten(nested: Mapping[Any, Any], prefix: str = '') -> Dict[str, str]:
    """Flatten a nested mapping into dotted keys, depth-first.

    Each level keeps its own iteration order. Leaves that are neither
    mappings nor scalars (lists, sets, ...) are skipped.

    Args:
        nested: Mapping whose internal nodes are mappings
        prefix: Key prefix prepended to every produced key

    Returns:
        New ordered dict of dotted key -> string value

    Example:
        >>> flatten({"failed": "Bad creds", "throttle": {"short": "Slow down"}}, "auth")
        {'auth.failed': 'Bad creds', 'auth.throttle.short': 'Slow down'}
    """
    flat: Dict[str, str] = {}
    for segment, value in nested.items():
        key = join_key(prefix, segment)
        if isinstance(value, Mapping):
            flat.update(flatten(value, key))
            continue
        text = scalar_to_string(value)
        if text is None:
            logger.debug(f"Skipping unsupported value of type {type(value).__name__} at {key}")
            continue
        flat[key] = text
    return flat


def inflate(flat: Mapping[str, Any]) -> Dict[str, Any]:
    """Rebuild a nested mapping from dotted keys.

    Intermediate levels are created as needed. When an intermediate segment
    already holds a scalar, it is replaced by an empty mapping (last write
    wins, no error).

    Example:
        >>> inflate({"auth.failed": "Nope", "auth.throttle.short": "Slow"})
        {'auth': {'failed': 'Nope', 'throttle': {'short': 'Slow'}}}
    """
    nested: Dict[str, Any] = {}
    for key, value in flat.items():
        segments = key.split(KEY_SEPARATOR)
        node = nested
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if child is not None:
                    logger.debug(f"Replacing scalar at '{segment}' with a mapping for key {key}")
                child = {}
                node[segment] = child
            node = child
        node[segments[-1]] = value
    return nested


def top_level_group(key: str) -> str:
    """Return the first segment of a dotted key."""
    return key.split(KEY_SEPARATOR, 1)[0]
