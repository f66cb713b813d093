"""Value helpers for the FlowScript execution context.

Context values are plain Python objects: strings, numbers, booleans,
``None``, lists and dicts. Commands mostly store strings, but values
coming back from the Python sandbox or from stringified JSON can be
structured. This module converts those values to text for interpolation
and walks dotted paths such as ``meta.title`` through them.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Union


ContextValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]


class _Missing:
    """Marker for a lookup that found nothing."""
    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def to_string(value: Any) -> str:
    """Convert a context value to the text used for interpolation.

    ``None``, booleans, lists and dicts use their JSON spelling so that
    values handed back by the sandbox read the same way they would in
    a script (``null``, ``true``, ``[1, 2]``).
    """
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, dict)):
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def looks_like_json(value: Any) -> bool:
    return isinstance(value, str) and (value.startswith('{') or value.startswith('['))


def decode_json(value: Any) -> Any:
    """Parse a JSON-looking string; anything else is returned unchanged."""
    if not looks_like_json(value):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


def descend(value: Any, key: str) -> Any:
    """Return ``value[key]`` for dicts and lists, or MISSING."""
    if isinstance(value, dict):
        return value.get(key, MISSING)
    if isinstance(value, list):
        if key.isdigit() and int(key) < len(value):
            return value[int(key)]
        return MISSING
    return MISSING
