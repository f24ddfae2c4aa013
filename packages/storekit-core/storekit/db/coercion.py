"""
Parameter coercion.

SQLite has no boolean or document types, so values are narrowed before
binding: booleans become 0/1, dicts and lists become JSON text.
"""

import json
from typing import Any, Iterable, List


def json_dumps(value: Any) -> str:
    """Serialize Python value to canonical JSON text for storage."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def coerce_value(value: Any) -> Any:
    """Coerce a single parameter value to a backend-bindable form."""
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (dict, list, tuple)):
        return json_dumps(value)
    return value


def coerce_params(values: Iterable[Any] | None) -> List[Any]:
    """
    Coerce every value in a parameter list.

    Args:
        values: Caller-supplied parameters (None means no parameters)

    Returns:
        New list of coerced values, same length and order
    """
    if values is None:
        return []
    return [coerce_value(value) for value in values]
