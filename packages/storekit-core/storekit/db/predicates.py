"""
Match predicate translation for JSON columns.

Only "contains" on JSON columns needs backend-specific SQL; every other
predicate is left to the framework's generic translator, signalled by
returning None.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from storekit.db.types import JSON_COLUMN_TYPE

CONTAINS_OPERATOR = "contains"


@dataclass(frozen=True)
class MatchFragment:
    """
    SQL fragment for one match condition.

    ``field_value`` follows the column name in the caller's WHERE clause,
    so it starts with the comparison rather than the column.

    Attributes:
        field_value: SQL text following the column name
        field_params: Values for the placeholders in field_value
    """

    field_value: str
    field_params: List[Any] = field(default_factory=list)


def qmark() -> str:
    return "?"


def translate_contains(
    field_name: str,
    field_type: str,
    value: Tuple[str, Any],
    placeholder: Callable[[], str] = qmark,
) -> Optional[MatchFragment]:
    """
    Translate a "contains" match on a JSON column.

    Args:
        field_name: Fully qualified column reference
        field_type: Backend column type of the field
        value: (operator, operand) pair
        placeholder: Returns the next statement placeholder

    Returns:
        MatchFragment, or None when the combination is not handled here
    """
    operator, operand = value
    if field_type != JSON_COLUMN_TYPE or str(operator).lower() != CONTAINS_OPERATOR:
        return None

    return MatchFragment(
        field_value=(
            "NOT NULL AND EXISTS (\n"
            "    SELECT 1\n"
            f"    FROM json_each({field_name})\n"
            f"    WHERE json_each.value = {placeholder()}\n"
            ")"
        ),
        field_params=[operand],
    )
