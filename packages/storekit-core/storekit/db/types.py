"""
Field type mapping.

Translates the framework's abstract field types into SQLite column
declarations.
"""

JSON_COLUMN_TYPE = "JSON"
DEFAULT_COLUMN_TYPE = "TEXT"

FIELD_TYPES = {
    "pk": "INTEGER PRIMARY KEY",
    "id": "INTEGER",
    "string": "TEXT",
    "boolean": "INTEGER",  # stored as 0/1
    "number": "INTEGER",
    "timestamp": "INTEGER",  # epoch milliseconds
    "Date": "TEXT",  # ISO-8601 text
}

# Field types that hold structured documents
STRUCTURED_TYPES = ("object", "json")


def map_type(token: str, collection: bool = False) -> str:
    """
    Map an abstract field type to a column declaration.

    Args:
        token: Field type (pk, id, string, boolean, number, timestamp, Date, object, json)
        collection: True if the field holds a list of values

    Returns:
        Column type declaration; TEXT for unknown types
    """
    # Key columns stay scalar even on collection fields
    if token in ("pk", "id"):
        return FIELD_TYPES[token]
    if collection or token in STRUCTURED_TYPES:
        return JSON_COLUMN_TYPE
    return FIELD_TYPES.get(token, DEFAULT_COLUMN_TYPE)
