"""Format adapters for serialization.

Each format module provides reading and writing functions that work with
the per-entity converters in ``aswire.converters``.
"""

from aswire.formats.json import (
    from_json,
    from_value,
    read_json,
    to_json,
    to_json_bytes,
    to_value,
    write_json,
)

__all__ = [
    "from_json",
    "from_value",
    "read_json",
    "to_json",
    "to_json_bytes",
    "to_value",
    "write_json",
]
