"""Lax arrays: properties that hold either one value or an array of values.

On write, zero items omit the property, one item is written bare and two or
more become an array. On read, an array yields its elements in order and any
other value yields a single item.

An authored one-element array (``"to": ["x"]``) is read as one item and
written back bare (``"to": "x"``). The result is stable under repeated
round trips even though the original array form is not kept.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from aswire.errors import ConversionError

if TYPE_CHECKING:
    from aswire.adapters import Converter
    from aswire.types import Value


def encode_many[T](items: Sequence[T], converter: Converter[T, Any]) -> Value | None:
    """Encode items as an absent, bare or array value."""
    match len(items):
        case 0:
            return None
        case 1:
            return converter.to_value(items[0])
        case _:
            return [converter.to_value(item) for item in items]


def decode_many[T](value: Value | None, converter: Converter[T, Any]) -> tuple[T, ...]:
    """Decode an absent, bare or array value into a tuple of items.

    Raises:
        ConversionError: If any element fails to decode; the error path
            carries the element index

    """
    if value is None:
        return ()
    if not isinstance(value, list):
        return (converter.from_value(value),)

    items = []
    for index, item in enumerate(value):
        try:
            items.append(converter.from_value(item))
        except ConversionError as err:
            raise err.at(index) from None
    return tuple(items)
