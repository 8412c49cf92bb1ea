"""JSON format adapter.

Reading accepts text, bytes, file objects or an already parsed value tree.
Malformed JSON raises ``json.JSONDecodeError`` straight from the parser;
well-formed JSON that does not describe the requested entity raises a
``ConversionError``.

Writing produces compact output by default (no whitespace) or a 2-space
indented form with ``pretty=True``. Absent fields are omitted rather than
written as null, and non-ASCII text is emitted as UTF-8.
"""

from __future__ import annotations

import json
import logging
from typing import IO, TYPE_CHECKING, Any

from aswire.converters import converter_for, converter_of

if TYPE_CHECKING:
    from aswire.types import Value

logger = logging.getLogger(__name__)

_PRETTY_INDENT = 2
_COMPACT_SEPARATORS = (",", ":")


def from_value(value: Value, entity: Any) -> Any:
    """Convert a parsed JSON value tree to a domain entity.

    Args:
        value: JSON-compatible builtins (dict, list, str, ...)
        entity: Target type: Object, Link, Key, Context or ObjectOrLink

    Returns:
        The domain entity

    Raises:
        TypeError: If entity is not a supported type
        ConversionError: If the value does not describe a valid entity

    """
    converter = converter_for(entity)
    logger.debug("Converting JSON value to %s", getattr(entity, "__name__", entity))
    return converter.from_value(value)


def from_json(data: str | bytes | bytearray, entity: Any) -> Any:
    """Deserialize a JSON document to a domain entity.

    Args:
        data: JSON text, or bytes in UTF-8, UTF-16 or UTF-32
        entity: Target type: Object, Link, Key, Context or ObjectOrLink

    Raises:
        json.JSONDecodeError: If data is not valid JSON
        TypeError: If entity is not a supported type
        ConversionError: If the document does not describe a valid entity

    """
    return from_value(json.loads(data), entity)


def read_json(fp: IO[str] | IO[bytes], entity: Any) -> Any:
    """Read a JSON document from a text or binary file object.

    Raises:
        json.JSONDecodeError: If the stream is not valid JSON
        TypeError: If entity is not a supported type
        ConversionError: If the document does not describe a valid entity

    """
    return from_value(json.load(fp), entity)


def to_value(obj: Any) -> Value:
    """Convert a domain entity to a JSON value tree.

    Raises:
        TypeError: If obj is not an Object, Link, Key or Context
        InvalidValueError: If a field cannot be represented (e.g. a naive datetime)

    """
    return converter_of(obj).to_value(obj)


def to_json_bytes(obj: Any, *, pretty: bool = False) -> bytes:
    """Serialize a domain entity to UTF-8 encoded JSON.

    Raises:
        TypeError: If obj is not an Object, Link, Key or Context
        InvalidValueError: If a field cannot be represented
        ValueError: If a float field is NaN or infinite
        UnicodeEncodeError: If a string holds lone surrogates, which have
            no UTF-8 encoding

    """
    value = to_value(obj)
    if pretty:
        text = json.dumps(
            value,
            indent=_PRETTY_INDENT,
            ensure_ascii=False,
            allow_nan=False,
        )
    else:
        text = json.dumps(
            value,
            separators=_COMPACT_SEPARATORS,
            ensure_ascii=False,
            allow_nan=False,
        )
    return text.encode("utf-8")


def to_json(obj: Any, *, pretty: bool = False) -> str:
    """Serialize a domain entity to a JSON string.

    The text is produced through ``to_json_bytes`` so it is always valid
    UTF-8 once encoded.
    """
    return to_json_bytes(obj, pretty=pretty).decode("utf-8")


def write_json(obj: Any, fp: IO[bytes], *, pretty: bool = False) -> None:
    """Write a domain entity as UTF-8 JSON to a binary file object."""
    fp.write(to_json_bytes(obj, pretty=pretty))
