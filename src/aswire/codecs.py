"""Conversion between wire shapes and JSON-compatible Python builtins."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from aswire.errors import ShapeError
from aswire.schema import schema_of
from aswire.shapes import Shape, wire_name
from aswire.types import (
    BoolType,
    CountType,
    FloatType,
    IntType,
    MappingType,
    NoneType,
    OptionalType,
    ShapeType,
    StrType,
    TypeDef,
    ValueType,
)


def json_kind(value: Any) -> str:
    """Name of the JSON kind of a builtin value, for error messages."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int():
            return "integer"
        case float():
            return "number"
        case str():
            return "string"
        case list() | tuple():
            return "array"
        case dict():
            return "object"
        case _:
            return type(value).__name__


def to_builtins(shape: Shape) -> dict[str, Any]:
    """Convert a shape to a JSON object.

    Keys follow field declaration order; fields holding None are omitted.
    """
    result: dict[str, Any] = {}
    for f in fields(shape):
        value = getattr(shape, f.name)
        if value is None:
            continue
        result[wire_name(f)] = _encode_value(value)
    return result


def _encode_value(value: Any) -> Any:
    if isinstance(value, Shape):
        return to_builtins(value)
    if isinstance(value, Mapping):
        return {k: _encode_value(v) for k, v in value.items()}
    return value


def from_builtins[S: Shape](cls: type[S], data: Any) -> S:
    """Build a shape from a JSON object.

    Unknown keys are ignored and null counts as absent.

    Raises:
        ShapeError: If data is not an object, a required field is missing,
            or a field holds a value of the wrong kind

    """
    if not isinstance(data, dict):
        msg = f"Expected {cls.tag} object, got {json_kind(data)}"
        raise ShapeError(msg)

    schema = schema_of(cls)
    field_values: dict[str, Any] = {}
    for field_schema in schema.fields:
        raw = data.get(field_schema.wire_name)
        if raw is None:
            if field_schema.required:
                msg = f"Missing required field '{field_schema.wire_name}'"
                raise ShapeError(msg)
            continue
        try:
            field_values[field_schema.name] = _decode_value(raw, field_schema.type)
        except ShapeError as err:
            raise err.at(field_schema.wire_name) from None

    return cls(**field_values)


def _decode_value(value: Any, typedef: TypeDef) -> Any:
    """Check a JSON value against a TypeDef and convert it."""
    match typedef:
        case OptionalType(inner=inner):
            return None if value is None else _decode_value(value, inner)
        case ValueType():
            return value
        case StrType() if isinstance(value, str):
            return value
        case BoolType() if isinstance(value, bool):
            return value
        case IntType() if isinstance(value, int) and not isinstance(value, bool):
            return value
        case CountType() if (
            isinstance(value, int) and not isinstance(value, bool) and value >= 0
        ):
            return value
        case FloatType() if (
            isinstance(value, int | float) and not isinstance(value, bool)
        ):
            return float(value)
        case NoneType() if value is None:
            return None
        case MappingType(value=value_type) if isinstance(value, dict):
            result = {}
            for key, item in value.items():
                try:
                    result[key] = _decode_value(item, value_type)
                except ShapeError as err:
                    raise err.at(key) from None
            return result
        case ShapeType(shape_tag=shape_tag):
            return from_builtins(Shape.registry[shape_tag], value)

    msg = f"Expected {typedef.describe()}, got {json_kind(value)}"
    raise ShapeError(msg)
