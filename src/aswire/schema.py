"""Schema extraction and type reflection for wire shapes."""

from __future__ import annotations

import types
from collections.abc import Mapping
from dataclasses import MISSING, dataclass, fields
from typing import Any, Union, get_args, get_origin, get_type_hints

from aswire.shapes import Shape, wire_name
from aswire.types import (
    BoolType,
    Count,
    CountType,
    FloatType,
    IntType,
    MappingType,
    NoneType,
    OptionalType,
    ShapeType,
    StrType,
    TypeDef,
    Value,
    ValueType,
)


@dataclass(frozen=True)
class FieldSchema:
    """Schema for a shape field."""

    name: str
    wire_name: str
    type: TypeDef
    required: bool


@dataclass(frozen=True)
class ShapeSchema:
    """Complete schema for a shape class."""

    tag: str
    fields: tuple[FieldSchema, ...]

    def field(self, name: str) -> FieldSchema:
        """Look up a field by its Python name."""
        for f in self.fields:
            if f.name == name:
                return f
        msg = f"Shape '{self.tag}' has no field '{name}'"
        raise KeyError(msg)


def extract_type(py_type: Any) -> TypeDef:
    """Convert a wire-shape field annotation to a TypeDef."""
    # Aliases are matched by identity before anything else so that
    # Count is not flattened into a plain int.
    if py_type is Value:
        return ValueType()
    if py_type is Count:
        return CountType()

    if py_type is bool:
        return BoolType()
    if py_type is int:
        return IntType()
    if py_type is float:
        return FloatType()
    if py_type is str:
        return StrType()
    if py_type is type(None):
        return NoneType()

    origin = get_origin(py_type)
    args = get_args(py_type)

    if isinstance(py_type, types.UnionType) or origin is Union:
        options = [a for a in args if a is not type(None)]
        if len(options) != 1 or len(options) == len(args):
            msg = f"Only 'T | None' unions are supported in shapes, got {py_type}"
            raise ValueError(msg)
        return OptionalType(inner=extract_type(options[0]))

    if origin in (Mapping, dict):
        if len(args) != 2 or args[0] is not str:
            msg = "Mapping type must have str keys and a value type"
            raise ValueError(msg)
        return MappingType(value=extract_type(args[1]))

    if isinstance(py_type, type) and issubclass(py_type, Shape):
        return ShapeType(shape_tag=py_type.tag)

    msg = f"Cannot extract type from: {py_type}"
    raise ValueError(msg)


def shape_schema(cls: type[Shape]) -> ShapeSchema:
    """Get schema for a shape class."""
    hints = get_type_hints(cls)
    shape_fields = (
        FieldSchema(
            name=f.name,
            wire_name=wire_name(f),
            type=extract_type(hints[f.name]),
            required=f.default is MISSING and f.default_factory is MISSING,
        )
        for f in fields(cls)
    )
    return ShapeSchema(tag=cls.tag, fields=tuple(shape_fields))


def all_schemas() -> dict[str, ShapeSchema]:
    """Get all registered shape schemas."""
    return {tag: shape_schema(cls) for tag, cls in Shape.registry.items()}


def schema_of(cls: type[Shape]) -> ShapeSchema:
    """Get the schema of a shape class from the import-time table.

    Shapes declared after this module was imported are reflected on each call.
    """
    schema = _SCHEMAS.get(cls)
    return schema if schema is not None else shape_schema(cls)


# Shape classes are fixed once defined, so their schemas are built only once.
_SCHEMAS: Mapping[type[Shape], ShapeSchema] = types.MappingProxyType(
    {cls: shape_schema(cls) for cls in Shape.registry.values()},
)
