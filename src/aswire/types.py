"""Runtime type descriptors for wire-shape fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, dataclass_transform

# Any JSON value: None, bool, int, float, str, list or dict.
type Value = Any

# Non-negative integer (sizes and indexes).
type Count = int


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeDef:
    """Base for type definitions."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[TypeDef]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register typedef subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := TypeDef.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        TypeDef.registry[cls.tag] = cls

    def describe(self) -> str:
        """Short name used in error messages."""
        return self.tag


class IntType(TypeDef, tag="int"):
    """Integer type (booleans excluded)."""


class CountType(TypeDef, tag="count"):
    """Non-negative integer type."""

    def describe(self) -> str:
        """Describe as a non-negative integer."""
        return "non-negative int"


class FloatType(TypeDef, tag="float"):
    """Floating point type. Integers are accepted and widened."""


class StrType(TypeDef, tag="str"):
    """String type."""


class BoolType(TypeDef, tag="bool"):
    """Boolean type."""


class NoneType(TypeDef, tag="none"):
    """None/null type."""


class ValueType(TypeDef, tag="value"):
    """Any JSON value, left for the converter to interpret."""

    def describe(self) -> str:
        """Describe as any JSON value."""
        return "JSON value"


class MappingType(TypeDef, tag="mapping"):
    """JSON object with uniformly typed values.

    Mapping[str, str] -> MappingType(value=StrType()).
    """

    value: TypeDef

    def describe(self) -> str:
        """Describe with the value type."""
        return f"mapping of {self.value.describe()}"


class ShapeType(TypeDef, tag="shape"):
    """Nested wire shape, referenced by its registered tag."""

    shape_tag: str

    def describe(self) -> str:
        """Describe by shape tag."""
        return f"{self.shape_tag} object"


class OptionalType(TypeDef, tag="optional"):
    """Optional field: T | None -> OptionalType(inner=...)."""

    inner: TypeDef

    def describe(self) -> str:
        """Describe the inner type."""
        return self.inner.describe()
