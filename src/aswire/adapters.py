"""Converter contract between domain values and their wire form."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import ClassVar

from aswire.codecs import from_builtins, json_kind, to_builtins
from aswire.errors import ShapeError
from aswire.rfc3339 import format_datetime, parse_datetime
from aswire.shapes import Shape
from aswire.types import Value


class Converter[D, W](ABC):
    """Two-way mapping between a domain type D and its wire form W.

    ``to_wire`` and ``to_domain`` translate between the domain value and the
    wire form; ``wire_to_value`` and ``value_to_wire`` move the wire form in
    and out of a generic JSON value tree. Implementations hold no state.
    """

    @abstractmethod
    def to_wire(self, domain: D) -> W:
        """Flatten a domain value into its wire form."""
        ...

    @abstractmethod
    def to_domain(self, wire: W) -> D:
        """Expand a wire form into a domain value.

        Raises:
            ConversionError: If the wire form does not describe a valid value

        """
        ...

    @abstractmethod
    def wire_to_value(self, wire: W) -> Value:
        """Turn the wire form into a JSON value tree."""
        ...

    @abstractmethod
    def value_to_wire(self, value: Value) -> W:
        """Read the wire form out of a JSON value tree.

        Raises:
            ShapeError: If the value does not have the expected structure

        """
        ...

    def to_value(self, domain: D) -> Value:
        """Convert a domain value straight to a JSON value tree."""
        return self.wire_to_value(self.to_wire(domain))

    def from_value(self, value: Value) -> D:
        """Convert a JSON value tree straight to a domain value."""
        return self.to_domain(self.value_to_wire(value))


class ShapeConverter[D, S: Shape](Converter[D, S]):
    """Converter whose wire form is a Shape dataclass."""

    shape: ClassVar[type[Shape]]

    def wire_to_value(self, wire: S) -> Value:
        """Turn the shape into a JSON object."""
        return to_builtins(wire)

    def value_to_wire(self, value: Value) -> S:
        """Read the shape out of a JSON object."""
        return from_builtins(self.shape, value)  # type: ignore[return-value]


class ValueConverter[D](Converter[D, Value]):
    """Converter whose wire form is the JSON value itself."""

    def wire_to_value(self, wire: Value) -> Value:
        """Return the wire value unchanged."""
        return wire

    def value_to_wire(self, value: Value) -> Value:
        """Return the JSON value unchanged."""
        return value


class StrConverter(ValueConverter[str]):
    """Plain strings."""

    def to_wire(self, domain: str) -> Value:
        """Write the string as is."""
        return domain

    def to_domain(self, wire: Value) -> str:
        """Read a JSON string."""
        if not isinstance(wire, str):
            msg = f"Expected string, got {json_kind(wire)}"
            raise ShapeError(msg)
        return wire


class DateTimeConverter(ValueConverter[datetime]):
    """Timestamps as RFC 3339 strings."""

    def to_wire(self, domain: datetime) -> Value:
        """Write the timestamp in RFC 3339 UTC form."""
        return format_datetime(domain)

    def to_domain(self, wire: Value) -> datetime:
        """Read an RFC 3339 timestamp string."""
        if not isinstance(wire, str):
            msg = f"Expected date-time string, got {json_kind(wire)}"
            raise ShapeError(msg)
        return parse_datetime(wire)
