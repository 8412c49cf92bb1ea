"""Error types raised while converting between wire and domain values.

Malformed JSON text is not represented here: the JSON parser's own
``json.JSONDecodeError`` reaches the caller unchanged. The errors below
cover documents that parse fine but do not describe a valid entity.
"""

from __future__ import annotations

from typing import Self

type PathElement = str | int


class ConversionError(Exception):
    """Base class for conversion failures.

    Attributes:
        message: Human-readable description of the failure
        path: Location of the failing value, outermost field first

    """

    def __init__(self, message: str, path: tuple[PathElement, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def at(self, element: PathElement) -> Self:
        """Return a copy of this error located one level further out."""
        return type(self)(self.message, (element, *self.path))

    def __str__(self) -> str:
        if not self.path:
            return self.message
        location = "".join(
            f"[{p}]" if isinstance(p, int) else f".{p}" for p in self.path
        ).removeprefix(".")
        return f"{location}: {self.message}"


class ShapeError(ConversionError):
    """A wire value is structurally incompatible with the expected field type."""


class InvalidValueError(ConversionError):
    """A wire value has the right shape but an invalid value (e.g. a bad date)."""
