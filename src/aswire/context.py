"""Conversion of JSON-LD ``@context`` values.

The context is handled purely as syntax: no term is expanded and no remote
document is fetched. A wire value is matched against the variants in a fixed
order and the first structural match wins:

1. string -> ``SingleContext(DirectIri)``
2. object with a string ``@id`` -> ``SingleContext(TypeCoercion)``
3. array -> ``MixContext``, each element decoded recursively
4. object of term -> IRI -> ``TermDefsContext``

Because step 2 runs first, a term map that happens to contain an ``@id``
key is read as a type coercion and its other keys are ignored.
"""

from __future__ import annotations

import logging

from aswire.adapters import ValueConverter
from aswire.codecs import from_builtins, json_kind, to_builtins
from aswire.errors import ConversionError, ShapeError
from aswire.model import (
    Context,
    DirectIri,
    Iri,
    MixContext,
    SingleContext,
    TermDefsContext,
    TypeCoercion,
)
from aswire.shapes import TypeCoercionShape
from aswire.types import Value

logger = logging.getLogger(__name__)


class IriConverter(ValueConverter[Iri]):
    """IRIs written either as a string or as ``{"@id": ..., "@type": ...}``."""

    def to_wire(self, domain: Iri) -> Value:
        """Write a plain IRI as a string, a coercion as an object."""
        match domain:
            case DirectIri(value=value):
                return value
            case TypeCoercion(id=iri_id, type=iri_type):
                return to_builtins(TypeCoercionShape(id=iri_id, type=iri_type))
        msg = f"Cannot convert {type(domain).__name__} to an IRI"
        raise TypeError(msg)

    def to_domain(self, wire: Value) -> Iri:
        """Read a string or an ``@id`` object."""
        if isinstance(wire, str):
            return DirectIri(value=wire)
        if isinstance(wire, dict):
            shape = from_builtins(TypeCoercionShape, wire)
            return TypeCoercion(id=shape.id, type=shape.type)
        msg = f"Expected IRI string or object, got {json_kind(wire)}"
        raise ShapeError(msg)


class ContextConverter(ValueConverter[Context]):
    """``@context`` values in any of their syntactic forms."""

    def __init__(self) -> None:
        self._iris = IriConverter()

    def to_wire(self, domain: Context) -> Value:
        """Write each context variant in its own syntax."""
        match domain:
            case SingleContext(iri=iri):
                return self._iris.to_wire(iri)
            case MixContext(contexts=contexts):
                return [self.to_wire(item) for item in contexts]
            case TermDefsContext(terms=terms):
                return {term: self._iris.to_wire(iri) for term, iri in terms.items()}
        msg = f"Cannot convert {type(domain).__name__} to a context"
        raise TypeError(msg)

    def to_domain(self, wire: Value) -> Context:
        """Read a context, trying each syntax in order."""
        if isinstance(wire, str):
            return SingleContext(iri=DirectIri(value=wire))

        if isinstance(wire, dict):
            try:
                return SingleContext(iri=self._iris.to_domain(wire))
            except ShapeError as err:
                logger.debug("Not a type coercion (%s), trying term map", err)

        if isinstance(wire, list):
            contexts = []
            for index, item in enumerate(wire):
                try:
                    contexts.append(self.to_domain(item))
                except ConversionError as err:
                    raise err.at(index) from None
            return MixContext(contexts=tuple(contexts))

        if isinstance(wire, dict):
            terms = {}
            for term, item in wire.items():
                try:
                    terms[term] = self._iris.to_domain(item)
                except ConversionError as err:
                    raise err.at(term) from None
            return TermDefsContext(terms=terms)

        msg = f"Expected context string, object or array, got {json_kind(wire)}"
        raise ShapeError(msg)
