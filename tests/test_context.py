"""Tests for @context conversion in aswire.context."""

from __future__ import annotations

import pytest

from aswire.context import ContextConverter, IriConverter
from aswire.errors import ShapeError
from aswire.model import (
    DirectIri,
    MixContext,
    SingleContext,
    TermDefsContext,
    TypeCoercion,
)

AS_CONTEXT = "https://www.w3.org/ns/activitystreams"
SECURITY_CONTEXT = "https://w3id.org/security/v1"


@pytest.fixture
def contexts() -> ContextConverter:
    return ContextConverter()


class TestIriConverter:
    """Test IRI conversion."""

    def test_direct(self) -> None:
        """Test that strings are direct IRIs."""
        iris = IriConverter()
        assert iris.from_value("as:Public") == DirectIri(value="as:Public")
        assert iris.to_value(DirectIri(value="as:Public")) == "as:Public"

    def test_type_coercion(self) -> None:
        """Test that @id/@type objects are type coercions."""
        iris = IriConverter()
        value = {"@id": "toot:featured", "@type": "@id"}
        iri = iris.from_value(value)
        assert iri == TypeCoercion(id="toot:featured", type="@id")
        assert iris.to_value(iri) == value

    def test_type_coercion_without_type(self) -> None:
        """Test that @type is omitted when absent."""
        iris = IriConverter()
        assert iris.to_value(TypeCoercion(id="toot:x")) == {"@id": "toot:x"}

    def test_other_kinds_fail(self) -> None:
        """Test that numbers are not IRIs."""
        with pytest.raises(ShapeError):
            IriConverter().from_value(5)


class TestContextDecoding:
    """Test variant discrimination when reading @context."""

    def test_string_is_single_direct(self, contexts: ContextConverter) -> None:
        """Test that a bare string decodes to a single direct IRI."""
        assert contexts.from_value(AS_CONTEXT) == SingleContext(
            iri=DirectIri(value=AS_CONTEXT),
        )

    def test_coercion_object_is_single(self, contexts: ContextConverter) -> None:
        """Test that an @id object decodes to a single type coercion."""
        assert contexts.from_value({"@id": "x", "@type": "@id"}) == SingleContext(
            iri=TypeCoercion(id="x", type="@id"),
        )

    def test_list_is_mix(self, contexts: ContextConverter) -> None:
        """Test that a list decodes to a mix of contexts."""
        value = [
            AS_CONTEXT,
            SECURITY_CONTEXT,
            {
                "toot": "http://joinmastodon.org/ns#",
                "featured": {"@id": "toot:featured", "@type": "@id"},
            },
        ]
        assert contexts.from_value(value) == MixContext(
            contexts=(
                SingleContext(iri=DirectIri(value=AS_CONTEXT)),
                SingleContext(iri=DirectIri(value=SECURITY_CONTEXT)),
                TermDefsContext(
                    terms={
                        "toot": DirectIri(value="http://joinmastodon.org/ns#"),
                        "featured": TypeCoercion(id="toot:featured", type="@id"),
                    },
                ),
            ),
        )

    def test_term_map_is_term_defs(self, contexts: ContextConverter) -> None:
        """Test that an object of terms decodes to term definitions."""
        assert contexts.from_value({"as": AS_CONTEXT}) == TermDefsContext(
            terms={"as": DirectIri(value=AS_CONTEXT)},
        )

    def test_empty_list_and_map_are_distinct(self, contexts: ContextConverter) -> None:
        """Test that empty array and empty object pick different variants."""
        assert contexts.from_value([]) == MixContext(contexts=())
        assert contexts.from_value({}) == TermDefsContext(terms={})

    def test_id_key_wins_over_term_map(self, contexts: ContextConverter) -> None:
        """Test that an object with a string @id is read as a type coercion."""
        ctx = contexts.from_value({"@id": "x", "other": "y"})
        assert ctx == SingleContext(iri=TypeCoercion(id="x"))

    def test_bad_element_in_mix(self, contexts: ContextConverter) -> None:
        """Test that a bad element fails the whole context with its index."""
        with pytest.raises(ShapeError) as exc_info:
            contexts.from_value([AS_CONTEXT, 5])
        assert exc_info.value.path == (1,)

    def test_bad_term(self, contexts: ContextConverter) -> None:
        """Test that a bad term value fails with the term name."""
        with pytest.raises(ShapeError) as exc_info:
            contexts.from_value({"as": AS_CONTEXT, "bad": ["x"]})
        assert exc_info.value.path == ("bad",)

    @pytest.mark.parametrize("value", [5, True, 1.5])
    def test_scalars_fail(self, contexts: ContextConverter, value: object) -> None:
        """Test that non-string scalars match no variant."""
        with pytest.raises(ShapeError, match="Expected context"):
            contexts.from_value(value)


class TestContextEncoding:
    """Test writing @context values."""

    def test_round_trip_keeps_shape(self, contexts: ContextConverter) -> None:
        """Test that each variant is written back in its own shape."""
        value = [
            AS_CONTEXT,
            {"@id": "x"},
            [SECURITY_CONTEXT],
            {"sensitive": "as:sensitive", "Hashtag": "as:Hashtag"},
        ]
        assert contexts.to_value(contexts.from_value(value)) == value

    def test_unknown_variant_raises(self, contexts: ContextConverter) -> None:
        """Test that non-context values are rejected on write."""
        with pytest.raises(TypeError):
            contexts.to_value(DirectIri(value="x"))  # type: ignore[arg-type]
