"""Property-based tests for the wire conversions."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from aswire import ConversionError, Link, Object, ObjectOrLink
from aswire.adapters import StrConverter
from aswire.converters import converter_for
from aswire.formats.json import from_json, from_value, to_json, to_value
from aswire.lax import decode_many, encode_many
from aswire.rfc3339 import format_datetime, parse_datetime

# Lone surrogates cannot be written as UTF-8
text = st.text(alphabet=st.characters(exclude_categories=("Cs",)))

whole_seconds = st.datetimes(
    min_value=datetime(1, 1, 1),  # noqa: DTZ001
    max_value=datetime(9999, 12, 31, 23, 59, 59),  # noqa: DTZ001
    timezones=st.just(UTC),
).map(lambda dt: dt.replace(microsecond=0))

full_links = st.builds(
    Link,
    href=text,
    rel=st.lists(text, min_size=1, max_size=3).map(tuple),
    height=st.none() | st.integers(min_value=0, max_value=2**31),
)


class TestLaxProperties:
    """Lax arrays settle after one write."""

    @given(st.lists(text, max_size=5).map(tuple))
    def test_decode_encode_is_identity(self, items: tuple[str, ...]) -> None:
        """decode(encode(items)) == items for any tuple."""
        strings = StrConverter()
        assert decode_many(encode_many(items, strings), strings) == items

    @given(st.lists(text, min_size=1, max_size=5))
    def test_array_input_settles(self, items: list[str]) -> None:
        """Writing a decoded array gives a value that reads back the same."""
        strings = StrConverter()
        first = encode_many(decode_many(items, strings), strings)
        assert encode_many(decode_many(first, strings), strings) == first


class TestTimestampProperties:
    """Timestamps round trip at second precision."""

    @given(whole_seconds)
    def test_parse_format_is_identity(self, dt: datetime) -> None:
        """parse(format(dt)) == dt for whole-second UTC datetimes."""
        assert parse_datetime(format_datetime(dt)) == dt

    @given(whole_seconds)
    def test_format_is_canonical(self, dt: datetime) -> None:
        """The written form is 20 characters ending in Z."""
        written = format_datetime(dt)
        assert len(written) == 20
        assert written.endswith("Z")
        assert format_datetime(parse_datetime(written)) == written


class TestUnionProperties:
    """Links keep their identity through the Object-or-Link union."""

    @given(text)
    def test_bare_link_is_a_string(self, href: str) -> None:
        """A bare link is written as its href and read back as a Link."""
        union = converter_for(ObjectOrLink)
        value = union.to_value(Link(href=href))
        assert value == href
        assert union.from_value(value) == Link(href=href)

    @given(full_links)
    def test_full_link_round_trip(self, link: Link) -> None:
        """A link with extra fields survives the union unchanged."""
        union = converter_for(ObjectOrLink)
        value = union.to_value(link)
        assert isinstance(value, dict)
        assert union.from_value(value) == link

    @given(st.lists(text, max_size=3))
    def test_object_json_round_trip(self, hrefs: list[str]) -> None:
        """Objects addressed to bare links survive a text round trip."""
        obj = Object(type=("Note",), to=tuple(Link(href=h) for h in hrefs))
        assert from_json(to_json(obj), Object) == obj


class TestCountProperties:
    """Counts accept exactly the non-negative integers."""

    @given(st.integers(min_value=0))
    def test_non_negative_is_accepted(self, n: int) -> None:
        """Any non-negative integer is a valid count."""
        obj = from_value({"totalItems": n}, Object)
        assert obj.total_items == n
        assert to_value(obj) == {"totalItems": n}

    @given(st.integers(max_value=-1))
    def test_negative_is_rejected(self, n: int) -> None:
        """Negative integers are rejected with the field in the path."""
        with pytest.raises(ConversionError) as excinfo:
            from_value({"totalItems": n}, Object)
        assert excinfo.value.path == ("totalItems",)
