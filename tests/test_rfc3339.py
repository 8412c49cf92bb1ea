"""Tests for RFC 3339 timestamps in aswire.rfc3339."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from aswire.errors import InvalidValueError
from aswire.rfc3339 import format_datetime, parse_datetime


class TestFormatDatetime:
    """Test writing timestamps."""

    def test_utc_second_precision(self) -> None:
        """Test the canonical form with trailing Z."""
        dt = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert format_datetime(dt) == "2024-01-02T03:04:05Z"

    def test_fraction_is_truncated(self) -> None:
        """Test that sub-second precision is dropped."""
        dt = datetime(2024, 1, 2, 3, 4, 5, 999999, tzinfo=UTC)
        assert format_datetime(dt) == "2024-01-02T03:04:05Z"

    def test_offset_is_converted_to_utc(self) -> None:
        """Test that other offsets are normalised to UTC."""
        tz = timezone(timedelta(hours=9))
        dt = datetime(2024, 1, 2, 12, 0, 0, tzinfo=tz)
        assert format_datetime(dt) == "2024-01-02T03:00:00Z"

    def test_small_years_are_padded(self) -> None:
        """Test that the year always has four digits."""
        dt = datetime(5, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert format_datetime(dt) == "0005-01-02T03:04:05Z"

    def test_naive_datetime_is_rejected(self) -> None:
        """Test that naive datetimes cannot be written."""
        with pytest.raises(InvalidValueError, match="naive"):
            format_datetime(datetime(2024, 1, 2, 3, 4, 5))  # noqa: DTZ001


class TestParseDatetime:
    """Test reading timestamps."""

    def test_zulu(self) -> None:
        """Test a UTC timestamp."""
        assert parse_datetime("2024-01-02T03:04:05Z") == datetime(
            2024, 1, 2, 3, 4, 5, tzinfo=UTC,
        )

    def test_offset(self) -> None:
        """Test that numeric offsets are converted to UTC."""
        parsed = parse_datetime("2024-01-02T05:04:05+02:00")
        assert parsed == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert parsed.utcoffset() == timedelta(0)

    def test_fraction_and_lowercase(self) -> None:
        """Test fractional seconds and lowercase designators."""
        parsed = parse_datetime("2024-01-02t03:04:05.250z")
        assert parsed == datetime(2024, 1, 2, 3, 4, 5, 250000, tzinfo=UTC)

    def test_leap_second_is_clamped(self) -> None:
        """Test that second 60 reads as the last second of the minute."""
        parsed = parse_datetime("2016-12-31T23:59:60Z")
        assert parsed == datetime(2016, 12, 31, 23, 59, 59, tzinfo=UTC)
        assert format_datetime(parsed) == "2016-12-31T23:59:59Z"

    def test_leap_second_with_fraction_and_offset(self) -> None:
        """Test clamping alongside fractional seconds and a numeric offset."""
        parsed = parse_datetime("2017-01-01T08:59:60.5+09:00")
        assert parsed == datetime(2016, 12, 31, 23, 59, 59, 500000, tzinfo=UTC)

    def test_byte_for_byte_round_trip(self) -> None:
        """Test format -> parse -> format stability."""
        text = "2024-01-02T03:04:05Z"
        assert format_datetime(parse_datetime(text)) == text

    @pytest.mark.parametrize(
        "text",
        [
            "not-a-date",
            "2024-01-02",
            "2024-01-02T03:04:05",
            "2024-01-02T03:04Z",
            "2024-13-02T03:04:05Z",
            "2024-01-02T03:04:05+0200",
            "2024-01-02T03:04:61Z",
            " 2024-01-02T03:04:05Z",
        ],
    )
    def test_invalid(self, text: str) -> None:
        """Test that non-RFC 3339 strings are value errors."""
        with pytest.raises(InvalidValueError):
            parse_datetime(text)
