from datetime import date, datetime, timedelta, timezone

import pytest
from redmine_client.core.errors import TimeParseError
from redmine_client.utils.time_parser import (
    format_rfc3339,
    parse_date,
    parse_rfc3339,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2024-03-01T12:30:00Z", datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)),
        (
            "2024-03-01T12:30:00+02:00",
            datetime(2024, 3, 1, 12, 30, tzinfo=timezone(timedelta(hours=2))),
        ),
        (
            "2024-03-01t12:30:00.500000z",
            datetime(2024, 3, 1, 12, 30, 0, 500000, tzinfo=timezone.utc),
        ),
    ],
)
def test_parse_rfc3339(raw, expected):
    assert parse_rfc3339(raw) == expected


@pytest.mark.parametrize(
    "raw", ["2024-03-01T12:30:00", "2024-03-01", "yesterday", "", 1700000000]
)
def test_parse_rfc3339_rejects(raw):
    with pytest.raises(TimeParseError) as exc:
        parse_rfc3339(raw)
    assert exc.value.value == raw


def test_parse_rfc3339_rejects_impossible_dates():
    with pytest.raises(TimeParseError):
        parse_rfc3339("2024-02-30T00:00:00Z")


def test_format_rfc3339_uses_z_for_utc():
    value = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    assert format_rfc3339(value) == "2024-03-01T12:30:00Z"


def test_format_rfc3339_rejects_naive():
    with pytest.raises(TimeParseError):
        format_rfc3339(datetime(2024, 3, 1))


def test_parse_date():
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date(date(2024, 3, 1)) == date(2024, 3, 1)


@pytest.mark.parametrize("raw", ["2024-3-1", "2024-03-01T00:00:00Z", "2024-13-01", None])
def test_parse_date_rejects(raw):
    with pytest.raises(TimeParseError):
        parse_date(raw)
