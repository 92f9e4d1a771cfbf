from datetime import datetime, timedelta, timezone

import pytest

from nrclient.timeutil import (
    filter_deployments_by_time,
    parse_deployment_timestamp,
    parse_flexible_time,
)
from nrclient.types import Deployment

UTC = timezone.utc
NOW = datetime(2025, 1, 20, 15, 45, 30, tzinfo=UTC)


def _utc(text: str) -> datetime:
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


def test_iso_8601():
    result = parse_flexible_time("2025-01-15T14:30:00Z")
    assert result == datetime(2025, 1, 15, 14, 30, tzinfo=UTC)


def test_date_only():
    result = parse_flexible_time("2025-01-15")
    assert (result.year, result.month, result.day) == (2025, 1, 15)
    assert result.tzinfo == UTC


def test_offset_and_fraction_kept():
    result = parse_flexible_time("2025-01-15T14:30:00.123456+02:00")
    assert result.utcoffset() == timedelta(hours=2)
    assert result.microsecond == 123456


@pytest.mark.parametrize(
    "text", ["2025-01-15T14:30:00", "2025-01-15 14:30:00"]
)
def test_naive_formats_are_utc(text):
    assert parse_flexible_time(text) == datetime(2025, 1, 15, 14, 30, tzinfo=UTC)


def test_us_and_named_month_formats():
    assert parse_flexible_time("01/15/2025") == datetime(2025, 1, 15, tzinfo=UTC)
    assert parse_flexible_time("Jan 15, 2025") == datetime(2025, 1, 15, tzinfo=UTC)
    assert parse_flexible_time("Jan 5, 2025") == datetime(2025, 1, 5, tzinfo=UTC)


def test_surrounding_space_trimmed():
    assert parse_flexible_time("  2025-01-15 ") == datetime(2025, 1, 15, tzinfo=UTC)


def test_now_default():
    before = datetime.now().astimezone()
    result = parse_flexible_time("now")
    after = datetime.now().astimezone()
    assert before <= result <= after


def test_now_explicit_and_case_insensitive():
    assert parse_flexible_time("NOW", now=NOW) == NOW


def test_today():
    result = parse_flexible_time("today", now=NOW)
    assert result == datetime(2025, 1, 20, tzinfo=UTC)


def test_today_default_now():
    result = parse_flexible_time("today")
    now = datetime.now().astimezone()
    assert (result.year, result.month, result.day) == (now.year, now.month, now.day)
    assert (result.hour, result.minute) == (0, 0)


def test_yesterday():
    result = parse_flexible_time("yesterday", now=NOW)
    assert result == datetime(2025, 1, 19, tzinfo=UTC)


def test_days_ago():
    result = parse_flexible_time("7 days ago", now=NOW)
    assert (result.year, result.month, result.day) == (2025, 1, 13)


def test_one_day_ago():
    result = parse_flexible_time("1 day ago", now=NOW)
    assert (result.year, result.month, result.day) == (2025, 1, 19)


def test_hours_ago():
    assert parse_flexible_time("2 hours ago", now=NOW) == NOW - timedelta(hours=2)


def test_hours_ago_default_now():
    result = parse_flexible_time("2 hours ago")
    expected = datetime.now().astimezone() - timedelta(hours=2)
    assert abs(expected - result) < timedelta(seconds=1)


def test_weeks_ago():
    result = parse_flexible_time("2 weeks ago", now=NOW)
    assert (result.year, result.month, result.day) == (2025, 1, 6)


def test_months_ago():
    result = parse_flexible_time("3 months ago", now=NOW)
    assert (result.year, result.month) == (2024, 10)


def test_months_ago_rolls_over_short_month():
    now = datetime(2025, 5, 31, tzinfo=UTC)
    assert parse_flexible_time("3 months ago", now=now) == datetime(2025, 3, 3, tzinfo=UTC)


def test_relative_is_case_insensitive():
    assert parse_flexible_time("7 DAYS AGO", now=NOW) == parse_flexible_time(
        "7 days ago", now=NOW
    )


def test_empty_string():
    with pytest.raises(ValueError, match="empty time string"):
        parse_flexible_time("")


@pytest.mark.parametrize("text", ["not a date", "2025-13-01", "2025-1-15", "5 fortnights ago"])
def test_invalid_format(text):
    with pytest.raises(ValueError, match="unable to parse time"):
        parse_flexible_time(text)


DEPLOYMENTS = [
    Deployment(id=1, revision="v1", timestamp="2025-01-10T10:00:00Z"),
    Deployment(id=2, revision="v2", timestamp="2025-01-12T10:00:00Z"),
    Deployment(id=3, revision="v3", timestamp="2025-01-14T10:00:00Z"),
    Deployment(id=4, revision="v4", timestamp="2025-01-16T10:00:00Z"),
]


def test_filter_no_bounds():
    assert filter_deployments_by_time(DEPLOYMENTS, None, None) == DEPLOYMENTS


def test_filter_since_only():
    result = filter_deployments_by_time(DEPLOYMENTS, _utc("2025-01-13T00:00:00Z"), None)
    assert [d.id for d in result] == [3, 4]


def test_filter_until_only():
    result = filter_deployments_by_time(DEPLOYMENTS, None, _utc("2025-01-13T00:00:00Z"))
    assert [d.id for d in result] == [1, 2]


def test_filter_both_bounds():
    result = filter_deployments_by_time(
        DEPLOYMENTS, _utc("2025-01-11T00:00:00Z"), _utc("2025-01-15T00:00:00Z")
    )
    assert [d.id for d in result] == [2, 3]


def test_filter_keeps_unparseable():
    deployments = [
        Deployment(id=1, revision="v1", timestamp="not-a-date"),
        Deployment(id=2, revision="v2", timestamp="2025-01-14T10:00:00Z"),
    ]
    result = filter_deployments_by_time(deployments, _utc("2025-01-13T00:00:00Z"), None)
    assert [d.id for d in result] == [1, 2]


def test_filter_naive_bound_taken_as_utc():
    result = filter_deployments_by_time(DEPLOYMENTS, datetime(2025, 1, 13), None)
    assert [d.id for d in result] == [3, 4]


def test_parse_deployment_timestamp():
    result = parse_deployment_timestamp("2025-01-15T14:30:00Z")
    assert (result.year, result.month, result.day) == (2025, 1, 15)


def test_parse_deployment_timestamp_invalid():
    with pytest.raises(ValueError, match="unable to parse deployment timestamp"):
        parse_deployment_timestamp("not-a-timestamp")


def test_parse_deployment_timestamp_does_not_trim():
    with pytest.raises(ValueError):
        parse_deployment_timestamp(" 2025-01-15")