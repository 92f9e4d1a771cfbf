"""Parsing of user-supplied and API timestamps, and filtering by time."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

_WS = r"[\t\n\f\r ]+"
_RELATIVE = re.compile(
    rf"([0-9]+){_WS}(second|minute|hour|day|week|month|year)s?{_WS}ago"
)

_DATE = r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
_CLOCK = (
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:[.,](?P<frac>[0-9]+))?"
)
_ZONE = r"(?P<zone>Z|[+-][0-9]{2}:[0-9]{2})"

# Tried in order; values without a zone are taken as UTC.
_FORMATS = [
    re.compile(rf"{_DATE}T{_CLOCK}{_ZONE}"),
    re.compile(rf"{_DATE}T{_CLOCK}"),
    re.compile(rf"{_DATE} {_CLOCK}"),
    re.compile(_DATE),
    re.compile(r"(?P<month>[0-9]{2})/(?P<day>[0-9]{2})/(?P<year>[0-9]{4})"),
    re.compile(r"(?P<monthname>[A-Za-z]{3}) (?P<day>[0-9]{1,2}), (?P<year>[0-9]{4})"),
]

_MONTHS = {
    name: number
    for number, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun",
         "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}


def _zone(text: str | None) -> timezone:
    if text is None or text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _build(parts: dict[str, Any]) -> datetime:
    if parts.get("monthname") is not None:
        month = _MONTHS.get(parts["monthname"].lower())
        if month is None:
            raise ValueError("unknown month name")
    else:
        month = int(parts["month"])
    frac = parts.get("frac") or ""
    microsecond = int(frac[:6].ljust(6, "0")) if frac else 0
    return datetime(
        int(parts["year"]),
        month,
        int(parts["day"]),
        int(parts.get("hour") or 0),
        int(parts.get("minute") or 0),
        int(parts.get("second") or 0),
        microsecond,
        tzinfo=_zone(parts.get("zone")),
    )


def _parse_standard(s: str) -> datetime | None:
    for pattern in _FORMATS:
        match = pattern.fullmatch(s)
        if match is None:
            continue
        try:
            return _build(match.groupdict())
        except ValueError:
            continue
    return None


def _add_date(dt: datetime, years: int = 0, months: int = 0, days: int = 0) -> datetime:
    """Shift by calendar units, letting overflowing days roll into the next month."""
    total = (dt.year + years) * 12 + (dt.month - 1) + months
    year, month0 = divmod(total, 12)
    first = dt.replace(year=year, month=month0 + 1, day=1)
    return first + timedelta(days=dt.day - 1 + days)


_RELATIVE_UNITS: dict[str, Callable[[datetime, int], datetime]] = {
    "second": lambda now, n: now - timedelta(seconds=n),
    "minute": lambda now, n: now - timedelta(minutes=n),
    "hour": lambda now, n: now - timedelta(hours=n),
    "day": lambda now, n: _add_date(now, days=-n),
    "week": lambda now, n: _add_date(now, days=-7 * n),
    "month": lambda now, n: _add_date(now, months=-n),
    "year": lambda now, n: _add_date(now, years=-n),
}


def _midnight(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_flexible_time(s: str, now: datetime | None = None) -> datetime:
    """Parse an absolute timestamp, a date, "N units ago", or now/today/yesterday.

    Relative values are measured from ``now``, which defaults to the current
    local time.
    """
    original = s.strip()
    if not original:
        raise ValueError("empty time string")
    lower = original.lower()
    if now is None:
        now = datetime.now().astimezone()

    try:
        if lower == "now":
            return now
        if lower == "today":
            return _midnight(now)
        if lower == "yesterday":
            return _midnight(_add_date(now, days=-1))

        match = _RELATIVE.fullmatch(lower)
        if match is not None:
            amount, unit = int(match.group(1)), match.group(2)
            return _RELATIVE_UNITS[unit](now, amount)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"time out of range: {original}") from exc

    parsed = _parse_standard(original)
    if parsed is None:
        raise ValueError(f"unable to parse time: {original}")
    return parsed


def parse_deployment_timestamp(s: str) -> datetime:
    """Parse a timestamp as returned by the deployments API."""
    parsed = _parse_standard(s)
    if parsed is None:
        raise ValueError(f"unable to parse deployment timestamp: {s}")
    return parsed


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def filter_deployments_by_time(
    deployments: Iterable[Any],
    since: datetime | None = None,
    until: datetime | None = None,
) -> list[Any]:
    """Keep deployments whose timestamp lies within [since, until].

    A bound of None is not applied. Deployments whose timestamp cannot be
    parsed are kept. Naive bounds are taken as UTC.
    """
    if since is None and until is None:
        return list(deployments)
    lower = _aware(since) if since is not None else None
    upper = _aware(until) if until is not None else None

    kept = []
    for deployment in deployments:
        try:
            ts = parse_deployment_timestamp(deployment.timestamp)
        except ValueError:
            kept.append(deployment)
            continue
        if lower is not None and ts < lower:
            continue
        if upper is not None and ts > upper:
            continue
        kept.append(deployment)
    return kept