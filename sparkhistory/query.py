"""Query parsing and fixed payloads for the application list API."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

VERSION = "0.0.1"

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_RFC3339 = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"[Tt ](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<offset>[Zz]|[+-][0-9]{2}:[0-9]{2})"
)


class ApplicationStatus(enum.Enum):
    """Status of a Spark application as used in list filters."""

    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"


def _from_millis(timestamp: int) -> datetime | None:
    # Truncating division, as for signed integers; a negative remainder
    # leaves no valid sub-second part and therefore no timestamp.
    seconds = int(timestamp / 1000) if abs(timestamp) < 2**52 else _trunc_div(timestamp, 1000)
    remainder = timestamp - seconds * 1000
    if remainder < 0:
        return None
    try:
        return _EPOCH + timedelta(seconds=seconds, milliseconds=remainder)
    except OverflowError:
        return None


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _parse_rfc3339(value: str) -> datetime | None:
    match = _RFC3339.fullmatch(value)
    if match is None:
        return None
    offset_text = match["offset"]
    if offset_text in ("Z", "z"):
        offset = timedelta(0)
    else:
        sign = -1 if offset_text[0] == "-" else 1
        hours, minutes = int(offset_text[1:3]), int(offset_text[4:6])
        if hours > 23 or minutes > 59:
            return None
        offset = sign * timedelta(hours=hours, minutes=minutes)
    fraction = match["fraction"] or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    try:
        moment = datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            microsecond,
            tzinfo=timezone(offset),
        )
        return moment.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def _parse_simple_date(value: str) -> datetime | None:
    try:
        naive = datetime.strptime(f"{value}T00:00:00", "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return None
    return naive.replace(tzinfo=timezone.utc)


def parse_date_param(value: str | None) -> datetime | None:
    """Parse epoch milliseconds, an RFC 3339 timestamp or a YYYY-MM-DD date into UTC.

    Returns None when the value is absent or matches none of the formats.
    """
    if value is None:
        return None
    if _INTEGER.fullmatch(value):
        timestamp = int(value)
        if _I64_MIN <= timestamp <= _I64_MAX:
            return _from_millis(timestamp)
    parsed = _parse_rfc3339(value)
    if parsed is not None:
        return parsed
    return _parse_simple_date(value)


def parse_status_filter(value: str | None) -> list[ApplicationStatus] | None:
    """Parse a comma separated status list; unknown entries are skipped."""
    if value is None:
        return None
    statuses = []
    for part in value.split(","):
        try:
            statuses.append(ApplicationStatus(part.strip().upper()))
        except ValueError:
            continue
    return statuses


def _parse_limit(value: str | None) -> int | None:
    if value is None:
        return None
    if not _UNSIGNED.fullmatch(value):
        raise ValueError(f"invalid limit: {value!r}")
    limit = int(value)
    if limit > 2**64 - 1:
        raise ValueError(f"invalid limit: {value!r}")
    return limit


@dataclass
class ApplicationListQuery:
    """Filters accepted by the application list endpoint."""

    status: list[ApplicationStatus] | None = None
    min_date: datetime | None = None
    max_date: datetime | None = None
    min_end_date: datetime | None = None
    max_end_date: datetime | None = None
    limit: int | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> ApplicationListQuery:
        """Build the query from request parameters; raise ValueError on a bad limit."""
        return cls(
            status=parse_status_filter(params.get("status")),
            min_date=parse_date_param(params.get("minDate")),
            max_date=parse_date_param(params.get("maxDate")),
            min_end_date=parse_date_param(params.get("minEndDate")),
            max_end_date=parse_date_param(params.get("maxEndDate")),
            limit=_parse_limit(params.get("limit")),
        )


def health_payload(now: datetime | None = None) -> dict[str, Any]:
    """Body of the health check response."""
    moment = now if now is not None else datetime.now(timezone.utc)
    return {"status": "healthy", "timestamp": moment.isoformat()}


def version_payload() -> dict[str, str]:
    """Body of the version response."""
    return {"version": VERSION}