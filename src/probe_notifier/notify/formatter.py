"""Formatting helpers shared by the Discord renderers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from probe_notifier.probe.models import Status

# Message identity
USERNAME = "Probe Notifier"
AVATAR_URL = "https://megaease.cn/favicon.png"

# Discord embed colors (decimal values)
COLOR_UP = 1091331  # Green (#10A703)
COLOR_DOWN = 10945283  # Red (#A70303)
COLOR_STAT = 239  # Blue (#0000EF)

STAT_REPORT_TITLE = "**Overall SLA Report**"

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

MILLISECOND = timedelta(milliseconds=1)
SECOND = timedelta(seconds=1)
_MICROSECOND = timedelta(microseconds=1)


def get_status_color(status: Status) -> int:
    """Get the embed color for a single probe result."""
    if status is Status.UP:
        return COLOR_UP
    return COLOR_DOWN


def to_utc(value: datetime) -> datetime:
    """Convert to UTC. Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC timestamp, e.g. 2022-04-01T08:30:00Z."""
    return to_utc(value).strftime(RFC3339_FORMAT)


def round_duration(value: timedelta, unit: timedelta) -> timedelta:
    """Round to the nearest multiple of ``unit``, halves away from zero."""
    if value < timedelta(0):
        return -round_duration(-value, unit)
    return unit * ((value + unit / 2) // unit)


def _trim(number: float) -> str:
    return f"{number:.6f}".rstrip("0").rstrip(".")


def format_duration(value: timedelta) -> str:
    """Render a duration compactly: ``850µs``, ``12ms``, ``1.5s``, ``2h0m5s``."""
    micros = value // _MICROSECOND
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros == 0:
        return "0s"
    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros / 1_000)}ms"

    hours, micros = divmod(micros, 3_600_000_000)
    minutes, micros = divmod(micros, 60_000_000)
    text = f"{_trim(micros / 1_000_000)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return f"{sign}{text}"
