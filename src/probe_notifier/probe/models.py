"""Probe result types consumed by the notifiers.

The probing engine lives outside this package; these are the values it
hands over once a probe has finished.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Protocol

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


class Status(Enum):
    """Status of a probed endpoint."""

    INIT = "init"
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"

    @property
    def emoji(self) -> str:
        """Glyph shown in front of the status in notifications."""
        return _STATUS_EMOJI[self]

    def __str__(self) -> str:
        return _STATUS_TEXT[self]


_STATUS_EMOJI = {
    Status.INIT: "🔎",
    Status.UP: "✅",
    Status.DOWN: "❌",
    Status.UNKNOWN: "⛔️",
}

_STATUS_TEXT = {
    Status.INIT: "Initialization",
    Status.UP: "Up",
    Status.DOWN: "Down",
    Status.UNKNOWN: "Unknown",
}


class Format(Enum):
    """Markup flavor used when rendering text for a provider."""

    MARKDOWN = "markdown"
    HTML = "html"
    TEXT = "text"


@dataclass(frozen=True)
class Stat:
    """Aggregated statistics for one prober.

    Attributes:
        since: When statistics collection started.
        total: Total number of probes run.
        status_counts: Number of probes that ended in each status.
        uptime: Accumulated time spent up.
        downtime: Accumulated time spent down.
    """

    since: datetime | None = None
    total: int = 0
    status_counts: Mapping[Status, int] = field(default_factory=dict)
    uptime: timedelta = timedelta(0)
    downtime: timedelta = timedelta(0)

    def __post_init__(self) -> None:
        # Read-only copy of the caller's counts
        object.__setattr__(self, "status_counts", MappingProxyType(dict(self.status_counts)))


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe, with the prober's running statistics."""

    name: str
    endpoint: str
    start_time: datetime
    round_trip_time: timedelta
    status: Status
    message: str = ""
    previous_status: Status = Status.INIT
    time_format: str = DEFAULT_TIME_FORMAT
    stat: Stat = field(default_factory=Stat)

    def title(self) -> str:
        """Headline for a notification about this result."""
        if self.previous_status is Status.INIT:
            verdict = "Success" if self.status is Status.UP else "Error"
        else:
            verdict = "Recovery" if self.status is Status.UP else "Failure"
        return f"{self.name} {verdict}"

    def sla(self) -> float:
        """Percentage of observed time the endpoint was up."""
        uptime = self.stat.uptime.total_seconds()
        downtime = self.stat.downtime.total_seconds()
        if uptime + downtime <= 0:
            return 100.0 if self.status is Status.UP else 0.0
        return uptime / (uptime + downtime) * 100


class Prober(Protocol):
    """Handle on a running prober."""

    name: str

    def result(self) -> ProbeResult:
        """Return the most recent result."""
        ...


def stat_status_text(stat: Stat, fmt: Format) -> str:
    """Render the per-status probe counts of ``stat``.

    Statuses with no probes are omitted; the rest follow ``Status`` order.
    """
    parts = []
    for status in Status:
        count = stat.status_counts.get(status, 0)
        if not count:
            continue
        if fmt is Format.MARKDOWN:
            parts.append(f"**{status}** : `{count}`")
        elif fmt is Format.HTML:
            parts.append(f"<b>{status}</b> : {count}")
        else:
            parts.append(f"{status} : {count}")
    return " ".join(parts)
