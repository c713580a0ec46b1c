"""Probe result types - the interface consumed from the probing engine."""

from probe_notifier.probe.models import (
    DEFAULT_TIME_FORMAT,
    Format,
    Prober,
    ProbeResult,
    Stat,
    Status,
    stat_status_text,
)

__all__ = [
    "DEFAULT_TIME_FORMAT",
    "Format",
    "ProbeResult",
    "Prober",
    "Stat",
    "Status",
    "stat_status_text",
]
