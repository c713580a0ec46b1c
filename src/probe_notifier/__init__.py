"""Probe Notifier - deliver probe results to a Discord webhook."""

__version__ = "0.1.0"
