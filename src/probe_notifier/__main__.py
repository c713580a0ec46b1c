"""CLI entry point for Probe Notifier.

Usage:
    python -m probe_notifier --config-check
    python -m probe_notifier --name web --endpoint https://example.com --status down
"""

from __future__ import annotations

import argparse
import logging
import logging.config
import sys
from datetime import UTC, datetime, timedelta
from typing import NoReturn

from pydantic import ValidationError

from probe_notifier import __version__
from probe_notifier.config import Settings, clear_settings_cache, get_settings
from probe_notifier.notify.discord import DiscordNotifier
from probe_notifier.probe.models import ProbeResult, Status

APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

STATUS_CHOICES = {
    "up": Status.UP,
    "down": Status.DOWN,
    "unknown": Status.UNKNOWN,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="probe-notifier",
        description="Send probe results to a Discord webhook.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m probe_notifier --config-check                 Validate config and exit
  python -m probe_notifier --name web --endpoint https://example.com
                                                          Send an "up" notification
  python -m probe_notifier --status down --dry-run        Log the payload only
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit without sending anything",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the notification payload instead of sending it",
    )

    probe = parser.add_argument_group("test notification")
    probe.add_argument("--name", default="probe-notifier", help="Probe name")
    probe.add_argument(
        "--endpoint",
        default="https://example.com",
        help="Probed endpoint shown in the message",
    )
    probe.add_argument(
        "--status",
        choices=sorted(STATUS_CHOICES),
        default="up",
        help="Probe status (default: up)",
    )
    probe.add_argument("--message", default="Test notification", help="Probe message")
    probe.add_argument(
        "--rtt-ms",
        type=float,
        default=0.0,
        help="Round-trip time in milliseconds",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def print_config_summary(settings: Settings, dry_run: bool) -> None:
    """Print a summary of the configuration."""
    summary = settings.redacted_summary()
    print("Configuration:")
    print(f"  Discord Webhook: {summary['discord_webhook']}")
    print(f"  Discord Timeout: {summary['discord_timeout']}s")
    print(f"  Log Level: {summary['log_level']}")
    print(f"  Dry Run: {dry_run}")
    print()


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Run configuration check.

    Returns:
        Exit code (0 for success).
    """
    print("Configuration is valid!")
    print()
    print_config_summary(settings, dry_run=settings.dry_run or settings.discord.dry)

    if settings.discord.enabled:
        print("  Discord: configured")
    else:
        print("  Discord: not configured")

    print()
    print("All checks passed.")
    return EXIT_SUCCESS


def build_result(args: argparse.Namespace) -> ProbeResult:
    """Build a probe result from the test notification arguments."""
    return ProbeResult(
        name=args.name,
        endpoint=args.endpoint,
        start_time=datetime.now(UTC),
        round_trip_time=timedelta(milliseconds=args.rtt_ms),
        status=STATUS_CHOICES[args.status],
        message=args.message,
    )


def run_notify(settings: Settings, args: argparse.Namespace, dry_run: bool) -> int:
    """Send one notification built from the command line.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)

    if not dry_run and not settings.discord.enabled:
        logger.error("Discord is not configured, set DISCORD_WEBHOOK_URL or use --dry-run")
        return EXIT_ERROR

    notifier = DiscordNotifier.from_settings(settings.discord, dry=dry_run)
    notifier.config()

    try:
        notifier.notify(build_result(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    log_level = args.log_level or settings.log_level
    configure_logging(log_level)

    if args.config_check:
        sys.exit(run_config_check(settings))

    dry_run = args.dry_run or settings.dry_run or settings.discord.dry
    print_config_summary(settings, dry_run)

    sys.exit(run_notify(settings, args, dry_run))


if __name__ == "__main__":
    main()
