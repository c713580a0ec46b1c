"""Discord webhook notifier.

Renders probe results into Discord embeds and posts them to an incoming
webhook. Delivery is a single attempt; failures are logged, never raised
out of ``notify``/``notify_stat``.

Embed layout reference: https://birdie0.github.io/discord-webhooks-guide/
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import httpx

from probe_notifier.errors import DeliveryError, ProviderError, SerializationError, TransportError
from probe_notifier.notify.formatter import (
    AVATAR_URL,
    COLOR_STAT,
    MILLISECOND,
    SECOND,
    STAT_REPORT_TITLE,
    USERNAME,
    format_duration,
    format_rfc3339,
    get_status_color,
    round_duration,
    to_utc,
)
from probe_notifier.notify.models import (
    MAX_EMBEDS,
    DiscordMessage,
    Embed,
    Footer,
    Thumbnail,
)
from probe_notifier.probe.models import Format, stat_status_text

if TYPE_CHECKING:
    from probe_notifier.config import DiscordSettings
    from probe_notifier.probe.models import Prober, ProbeResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

STAT_DESCRIPTION = (
    "**Availability**\n>\t **Up**:  `{uptime}`  **Down** `{downtime}`  -  **SLA**: `{sla:.2f} %`"
    "\n**Probe Times**\n>\t**Total** : `{total}` ( {distribution} )"
    "\n**Latest Probe**\n>\t{latest_time} | {latest_status}"
    "\n>\t`{message} `"
)


class DiscordNotifier:
    """Sends probe notifications to a Discord webhook.

    Holds only immutable configuration, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        dry: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize Discord notifier.

        Args:
            webhook_url: Discord incoming webhook URL.
            dry: Log payloads instead of sending them.
            timeout: HTTP request timeout in seconds.
        """
        self.webhook_url = webhook_url
        self.dry = dry
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: DiscordSettings, *, dry: bool = False) -> DiscordNotifier:
        """Build a notifier from settings. ``dry`` forces dry-run mode on."""
        webhook_url = settings.webhook_url.get_secret_value() if settings.webhook_url else ""
        return cls(webhook_url, dry=dry or settings.dry, timeout=settings.timeout)

    @property
    def kind(self) -> str:
        return "discord"

    def config(self) -> None:
        """Announce the notifier mode at startup."""
        if self.dry:
            logger.info(f"Notification {self.kind} is running on Dry mode!")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def new_discord(self, result: ProbeResult) -> DiscordMessage:
        """Render a single probe result as a one-embed message."""
        rtt = format_duration(round_duration(result.round_trip_time, MILLISECOND))
        description = (
            f"{result.status.emoji} {result.endpoint} - ⏱ {rtt}\n```{result.message}```"
        )

        embed = Embed(
            title=result.title(),
            description=description,
            color=get_status_color(result.status),
            timestamp=format_rfc3339(result.start_time),
            thumbnail=Thumbnail(url=AVATAR_URL),
            footer=Footer(text="Probed at", icon_url=AVATAR_URL),
        )
        return DiscordMessage(
            username=USERNAME,
            avatar_url=AVATAR_URL,
            content="",
            embeds=(embed,),
        )

    def new_embed(self, result: ProbeResult) -> Embed:
        """Render the statistics of one prober as an embed."""
        stat = result.stat
        description = STAT_DESCRIPTION.format(
            uptime=format_duration(round_duration(stat.uptime, SECOND)),
            downtime=format_duration(round_duration(stat.downtime, SECOND)),
            sla=result.sla(),
            total=stat.total,
            distribution=stat_status_text(stat, Format.MARKDOWN),
            latest_time=to_utc(result.start_time).strftime(result.time_format),
            latest_status=f"{result.status.emoji} {result.status}",
            message=result.message,
        )
        return Embed(
            title=f"{result.name} - {result.endpoint}",
            description=description,
            color=COLOR_STAT,
        )

    def new_embeds(self, results: Sequence[ProbeResult]) -> DiscordMessage:
        """Render an SLA report with one embed per result."""
        if len(results) > MAX_EMBEDS:
            logger.warning(
                f"SLA report has {len(results)} embeds, "
                f"Discord accepts at most {MAX_EMBEDS}"
            )
        return DiscordMessage(
            username=USERNAME,
            avatar_url=AVATAR_URL,
            content=STAT_REPORT_TITLE,
            embeds=tuple(self.new_embed(result) for result in results),
        )

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def send(self, message: DiscordMessage) -> None:
        """Post a message to the webhook.

        Args:
            message: Rendered Discord message.

        Raises:
            SerializationError: If the message cannot be encoded.
            TransportError: If the request fails (DNS, connect, timeout).
            ProviderError: If Discord answers with anything but 204.
        """
        body = message.to_json()

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.webhook_url,
                    content=body.encode("utf-8"),
                    headers={
                        "Content-Type": "application/json",
                        "Connection": "close",
                    },
                )
        # InvalidURL does not derive from HTTPError
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(e, kind=self.kind) from e

        if response.status_code != 204:
            raise ProviderError(response.status_code, response.text, kind=self.kind)

    def notify(self, result: ProbeResult) -> None:
        """Send a notification for one probe result."""
        if self.dry:
            self.dry_notify(result)
            return

        message = self.new_discord(result)
        if self._deliver(message):
            logger.info(f"Sent the Discord notification for {result.name} ({result.endpoint})!")

    def notify_stat(self, probers: Sequence[Prober]) -> None:
        """Send the SLA report for all probers."""
        if self.dry:
            self.dry_notify_stat(probers)
            return

        message = self.new_embeds([p.result() for p in probers])
        if self._deliver(message):
            logger.info("Sent the statistics to Discord successfully!")

    def dry_notify(self, result: ProbeResult) -> None:
        """Log the message for ``result`` instead of sending it."""
        self._log_dry(self.new_discord(result))

    def dry_notify_stat(self, probers: Sequence[Prober]) -> None:
        """Log the SLA report instead of sending it."""
        self._log_dry(self.new_embeds([p.result() for p in probers]))

    def _log_dry(self, message: DiscordMessage) -> None:
        try:
            body = message.to_json()
        except SerializationError as e:
            logger.error(f"error : {e}")
            return
        logger.info(f"[{self.kind}] Dry notify - {body}")

    def _deliver(self, message: DiscordMessage) -> bool:
        """Send ``message``, logging the failure and payload if it fails."""
        try:
            self.send(message)
        except DeliveryError as e:
            logger.error(f"Notify[{self.kind}] delivery failed: {e}")
            try:
                logger.error(f"Notify[{self.kind}] - {message.to_json()}")
            except SerializationError:
                logger.error(f"Notify[{self.kind}] - {message!r}")
            return False
        return True
