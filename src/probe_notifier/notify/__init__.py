"""Notification layer - render probe results and deliver them to Discord."""

from probe_notifier.notify.discord import DiscordNotifier
from probe_notifier.notify.models import (
    MAX_EMBEDS,
    Author,
    DiscordMessage,
    Embed,
    EmbedField,
    Footer,
    Thumbnail,
)

__all__ = [
    "MAX_EMBEDS",
    "Author",
    "DiscordMessage",
    "DiscordNotifier",
    "Embed",
    "EmbedField",
    "Footer",
    "Thumbnail",
]
