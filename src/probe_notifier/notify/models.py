"""Discord webhook message schema.

Field names match the JSON keys of the Discord "Execute Webhook" body, so
``dataclasses.asdict`` produces the wire document directly.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from probe_notifier.errors import SerializationError

# Discord accepts at most this many embeds per message
MAX_EMBEDS = 10


@dataclass(frozen=True)
class Author:
    """Embed author line. ``url`` turns the name into a link."""

    name: str = ""
    url: str = ""
    icon_url: str = ""


@dataclass(frozen=True)
class Thumbnail:
    """Embed thumbnail. Discord does not allow sizing it."""

    url: str = ""


@dataclass(frozen=True)
class EmbedField:
    """A name/value block inside an embed."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Footer:
    """Embed footer. Markdown is not rendered in ``text``."""

    text: str = ""
    icon_url: str = ""


@dataclass(frozen=True)
class Embed:
    """A single rich block of a Discord message.

    Attributes:
        title: Bold headline of the block.
        description: Body text, Discord markdown.
        color: Left border color as a decimal RGB integer.
        timestamp: RFC 3339 timestamp, or empty for none.
        url: Link applied to the title.
        author: Optional author line.
        thumbnail: Optional thumbnail image.
        fields: Ordered name/value blocks.
        footer: Optional footer line.
    """

    title: str
    description: str
    color: int
    timestamp: str = ""
    url: str = ""
    author: Author = field(default_factory=Author)
    thumbnail: Thumbnail = field(default_factory=Thumbnail)
    fields: tuple[EmbedField, ...] = ()
    footer: Footer = field(default_factory=Footer)


@dataclass(frozen=True)
class DiscordMessage:
    """A complete webhook message."""

    username: str
    avatar_url: str
    content: str = ""
    embeds: tuple[Embed, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return the message as a JSON-ready dictionary."""
        return asdict(self)

    def to_json(self) -> str:
        """Encode the message as the webhook request body.

        Raises:
            SerializationError: If a value cannot be encoded as JSON.
        """
        try:
            return json.dumps(self.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot encode Discord message: {e}") from e
