"""Delivery errors raised by notifiers.

``DiscordNotifier.send`` raises these; the ``notify`` entry points catch and
log them so a failed delivery never reaches the scheduler.
"""

from __future__ import annotations


class DeliveryError(Exception):
    """Base class for notification delivery failures."""

    def __init__(self, message: str, *, kind: str = "discord") -> None:
        super().__init__(message)
        self.kind = kind


class SerializationError(DeliveryError):
    """Raised when a payload cannot be encoded to the wire format."""


class TransportError(DeliveryError):
    """Raised when the request fails before a response is received.

    Attributes:
        error: The underlying HTTP client exception (DNS, connect, timeout).
    """

    def __init__(self, error: Exception, *, kind: str = "discord") -> None:
        super().__init__(f"{type(error).__name__}: {error}", kind=kind)
        self.error = error


class ProviderError(DeliveryError):
    """Raised when the provider answers with anything but 204 No Content.

    Attributes:
        status_code: HTTP status returned by the webhook.
        body: Raw response body, possibly empty.
    """

    def __init__(self, status_code: int, body: str, *, kind: str = "discord") -> None:
        super().__init__(
            f"Error response from Discord [{status_code}] - [{body}]",
            kind=kind,
        )
        self.status_code = status_code
        self.body = body
