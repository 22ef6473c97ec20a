"""Port for outbound email."""

from typing import Protocol


class MailSender(Protocol):
    def send(self, to: str, subject: str, body: str) -> None:
        """Deliver a plain-text message. Raise UpstreamError on failure."""
        ...
