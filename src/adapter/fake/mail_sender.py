"""In-memory MailSender that records outgoing messages."""

from dataclasses import dataclass

from domain.model.errors import UpstreamError


@dataclass
class SentMail:
    to: str
    subject: str
    body: str


class FakeMailSender:
    def __init__(self, fail: bool = False):
        self.outbox: list[SentMail] = []
        self.fail = fail

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise UpstreamError("SMTP unavailable")
        self.outbox.append(SentMail(to=to, subject=subject, body=body))
