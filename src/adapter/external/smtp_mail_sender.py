"""SMTP mail delivery."""

import os
import logging
import smtplib
from email.message import EmailMessage

from domain.model.errors import UpstreamError

logger = logging.getLogger(__name__)


class SMTPMailSender:
    """Sends plain-text mail through an authenticated SMTP relay using STARTTLS."""

    def __init__(self, host: str, port: int, username: str, password: str, timeout: float = 10.0):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> 'SMTPMailSender':
        """Build from SMTP_HOST / SMTP_PORT / EMAIL_USER / EMAIL_PASSWORD.

        Raises:
            ValueError: a required variable is missing
        """
        missing = [name for name in ('SMTP_HOST', 'EMAIL_USER', 'EMAIL_PASSWORD') if not os.getenv(name)]
        if missing:
            raise ValueError(f"Missing mail configuration: {', '.join(missing)}")
        return cls(
            host=os.environ['SMTP_HOST'],
            port=int(os.getenv('SMTP_PORT', '587')),
            username=os.environ['EMAIL_USER'],
            password=os.environ['EMAIL_PASSWORD'],
        )

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message['From'] = self.username
        message['To'] = to
        message['Subject'] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.starttls()
                smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send mail", extra={"to": to, "error": str(e)})
            raise UpstreamError(f"Failed to send email: {e}") from e

        logger.info("Mail sent", extra={"to": to, "subject": subject})
