import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from simplylearn.core import config

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP sender. Without a host configured, messages are only logged."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: int = 587,
        user: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "no-reply@simplylearn.local",
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender

    @classmethod
    def from_config(cls) -> "Mailer":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            user=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            sender=config.SMTP_FROM,
        )

    def send(self, to: str, subject: str, body: str) -> None:
        if not self.host:
            logger.info("SMTP not configured; mail to %s (%s):\n%s", to, subject, body)
            return

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.set_content(body)

        with smtplib.SMTP(self.host, self.port) as smtp:
            smtp.starttls()
            if self.user and self.password:
                smtp.login(self.user, self.password)
            smtp.send_message(msg)
        logger.info("Sent mail to %s (%s)", to, subject)


def otp_message(name: str, code: str, minutes: int) -> tuple[str, str]:
    subject = "Verify your SimplyLearn email"
    body = (
        f"Hello {name or 'there'},\n\n"
        f"Your verification code is {code}. It expires in {minutes} minutes.\n\n"
        "If you did not create an account, ignore this message.\n"
    )
    return subject, body
