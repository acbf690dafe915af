from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol

from ..core.exceptions import InviteDeliveryError

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    def __init__(self, *, host: str, port: int, user: str, password: str, sender: str, use_tls: bool = True):
        self._host = host
        self._port = int(port)
        self._user = user
        self._password = password
        self._sender = sender or user
        self._use_tls = use_tls

    def send(self, *, to: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._sender
        msg["To"] = to
        msg.set_content(body)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=10) as server:
                if self._use_tls:
                    server.starttls()
                if self._user:
                    server.login(self._user, self._password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise InviteDeliveryError(f"Email send failed: {e}") from e


class LoggingMailer(Mailer):
    """Writes outgoing mail to the log; used when SMTP is not configured."""

    def send(self, *, to: str, subject: str, body: str) -> None:
        logger.info("mail to=%s subject=%r\n%s", to, subject, body)


def build_mailer(smtp_config: dict) -> Mailer:
    if not smtp_config.get("host"):
        logger.warning("SMTP_HOST not set; invitation emails will only be logged")
        return LoggingMailer()
    return SmtpMailer(
        host=str(smtp_config["host"]),
        port=int(smtp_config.get("port", 587)),
        user=str(smtp_config.get("user", "")),
        password=str(smtp_config.get("password", "")),
        sender=str(smtp_config.get("sender", "")),
        use_tls=bool(smtp_config.get("use_tls", True)),
    )
