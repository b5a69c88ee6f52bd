"""
SMTP notification sender.

Uses smtplib in a thread-pool executor so blocking I/O doesn't stall the
asyncio event loop. A new connection is opened per message; the socket
timeout bounds every step of the exchange.
"""
import asyncio
import smtplib
from email.message import EmailMessage
from functools import partial

import structlog

from src.application.interfaces.notification_sender import (
    Notification,
    NotificationDeliveryError,
    NotificationSender,
)

logger = structlog.get_logger(__name__)


def _build_message(notification: Notification) -> EmailMessage:
    message = EmailMessage()
    message["From"] = notification.sender
    message["To"] = notification.to
    message["Subject"] = notification.subject
    message.set_content(notification.body)
    return message


def _blocking_send(
    host: str,
    port: int,
    username: str,
    password: str,
    use_tls: bool,
    timeout: float,
    message: EmailMessage,
) -> None:
    with smtplib.SMTP(host, port, timeout=timeout) as client:
        if use_tls:
            client.starttls()
        if username:
            client.login(username, password)
        client.send_message(message)


class SmtpNotificationSender(NotificationSender):
    """Delivers notifications as plain-text email over SMTP."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    async def send(self, notification: Notification) -> None:
        loop = asyncio.get_running_loop()
        # ValueError comes from EmailMessage rejecting CR/LF in a header
        try:
            message = _build_message(notification)
            await loop.run_in_executor(
                None,
                partial(
                    _blocking_send,
                    self._host,
                    self._port,
                    self._username,
                    self._password,
                    self._use_tls,
                    self._timeout,
                    message,
                ),
            )
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            logger.error(
                "email_delivery_failed",
                host=self._host,
                subject=notification.subject,
                error=str(exc),
            )
            raise NotificationDeliveryError("Email sending failed") from exc

        logger.debug("email_sent", host=self._host, subject=notification.subject)
