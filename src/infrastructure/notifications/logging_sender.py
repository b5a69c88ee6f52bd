"""
Log-only notification sender, used when no SMTP host is configured.
"""
import structlog

from src.application.interfaces.notification_sender import Notification, NotificationSender

logger = structlog.get_logger(__name__)


class LoggingNotificationSender(NotificationSender):
    """Writes notifications to the log instead of sending them. Useful for local development."""

    async def send(self, notification: Notification) -> None:
        logger.info(
            "notification_not_sent",
            to=notification.to,
            subject=notification.subject,
            body=notification.body,
        )
