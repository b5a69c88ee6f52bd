from abc import ABC, abstractmethod
from dataclasses import dataclass


class NotificationDeliveryError(Exception):
    pass


@dataclass(frozen=True)
class Notification:
    sender: str
    to: str
    subject: str
    body: str


class NotificationSender(ABC):
    """Port for delivering a message to an address."""

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        """Deliver once. Raises NotificationDeliveryError on failure."""
        ...
