from dataclasses import dataclass
from uuid import UUID

import structlog

from src.application.interfaces.identity_verifier import AuthenticatedUser, AuthenticationError
from src.application.interfaces.notification_sender import Notification, NotificationSender
from src.application.interfaces.property_repository import PropertyRepository
from src.application.interfaces.user_repository import UserRepository
from src.domain.errors import PropertyNotFoundError, SellerNotFoundError

logger = structlog.get_logger(__name__)

INTEREST_SUBJECT = "Property Interest"


@dataclass
class RegisterInterestInput:
    caller: AuthenticatedUser
    property_id: UUID


class RegisterInterest:
    """
    Use case: Email the interested caller the seller's contact details.

    Read-only apart from the outgoing message: nothing is persisted, and a
    failed delivery is surfaced as NotificationDeliveryError without retry.
    """

    def __init__(
        self,
        property_repo: PropertyRepository,
        user_repo: UserRepository,
        notification_sender: NotificationSender,
        mail_from: str,
    ) -> None:
        self._property_repo = property_repo
        self._user_repo = user_repo
        self._notification_sender = notification_sender
        self._mail_from = mail_from

    async def execute(self, input_data: RegisterInterestInput) -> None:
        found = await self._property_repo.get_with_seller(input_data.property_id)
        if found is None:
            raise PropertyNotFoundError(input_data.property_id)
        if found.seller is None:
            raise SellerNotFoundError(found.listing.seller_id)

        recipient = await self._resolve_recipient(input_data.caller)
        seller = found.seller

        await self._notification_sender.send(
            Notification(
                sender=self._mail_from,
                to=recipient,
                subject=INTEREST_SUBJECT,
                body=(
                    f"You have shown interest in the property at {found.listing.place}. "
                    f"Contact the seller at {seller.email} or {seller.phone}."
                ),
            )
        )

        logger.info(
            "interest_notification_sent",
            property_id=str(found.listing.id),
            user_id=str(input_data.caller.id),
        )

    async def _resolve_recipient(self, caller: AuthenticatedUser) -> str:
        if caller.email:
            return caller.email
        summary = await self._user_repo.get_summary(caller.id)
        if summary is None or not summary.email:
            raise AuthenticationError(f"No email address known for user {caller.id}.")
        return summary.email
