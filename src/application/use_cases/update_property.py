from dataclasses import dataclass
from uuid import UUID

import structlog

from src.application.interfaces.identity_verifier import AuthenticatedUser
from src.application.interfaces.property_repository import PropertyRepository
from src.domain.entities.property_listing import PropertyDetails, PropertyListing
from src.domain.errors import PropertyNotFoundError

logger = structlog.get_logger(__name__)


@dataclass
class UpdatePropertyInput:
    caller: AuthenticatedUser
    property_id: UUID
    details: PropertyDetails


class UpdateProperty:
    """
    Use case: Replace the editable fields of a listing on behalf of its seller.

    All six fields are replaced together; id, seller and likes never change.
    """

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, input_data: UpdatePropertyInput) -> PropertyListing:
        listing = await self._property_repo.get_by_id(input_data.property_id)
        if listing is None:
            raise PropertyNotFoundError(input_data.property_id)

        # May raise NotPropertyOwnerError; storage is left untouched
        listing.ensure_owned_by(input_data.caller.id)

        updated = await self._property_repo.update_details(
            input_data.property_id, input_data.details
        )
        if updated is None:
            # Deleted between the read and the write
            raise PropertyNotFoundError(input_data.property_id)

        logger.info(
            "property_updated",
            property_id=str(updated.id),
            seller_id=str(updated.seller_id),
        )
        return updated


class DeleteProperty:
    """Use case: Permanently remove a listing on behalf of its seller."""

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, caller: AuthenticatedUser, property_id: UUID) -> None:
        listing = await self._property_repo.get_by_id(property_id)
        if listing is None:
            raise PropertyNotFoundError(property_id)

        listing.ensure_owned_by(caller.id)

        if not await self._property_repo.delete(property_id):
            raise PropertyNotFoundError(property_id)

        logger.info("property_deleted", property_id=str(property_id), seller_id=str(caller.id))
