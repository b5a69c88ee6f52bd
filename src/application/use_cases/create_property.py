from dataclasses import dataclass

import structlog

from src.application.interfaces.identity_verifier import AuthenticatedUser, AuthenticationError
from src.application.interfaces.property_repository import PropertyRepository
from src.application.interfaces.user_repository import UserRepository
from src.domain.entities.property_listing import PropertyDetails, PropertyListing

logger = structlog.get_logger(__name__)


@dataclass
class CreatePropertyInput:
    caller: AuthenticatedUser
    details: PropertyDetails


class CreateProperty:
    """
    Use case: Persist a new listing owned by the calling user.

    The caller must exist in the user store at creation time; the listing
    starts with no likes.
    """

    def __init__(self, property_repo: PropertyRepository, user_repo: UserRepository) -> None:
        self._property_repo = property_repo
        self._user_repo = user_repo

    async def execute(self, input_data: CreatePropertyInput) -> PropertyListing:
        seller = await self._user_repo.get_summary(input_data.caller.id)
        if seller is None:
            raise AuthenticationError(f"Unknown user {input_data.caller.id}.")

        listing = PropertyListing.create(seller_id=seller.id, details=input_data.details)
        await self._property_repo.add(listing)

        logger.info(
            "property_created",
            property_id=str(listing.id),
            seller_id=str(listing.seller_id),
        )
        return listing
