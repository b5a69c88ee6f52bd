from uuid import UUID

import structlog

from src.application.interfaces.identity_verifier import AuthenticatedUser
from src.application.interfaces.property_repository import PropertyRepository
from src.domain.errors import AlreadyLikedError, NotLikedError, PropertyNotFoundError

logger = structlog.get_logger(__name__)


async def _ensure_exists(property_repo: PropertyRepository, property_id: UUID) -> None:
    if await property_repo.get_by_id(property_id) is None:
        raise PropertyNotFoundError(property_id)


class LikeProperty:
    """
    Use case: Add the caller to a listing's likes, most recent first.

    The membership check and the write are a single conditional update in the
    repository, so two concurrent likes cannot both succeed. When the update
    matches nothing the listing is looked up again, since it may have been
    deleted in between.
    """

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, caller: AuthenticatedUser, property_id: UUID) -> list[UUID]:
        await _ensure_exists(self._property_repo, property_id)

        liked_by = await self._property_repo.add_like(property_id, caller.id)
        if liked_by is None:
            await _ensure_exists(self._property_repo, property_id)
            raise AlreadyLikedError(property_id, caller.id)

        logger.info("property_liked", property_id=str(property_id), user_id=str(caller.id))
        return liked_by


class UnlikeProperty:
    """Use case: Remove the caller from a listing's likes."""

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, caller: AuthenticatedUser, property_id: UUID) -> list[UUID]:
        await _ensure_exists(self._property_repo, property_id)

        liked_by = await self._property_repo.remove_like(property_id, caller.id)
        if liked_by is None:
            await _ensure_exists(self._property_repo, property_id)
            raise NotLikedError(property_id, caller.id)

        logger.info("property_unliked", property_id=str(property_id), user_id=str(caller.id))
        return liked_by
