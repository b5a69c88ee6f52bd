from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.entities.user_summary import UserSummary


class UserRepository(ABC):
    """Read-only port onto the externally managed user records."""

    @abstractmethod
    async def get_summary(self, user_id: UUID) -> UserSummary | None:
        ...
