from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.property_repository import StorageError
from src.application.interfaces.user_repository import UserRepository
from src.domain.entities.user_summary import UserSummary
from src.infrastructure.database.models import UserModel


def user_to_summary(model: UserModel) -> UserSummary:
    return UserSummary(
        id=model.id,
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
        phone=model.phone,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_summary(self, user_id: UUID) -> UserSummary | None:
        try:
            model = await self._session.get(UserModel, user_id)
        except SQLAlchemyError as exc:
            raise StorageError("get_user failed") from exc
        return user_to_summary(model) if model is not None else None
