"""
FastAPI dependency injection wiring.

Process-wide resources (database, identity verifier, notification sender)
live on `app.state`, created by the lifespan. Each dependency function returns
a fully-constructed object with its collaborators injected, keeping the route
handlers thin.
"""
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.identity_verifier import (
    AuthenticatedUser,
    AuthenticationError,
    IdentityVerifier,
)
from src.application.interfaces.notification_sender import NotificationSender
from src.application.interfaces.property_repository import PropertyRepository
from src.application.interfaces.user_repository import UserRepository
from src.application.use_cases.create_property import CreateProperty
from src.application.use_cases.get_properties import GetProperty, ListProperties
from src.application.use_cases.register_interest import RegisterInterest
from src.application.use_cases.toggle_property_like import LikeProperty, UnlikeProperty
from src.application.use_cases.update_property import DeleteProperty, UpdateProperty
from src.config import settings
from src.infrastructure.database.connection import Database
from src.infrastructure.database.repositories.property_repository import (
    SqlAlchemyPropertyRepository,
)
from src.infrastructure.database.repositories.user_repository import SqlAlchemyUserRepository

_bearer_scheme = HTTPBearer(auto_error=False)


# ---- Low-level dependencies ------------------------------------------------

def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


def get_property_repo(session: AsyncSession = Depends(get_session)) -> PropertyRepository:
    return SqlAlchemyPropertyRepository(session)


def get_user_repo(session: AsyncSession = Depends(get_session)) -> UserRepository:
    return SqlAlchemyUserRepository(session)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


def get_notification_sender(request: Request) -> NotificationSender:
    return request.app.state.notification_sender


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthenticatedUser:
    if credentials is None:
        raise AuthenticationError("No token, authorization denied.")
    return await verifier.verify(credentials.credentials)


# ---- Use-case dependencies -------------------------------------------------

def get_create_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
    user_repo: UserRepository = Depends(get_user_repo),
) -> CreateProperty:
    return CreateProperty(property_repo, user_repo)


def get_list_properties_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
) -> ListProperties:
    return ListProperties(property_repo)


def get_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
) -> GetProperty:
    return GetProperty(property_repo)


def get_update_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
) -> UpdateProperty:
    return UpdateProperty(property_repo)


def get_delete_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
) -> DeleteProperty:
    return DeleteProperty(property_repo)


def get_like_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
) -> LikeProperty:
    return LikeProperty(property_repo)


def get_unlike_property_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
) -> UnlikeProperty:
    return UnlikeProperty(property_repo)


def get_register_interest_use_case(
    property_repo: PropertyRepository = Depends(get_property_repo),
    user_repo: UserRepository = Depends(get_user_repo),
    notification_sender: NotificationSender = Depends(get_notification_sender),
) -> RegisterInterest:
    return RegisterInterest(property_repo, user_repo, notification_sender, settings.mail_from)
