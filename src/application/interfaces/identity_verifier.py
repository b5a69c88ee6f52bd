from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID


class AuthenticationError(Exception):
    """Missing, malformed or expired credential."""


@dataclass(frozen=True)
class AuthenticatedUser:
    id: UUID
    email: str | None = None


class IdentityVerifier(ABC):
    """Port for resolving a bearer credential to the calling user."""

    @abstractmethod
    async def verify(self, token: str) -> AuthenticatedUser:
        ...
