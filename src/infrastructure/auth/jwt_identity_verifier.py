"""Bearer token verification for tokens issued by the auth service."""
from uuid import UUID

import jwt
import structlog

from src.application.interfaces.identity_verifier import (
    AuthenticatedUser,
    AuthenticationError,
    IdentityVerifier,
)

logger = structlog.get_logger(__name__)


class JwtIdentityVerifier(IdentityVerifier):
    """
    Verifies a signed JWT and reads the caller from its claims.

    `sub` must hold the user's UUID; `email` is optional and `exp` is checked
    whenever it is present.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithms = [algorithm]

    async def verify(self, token: str) -> AuthenticatedUser:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                options={"require": ["sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token has expired.") from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("token_rejected", error=str(exc))
            raise AuthenticationError("Token is not valid.") from exc

        try:
            user_id = UUID(str(claims["sub"]))
        except ValueError as exc:
            raise AuthenticationError("Token subject is not a user id.") from exc

        email = claims.get("email")
        return AuthenticatedUser(id=user_id, email=email if isinstance(email, str) else None)
