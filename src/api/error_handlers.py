"""
Request-boundary translation of application errors into HTTP responses.

Backend and delivery failures are logged here and reported with a generic
message; nothing is retried.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.schemas.property_schemas import FIELD_MESSAGES
from src.application.interfaces.identity_verifier import AuthenticationError
from src.application.interfaces.notification_sender import NotificationDeliveryError
from src.application.interfaces.property_repository import StorageError
from src.domain.errors import (
    AlreadyLikedError,
    InvalidPageRequestError,
    NotLikedError,
    NotPropertyOwnerError,
    PropertyNotFoundError,
    SellerNotFoundError,
)

logger = structlog.get_logger(__name__)


def _field_name(loc: tuple) -> str:  # type: ignore[type-arg]
    # ("body", "place") -> "place"; ("path", "property_id") -> "id"
    names = [str(part) for part in loc if not isinstance(part, int)]
    if not names:
        return "body"
    field = names[-1]
    return "id" if field == "property_id" else field


def _message(status_code: int, msg: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": msg}, headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    seen: set[str] = set()
    for error in exc.errors():
        field = _field_name(tuple(error.get("loc", ())))
        if field in seen:
            continue
        seen.add(field)
        errors.append({"field": field, "message": FIELD_MESSAGES.get(field, error["msg"])})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def handle_invalid_page(request: Request, exc: InvalidPageRequestError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [{"field": exc.field, "message": exc.message}]},
    )


async def handle_authentication_error(request: Request, exc: AuthenticationError) -> JSONResponse:
    return _message(
        status.HTTP_401_UNAUTHORIZED, str(exc), headers={"WWW-Authenticate": "Bearer"}
    )


async def handle_not_owner(request: Request, exc: NotPropertyOwnerError) -> JSONResponse:
    logger.info(
        "property_change_forbidden",
        property_id=str(exc.property_id),
        user_id=str(exc.user_id),
    )
    return _message(status.HTTP_403_FORBIDDEN, "User not authorized")


async def handle_property_not_found(request: Request, exc: PropertyNotFoundError) -> JSONResponse:
    return _message(status.HTTP_404_NOT_FOUND, "Property not found")


async def handle_seller_not_found(request: Request, exc: SellerNotFoundError) -> JSONResponse:
    return _message(status.HTTP_404_NOT_FOUND, "Seller not found")


async def handle_already_liked(request: Request, exc: AlreadyLikedError) -> JSONResponse:
    return _message(status.HTTP_400_BAD_REQUEST, "Property already liked")


async def handle_not_liked(request: Request, exc: NotLikedError) -> JSONResponse:
    return _message(status.HTTP_400_BAD_REQUEST, "Property has not yet been liked")


async def handle_delivery_error(request: Request, exc: NotificationDeliveryError) -> JSONResponse:
    logger.error("notification_delivery_error", path=request.url.path, error=str(exc.__cause__ or exc))
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Email sending failed")


async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("storage_error", path=request.url.path, error=str(exc.__cause__ or exc))
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationError, handle_authentication_error)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidPageRequestError, handle_invalid_page)  # type: ignore[arg-type]
    app.add_exception_handler(NotPropertyOwnerError, handle_not_owner)  # type: ignore[arg-type]
    app.add_exception_handler(PropertyNotFoundError, handle_property_not_found)  # type: ignore[arg-type]
    app.add_exception_handler(SellerNotFoundError, handle_seller_not_found)  # type: ignore[arg-type]
    app.add_exception_handler(AlreadyLikedError, handle_already_liked)  # type: ignore[arg-type]
    app.add_exception_handler(NotLikedError, handle_not_liked)  # type: ignore[arg-type]
    app.add_exception_handler(NotificationDeliveryError, handle_delivery_error)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, handle_storage_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
