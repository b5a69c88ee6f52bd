from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

import structlog
from sqlalchemy import delete, func, literal, select, update
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.property_repository import PropertyRepository, StorageError
from src.domain.entities.property_listing import PropertyDetails, PropertyListing
from src.domain.entities.user_summary import PropertyWithSeller
from src.infrastructure.database.models import PropertyModel, UserModel
from src.infrastructure.database.repositories.user_repository import user_to_summary

logger = structlog.get_logger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and ORM failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("storage_operation_failed", operation=operation, error=str(exc))
        raise StorageError(f"{operation} failed") from exc


def _user_id(value: UUID):  # type: ignore[no-untyped-def]
    return literal(value, PG_UUID(as_uuid=True))


def _to_domain(model: PropertyModel) -> PropertyListing:
    return PropertyListing(
        id=model.id,
        seller_id=model.seller_id,
        place=model.place,
        area=model.area,
        bedrooms=model.bedrooms,
        bathrooms=model.bathrooms,
        nearby_hospitals=model.nearby_hospitals,
        nearby_colleges=model.nearby_colleges,
        liked_by=list(model.liked_by or []),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_model(listing: PropertyListing) -> PropertyModel:
    return PropertyModel(
        id=listing.id,
        seller_id=listing.seller_id,
        place=listing.place,
        area=listing.area,
        bedrooms=listing.bedrooms,
        bathrooms=listing.bathrooms,
        nearby_hospitals=listing.nearby_hospitals,
        nearby_colleges=listing.nearby_colleges,
        liked_by=list(listing.liked_by),
        created_at=listing.created_at,
        updated_at=listing.updated_at,
    )


def _details_values(details: PropertyDetails) -> dict:  # type: ignore[type-arg]
    return {
        "place": details.place,
        "area": details.area,
        "bedrooms": details.bedrooms,
        "bathrooms": details.bathrooms,
        "nearby_hospitals": details.nearby_hospitals,
        "nearby_colleges": details.nearby_colleges,
    }


class SqlAlchemyPropertyRepository(PropertyRepository):
    """SQLAlchemy (PostgreSQL) implementation of PropertyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, listing: PropertyListing) -> None:
        with storage_errors("add_property"):
            self._session.add(_to_model(listing))
            await self._session.flush()

    async def get_by_id(self, property_id: UUID) -> PropertyListing | None:
        with storage_errors("get_property"):
            model = await self._session.get(PropertyModel, property_id)
        return _to_domain(model) if model is not None else None

    async def get_with_seller(self, property_id: UUID) -> PropertyWithSeller | None:
        query = (
            select(PropertyModel, UserModel)
            .outerjoin(UserModel, UserModel.id == PropertyModel.seller_id)
            .where(PropertyModel.id == property_id)
        )
        with storage_errors("get_property_with_seller"):
            row = (await self._session.execute(query)).first()

        if row is None:
            return None
        model, seller = row
        return PropertyWithSeller(
            listing=_to_domain(model),
            seller=user_to_summary(seller) if seller is not None else None,
        )

    async def list_page(
        self, *, limit: int = 10, offset: int = 0
    ) -> tuple[list[PropertyWithSeller], int]:
        query = (
            select(PropertyModel, UserModel)
            .outerjoin(UserModel, UserModel.id == PropertyModel.seller_id)
            .order_by(PropertyModel.created_at.asc(), PropertyModel.id.asc())
            .limit(limit)
            .offset(offset)
        )
        count_query = select(func.count()).select_from(PropertyModel)

        with storage_errors("list_properties"):
            result = await self._session.execute(query)
            rows = result.all()

            count_result = await self._session.execute(count_query)
            total = count_result.scalar_one()

        items = [
            PropertyWithSeller(
                listing=_to_domain(model),
                seller=user_to_summary(seller) if seller is not None else None,
            )
            for model, seller in rows
        ]
        return items, total

    async def update_details(
        self, property_id: UUID, details: PropertyDetails
    ) -> PropertyListing | None:
        stmt = (
            update(PropertyModel)
            .where(PropertyModel.id == property_id)
            .values(**_details_values(details), updated_at=func.now())
            .returning(PropertyModel)
            .execution_options(populate_existing=True)
        )
        with storage_errors("update_property"):
            model = (await self._session.execute(stmt)).scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    async def delete(self, property_id: UUID) -> bool:
        stmt = delete(PropertyModel).where(PropertyModel.id == property_id)
        with storage_errors("delete_property"):
            result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def add_like(self, property_id: UUID, user_id: UUID) -> list[UUID] | None:
        stmt = (
            update(PropertyModel)
            .where(
                PropertyModel.id == property_id,
                ~PropertyModel.liked_by.contains([user_id]),
            )
            .values(
                liked_by=func.array_prepend(_user_id(user_id), PropertyModel.liked_by),
                updated_at=func.now(),
            )
            .returning(PropertyModel.liked_by)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("add_like"):
            liked_by = (await self._session.execute(stmt)).scalar_one_or_none()
        return list(liked_by) if liked_by is not None else None

    async def remove_like(self, property_id: UUID, user_id: UUID) -> list[UUID] | None:
        stmt = (
            update(PropertyModel)
            .where(
                PropertyModel.id == property_id,
                PropertyModel.liked_by.contains([user_id]),
            )
            .values(
                liked_by=func.array_remove(PropertyModel.liked_by, _user_id(user_id)),
                updated_at=func.now(),
            )
            .returning(PropertyModel.liked_by)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("remove_like"):
            liked_by = (await self._session.execute(stmt)).scalar_one_or_none()
        return list(liked_by) if liked_by is not None else None
