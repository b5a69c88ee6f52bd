from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.entities.property_listing import PropertyDetails, PropertyListing
from src.domain.entities.user_summary import PropertyWithSeller


class StorageError(Exception):
    """Generic backend failure; the cause is logged, never shown to callers."""


class PropertyRepository(ABC):
    """Port for persisting and querying PropertyListing aggregates."""

    @abstractmethod
    async def add(self, listing: PropertyListing) -> None:
        ...

    @abstractmethod
    async def get_by_id(self, property_id: UUID) -> PropertyListing | None:
        ...

    @abstractmethod
    async def get_with_seller(self, property_id: UUID) -> PropertyWithSeller | None:
        ...

    @abstractmethod
    async def list_page(
        self, *, limit: int = 10, offset: int = 0
    ) -> tuple[list[PropertyWithSeller], int]:
        """Return (items in insertion order, total_count)."""
        ...

    @abstractmethod
    async def update_details(
        self, property_id: UUID, details: PropertyDetails
    ) -> PropertyListing | None:
        ...

    @abstractmethod
    async def delete(self, property_id: UUID) -> bool:
        ...

    @abstractmethod
    async def add_like(self, property_id: UUID, user_id: UUID) -> list[UUID] | None:
        """
        Prepend user_id to liked_by only if absent, as one atomic step.

        Returns the new liked_by, or None when nothing changed.
        """
        ...

    @abstractmethod
    async def remove_like(self, property_id: UUID, user_id: UUID) -> list[UUID] | None:
        """Remove user_id from liked_by only if present. None when nothing changed."""
        ...
