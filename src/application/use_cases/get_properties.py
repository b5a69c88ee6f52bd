import math
from dataclasses import dataclass
from uuid import UUID

from src.application.interfaces.property_repository import PropertyRepository
from src.domain.entities.user_summary import PropertyWithSeller
from src.domain.errors import InvalidPageRequestError, PropertyNotFoundError

# Keeps the computed OFFSET well inside a signed 64-bit integer
MAX_PAGE = 1_000_000


@dataclass
class ListPropertiesInput:
    page: int = 1
    limit: int = 10


@dataclass
class ListPropertiesOutput:
    items: list[PropertyWithSeller]
    total_count: int
    total_pages: int
    current_page: int


class ListProperties:
    """Use case: One page of listings in insertion order, sellers joined in."""

    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, input_data: ListPropertiesInput) -> ListPropertiesOutput:
        if not 1 <= input_data.page <= MAX_PAGE:
            raise InvalidPageRequestError("page", f"page must be between 1 and {MAX_PAGE}")
        if input_data.limit < 1:
            raise InvalidPageRequestError("limit", "limit must be at least 1")

        offset = (input_data.page - 1) * input_data.limit
        items, total = await self._property_repo.list_page(limit=input_data.limit, offset=offset)

        return ListPropertiesOutput(
            items=items,
            total_count=total,
            total_pages=math.ceil(total / input_data.limit),
            current_page=input_data.page,
        )


class GetProperty:
    def __init__(self, property_repo: PropertyRepository) -> None:
        self._property_repo = property_repo

    async def execute(self, property_id: UUID) -> PropertyWithSeller:
        found = await self._property_repo.get_with_seller(property_id)
        if found is None:
            raise PropertyNotFoundError(property_id)
        return found
