from dataclasses import dataclass
from uuid import UUID

from src.domain.entities.property_listing import PropertyListing


@dataclass(frozen=True)
class UserSummary:
    """Public contact projection of a user, joined onto listings as the seller."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str


@dataclass(frozen=True)
class PropertyWithSeller:
    listing: PropertyListing
    seller: UserSummary | None
