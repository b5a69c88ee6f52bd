from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.errors import NotPropertyOwnerError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PropertyDetails:
    """The six seller-editable fields of a listing."""

    place: str
    area: float
    bedrooms: float
    bathrooms: float
    nearby_hospitals: str
    nearby_colleges: str


@dataclass
class PropertyListing:
    """
    Core domain entity representing a single rental property.

    `liked_by` is kept most-recent-first and never holds the same user twice;
    mutation of that set happens atomically in the repository, not here.
    """

    # Identity
    id: UUID = field(default_factory=uuid4)
    seller_id: UUID = field(default_factory=uuid4)

    # Editable details
    place: str = ""
    area: float = 0.0
    bedrooms: float = 0.0
    bathrooms: float = 0.0
    nearby_hospitals: str = ""
    nearby_colleges: str = ""

    # Likes
    liked_by: list[UUID] = field(default_factory=list)

    # Timestamps
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, *, seller_id: UUID, details: PropertyDetails) -> "PropertyListing":
        listing = cls(seller_id=seller_id)
        listing.apply_details(details)
        return listing

    # -------------------------------------------------------------------------
    # Behaviour
    # -------------------------------------------------------------------------

    @property
    def details(self) -> PropertyDetails:
        return PropertyDetails(
            place=self.place,
            area=self.area,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            nearby_hospitals=self.nearby_hospitals,
            nearby_colleges=self.nearby_colleges,
        )

    def apply_details(self, details: PropertyDetails) -> None:
        """Overwrite the editable fields; identity, seller and likes are untouched."""
        self.place = details.place
        self.area = details.area
        self.bedrooms = details.bedrooms
        self.bathrooms = details.bathrooms
        self.nearby_hospitals = details.nearby_hospitals
        self.nearby_colleges = details.nearby_colleges
        self.updated_at = _utcnow()

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.seller_id == user_id

    def ensure_owned_by(self, user_id: UUID) -> None:
        if not self.is_owned_by(user_id):
            raise NotPropertyOwnerError(self.id, user_id)

    def is_liked_by(self, user_id: UUID) -> bool:
        return user_id in self.liked_by
