"""
SQLAlchemy ORM models.

These are purely infrastructure concerns; domain entities are mapped to/from
these models inside the repository implementations.
"""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.connection import Base


class UserModel(Base):
    """Users are owned by the auth service; this service only reads them."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    properties: Mapped[list["PropertyModel"]] = relationship(
        "PropertyModel", back_populates="seller", lazy="select"
    )


class PropertyModel(Base):
    __tablename__ = "properties"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    seller_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Editable details
    place: Mapped[str] = mapped_column(Text, nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False)
    bedrooms: Mapped[float] = mapped_column(Float, nullable=False)
    bathrooms: Mapped[float] = mapped_column(Float, nullable=False)
    nearby_hospitals: Mapped[str] = mapped_column(Text, nullable=False)
    nearby_colleges: Mapped[str] = mapped_column(Text, nullable=False)

    # Most-recent-first, duplicates prevented by the conditional updates
    liked_by: Mapped[list[uuid.UUID]] = mapped_column(
        ARRAY(UUID(as_uuid=True)),
        nullable=False,
        default=list,
        server_default=text("'{}'"),
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    seller: Mapped[UserModel] = relationship("UserModel", back_populates="properties")

    __table_args__ = (
        Index("ix_properties_created_at_id", "created_at", "id"),
    )
