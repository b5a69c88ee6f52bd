from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities.property_listing import PropertyDetails

# Message reported for each request field when it fails validation
FIELD_MESSAGES: dict[str, str] = {
    "place": "Place is required",
    "area": "Area is required",
    "bedrooms": "Number of bedrooms is required",
    "bathrooms": "Number of bathrooms is required",
    "nearbyHospitals": "Nearby hospitals are required",
    "nearbyColleges": "Nearby colleges are required",
}


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; lax mode would otherwise coerce true to 1.0
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


Number = Annotated[float, BeforeValidator(_reject_bool)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyDetailsRequest(CamelModel):
    """Body of both create and update; every field is required on both."""

    model_config = ConfigDict(str_strip_whitespace=True)

    place: str = Field(min_length=1)
    area: Number = Field(ge=0, allow_inf_nan=False)
    bedrooms: Number = Field(ge=0, allow_inf_nan=False)
    bathrooms: Number = Field(ge=0, allow_inf_nan=False)
    nearby_hospitals: str = Field(min_length=1)
    nearby_colleges: str = Field(min_length=1)

    def to_details(self) -> PropertyDetails:
        return PropertyDetails(
            place=self.place,
            area=self.area,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            nearby_hospitals=self.nearby_hospitals,
            nearby_colleges=self.nearby_colleges,
        )


class SellerSummaryResponse(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str


class PropertyResponse(CamelModel):
    id: UUID
    seller_id: UUID
    place: str
    area: float
    bedrooms: float
    bathrooms: float
    nearby_hospitals: str
    nearby_colleges: str
    liked_by: list[UUID]
    created_at: datetime
    updated_at: datetime


class PropertyDetailResponse(PropertyResponse):
    seller: SellerSummaryResponse | None = None


class PaginatedPropertiesResponse(CamelModel):
    properties: list[PropertyDetailResponse]
    total_pages: int
    current_page: int
    total_count: int


class LikesResponse(CamelModel):
    property_id: UUID
    liked_by: list[UUID]


class MessageResponse(BaseModel):
    msg: str


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    errors: list[FieldError]
