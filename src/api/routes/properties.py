from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_create_property_use_case,
    get_current_user,
    get_delete_property_use_case,
    get_like_property_use_case,
    get_list_properties_use_case,
    get_property_use_case,
    get_register_interest_use_case,
    get_unlike_property_use_case,
    get_update_property_use_case,
)
from src.api.schemas.property_schemas import (
    LikesResponse,
    MessageResponse,
    PaginatedPropertiesResponse,
    PropertyDetailResponse,
    PropertyDetailsRequest,
    PropertyResponse,
    SellerSummaryResponse,
)
from src.application.interfaces.identity_verifier import AuthenticatedUser
from src.application.use_cases.create_property import CreateProperty, CreatePropertyInput
from src.application.use_cases.get_properties import (
    MAX_PAGE,
    GetProperty,
    ListProperties,
    ListPropertiesInput,
)
from src.application.use_cases.register_interest import RegisterInterest, RegisterInterestInput
from src.application.use_cases.toggle_property_like import LikeProperty, UnlikeProperty
from src.application.use_cases.update_property import (
    DeleteProperty,
    UpdateProperty,
    UpdatePropertyInput,
)
from src.config import settings
from src.domain.entities.property_listing import PropertyListing
from src.domain.entities.user_summary import PropertyWithSeller

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _listing_to_response(listing: PropertyListing) -> PropertyResponse:
    return PropertyResponse(
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


def _detail_to_response(found: PropertyWithSeller) -> PropertyDetailResponse:
    seller = found.seller
    return PropertyDetailResponse(
        **_listing_to_response(found.listing).model_dump(),
        seller=SellerSummaryResponse(
            id=seller.id,
            first_name=seller.first_name,
            last_name=seller.last_name,
            email=seller.email,
            phone=seller.phone,
        )
        if seller is not None
        else None,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PropertyResponse)
async def create_property(
    body: PropertyDetailsRequest,
    caller: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateProperty = Depends(get_create_property_use_case),
) -> PropertyResponse:
    listing = await use_case.execute(CreatePropertyInput(caller=caller, details=body.to_details()))
    return _listing_to_response(listing)


@router.get("", response_model=PaginatedPropertiesResponse)
async def list_properties(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=settings.default_page_limit, ge=1, le=settings.max_page_limit),
    use_case: ListProperties = Depends(get_list_properties_use_case),
) -> PaginatedPropertiesResponse:
    """List properties in creation order with the seller's contact summary."""
    result = await use_case.execute(ListPropertiesInput(page=page, limit=limit))
    return PaginatedPropertiesResponse(
        properties=[_detail_to_response(item) for item in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total_count=result.total_count,
    )


@router.put("/like/{property_id}", response_model=LikesResponse)
async def like_property(
    property_id: UUID,
    caller: AuthenticatedUser = Depends(get_current_user),
    use_case: LikeProperty = Depends(get_like_property_use_case),
) -> LikesResponse:
    liked_by = await use_case.execute(caller, property_id)
    return LikesResponse(property_id=property_id, liked_by=liked_by)


@router.put("/unlike/{property_id}", response_model=LikesResponse)
async def unlike_property(
    property_id: UUID,
    caller: AuthenticatedUser = Depends(get_current_user),
    use_case: UnlikeProperty = Depends(get_unlike_property_use_case),
) -> LikesResponse:
    liked_by = await use_case.execute(caller, property_id)
    return LikesResponse(property_id=property_id, liked_by=liked_by)


@router.put("/interested/{property_id}", response_model=MessageResponse)
async def register_interest(
    property_id: UUID,
    caller: AuthenticatedUser = Depends(get_current_user),
    use_case: RegisterInterest = Depends(get_register_interest_use_case),
) -> MessageResponse:
    """Email the caller the seller's contact details for this property."""
    await use_case.execute(RegisterInterestInput(caller=caller, property_id=property_id))
    return MessageResponse(msg="Interest shown and email sent")


@router.get("/{property_id}", response_model=PropertyDetailResponse)
async def get_property(
    property_id: UUID,
    use_case: GetProperty = Depends(get_property_use_case),
) -> PropertyDetailResponse:
    return _detail_to_response(await use_case.execute(property_id))


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: UUID,
    body: PropertyDetailsRequest,
    caller: AuthenticatedUser = Depends(get_current_user),
    use_case: UpdateProperty = Depends(get_update_property_use_case),
) -> PropertyResponse:
    listing = await use_case.execute(
        UpdatePropertyInput(caller=caller, property_id=property_id, details=body.to_details())
    )
    return _listing_to_response(listing)


@router.delete("/{property_id}", response_model=MessageResponse)
async def delete_property(
    property_id: UUID,
    caller: AuthenticatedUser = Depends(get_current_user),
    use_case: DeleteProperty = Depends(get_delete_property_use_case),
) -> MessageResponse:
    await use_case.execute(caller, property_id)
    return MessageResponse(msg="Property removed")
