from uuid import UUID


class PropertyError(Exception):
    """Base class for listing rule violations."""


class PropertyNotFoundError(PropertyError):
    def __init__(self, property_id: UUID) -> None:
        self.property_id = property_id
        super().__init__(f"Property {property_id} not found.")


class SellerNotFoundError(PropertyError):
    def __init__(self, seller_id: UUID) -> None:
        self.seller_id = seller_id
        super().__init__(f"Seller {seller_id} not found.")


class NotPropertyOwnerError(PropertyError):
    """Raised when someone other than the seller tries to modify a listing."""

    def __init__(self, property_id: UUID, user_id: UUID) -> None:
        self.property_id = property_id
        self.user_id = user_id
        super().__init__(f"User {user_id} does not own property {property_id}.")


class AlreadyLikedError(PropertyError):
    def __init__(self, property_id: UUID, user_id: UUID) -> None:
        self.property_id = property_id
        self.user_id = user_id
        super().__init__(f"Property {property_id} already liked by {user_id}.")


class NotLikedError(PropertyError):
    def __init__(self, property_id: UUID, user_id: UUID) -> None:
        self.property_id = property_id
        self.user_id = user_id
        super().__init__(f"Property {property_id} has not yet been liked by {user_id}.")


class InvalidPageRequestError(PropertyError):
    """Raised when a page or page size falls outside the accepted range."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
