"""
Integration tests for the API layer.

Storage, identity and mail ports are replaced through
`app.dependency_overrides` with in-memory fakes, so no PostgreSQL or SMTP
server is needed.
"""
from dataclasses import dataclass
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import (
    get_identity_verifier,
    get_notification_sender,
    get_property_repo,
    get_user_repo,
)
from src.api.main import app
from src.application.interfaces.identity_verifier import AuthenticatedUser
from src.application.interfaces.property_repository import StorageError
from src.domain.entities.user_summary import UserSummary
from tests.fakes import (
    FakeIdentityVerifier,
    InMemoryPropertyRepository,
    InMemoryUserRepository,
    RecordingNotificationSender,
)

VALID_BODY = {
    "place": "12 Lake View Road, Pune",
    "area": 1250,
    "bedrooms": 3,
    "bathrooms": 2,
    "nearbyHospitals": "Ruby Hall Clinic",
    "nearbyColleges": "Fergusson College",
}

SELLER_AUTH = {"Authorization": "Bearer seller-token"}
BUYER_AUTH = {"Authorization": "Bearer buyer-token"}


@dataclass
class World:
    client: TestClient
    repo: InMemoryPropertyRepository
    users: InMemoryUserRepository
    sender: RecordingNotificationSender
    seller: UserSummary
    buyer: UserSummary


@pytest.fixture()
def world():
    users = InMemoryUserRepository()
    seller = users.add_user(first_name="Asha", email="asha@example.com", phone="+91-9811111111")
    buyer = users.add_user(first_name="Vikram", email="vikram@example.com")
    repo = InMemoryPropertyRepository(users)
    sender = RecordingNotificationSender()
    verifier = FakeIdentityVerifier(
        {
            "seller-token": AuthenticatedUser(id=seller.id, email=seller.email),
            "buyer-token": AuthenticatedUser(id=buyer.id, email=buyer.email),
        }
    )

    app.dependency_overrides[get_property_repo] = lambda: repo
    app.dependency_overrides[get_user_repo] = lambda: users
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    app.dependency_overrides[get_notification_sender] = lambda: sender

    yield World(TestClient(app), repo, users, sender, seller, buyer)
    app.dependency_overrides.clear()


class TestCreateProperty:
    def test_creates_listing_for_caller(self, world: World) -> None:
        response = world.client.post("/api/properties", json=VALID_BODY, headers=SELLER_AUTH)

        assert response.status_code == 201
        data = response.json()
        assert data["sellerId"] == str(world.seller.id)
        assert data["likedBy"] == []
        assert data["nearbyHospitals"] == "Ruby Hall Clinic"
        assert world.repo.stored(UUID(data["id"])) is not None

    def test_numeric_strings_are_accepted(self, world: World) -> None:
        body = {**VALID_BODY, "area": "980.5", "bedrooms": "2"}
        response = world.client.post("/api/properties", json=body, headers=SELLER_AUTH)
        assert response.status_code == 201
        assert response.json()["area"] == 980.5

    def test_reports_every_invalid_field(self, world: World) -> None:
        body = {k: v for k, v in VALID_BODY.items() if k != "place"}
        body["area"] = "not-a-number"

        response = world.client.post("/api/properties", json=body, headers=SELLER_AUTH)

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert {e["field"] for e in errors} == {"place", "area"}
        assert {"field": "place", "message": "Place is required"} in errors
        assert {"field": "area", "message": "Area is required"} in errors

    def test_blank_text_and_negative_numbers_rejected(self, world: World) -> None:
        body = {**VALID_BODY, "nearbyColleges": "   ", "bathrooms": -1}
        response = world.client.post("/api/properties", json=body, headers=SELLER_AUTH)

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"nearbyColleges", "bathrooms"}

    def test_booleans_are_not_numbers(self, world: World) -> None:
        body = {**VALID_BODY, "area": True, "bedrooms": False}
        response = world.client.post("/api/properties", json=body, headers=SELLER_AUTH)

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert {e["field"] for e in errors} == {"area", "bedrooms"}
        assert {"field": "area", "message": "Area is required"} in errors
        assert world.client.get("/api/properties").json()["totalCount"] == 0

    def test_requires_token(self, world: World) -> None:
        response = world.client.post("/api/properties", json=VALID_BODY)
        assert response.status_code == 401

    def test_rejects_unknown_token(self, world: World) -> None:
        response = world.client.post(
            "/api/properties", json=VALID_BODY, headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401
        assert response.json() == {"msg": "Token is not valid."}


class TestListProperties:
    def test_paginates_25_listings(self, world: World) -> None:
        for n in range(25):
            world.repo.seed(world.seller.id, place=f"Flat {n}")

        pages = [
            world.client.get("/api/properties", params={"page": page, "limit": 10}).json()
            for page in (1, 2, 3)
        ]

        assert [len(p["properties"]) for p in pages] == [10, 10, 5]
        assert [p["currentPage"] for p in pages] == [1, 2, 3]
        assert all(p["totalPages"] == 3 for p in pages)
        ids = {item["id"] for p in pages for item in p["properties"]}
        assert len(ids) == 25

    def test_defaults_and_seller_summary(self, world: World) -> None:
        world.repo.seed(world.seller.id)

        data = world.client.get("/api/properties").json()

        assert data["currentPage"] == 1
        assert data["totalCount"] == 1
        seller = data["properties"][0]["seller"]
        assert seller == {
            "id": str(world.seller.id),
            "firstName": "Asha",
            "lastName": world.seller.last_name,
            "email": "asha@example.com",
            "phone": "+91-9811111111",
        }

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"page": 0}, "page"),
            ({"page": -2}, "page"),
            ({"page": 10**20}, "page"),
            ({"page": 1_000_001}, "page"),
            ({"limit": 0}, "limit"),
            ({"limit": 10_000}, "limit"),
            ({"limit": "ten"}, "limit"),
        ],
    )
    def test_out_of_range_paging_rejected(self, world: World, params: dict, field: str) -> None:  # type: ignore[type-arg]
        response = world.client.get("/api/properties", params=params)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field


class TestGetProperty:
    def test_returns_listing_with_seller(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        response = world.client.get(f"/api/properties/{listing.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(listing.id)
        assert data["seller"]["email"] == "asha@example.com"

    def test_returns_404_if_not_found(self, world: World) -> None:
        response = world.client.get(f"/api/properties/{uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"msg": "Property not found"}

    def test_malformed_id_is_validation_error(self, world: World) -> None:
        response = world.client.get("/api/properties/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "id"


class TestUpdateProperty:
    def test_owner_updates(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        body = {**VALID_BODY, "place": "4 Riverside, Aundh", "bedrooms": 4}

        response = world.client.put(f"/api/properties/{listing.id}", json=body, headers=SELLER_AUTH)

        assert response.status_code == 200
        assert response.json()["place"] == "4 Riverside, Aundh"
        assert response.json()["bedrooms"] == 4

    def test_non_owner_forbidden_and_storage_unchanged(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        body = {**VALID_BODY, "place": "Hijacked"}

        response = world.client.put(f"/api/properties/{listing.id}", json=body, headers=BUYER_AUTH)

        assert response.status_code == 403
        assert response.json() == {"msg": "User not authorized"}
        assert world.repo.stored(listing.id).place == listing.place  # type: ignore[union-attr]

    def test_partial_body_is_rejected_not_cleared(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)

        response = world.client.put(
            f"/api/properties/{listing.id}", json={"place": "Only place"}, headers=SELLER_AUTH
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"area", "bedrooms", "bathrooms", "nearbyHospitals", "nearbyColleges"}
        assert world.repo.stored(listing.id).place == listing.place  # type: ignore[union-attr]

    def test_returns_404_if_not_found(self, world: World) -> None:
        response = world.client.put(f"/api/properties/{uuid4()}", json=VALID_BODY, headers=SELLER_AUTH)
        assert response.status_code == 404


class TestDeleteProperty:
    def test_owner_deletes_then_404(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)

        response = world.client.delete(f"/api/properties/{listing.id}", headers=SELLER_AUTH)
        assert response.status_code == 200
        assert response.json() == {"msg": "Property removed"}

        assert world.client.get(f"/api/properties/{listing.id}").status_code == 404

    def test_non_owner_forbidden(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        response = world.client.delete(f"/api/properties/{listing.id}", headers=BUYER_AUTH)
        assert response.status_code == 403
        assert world.repo.stored(listing.id) is not None


class TestLikeToggle:
    def test_like_then_duplicate_like(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)

        first = world.client.put(f"/api/properties/like/{listing.id}", headers=BUYER_AUTH)
        second = world.client.put(f"/api/properties/like/{listing.id}", headers=BUYER_AUTH)

        assert first.status_code == 200
        assert first.json() == {"propertyId": str(listing.id), "likedBy": [str(world.buyer.id)]}
        assert second.status_code == 400
        assert second.json() == {"msg": "Property already liked"}
        assert world.repo.stored(listing.id).liked_by == [world.buyer.id]  # type: ignore[union-attr]

    def test_unlike_without_like(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        response = world.client.put(f"/api/properties/unlike/{listing.id}", headers=BUYER_AUTH)
        assert response.status_code == 400
        assert response.json() == {"msg": "Property has not yet been liked"}

    def test_like_then_unlike_round_trip(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        world.client.put(f"/api/properties/like/{listing.id}", headers=SELLER_AUTH)

        world.client.put(f"/api/properties/like/{listing.id}", headers=BUYER_AUTH)
        response = world.client.put(f"/api/properties/unlike/{listing.id}", headers=BUYER_AUTH)

        assert response.status_code == 200
        assert response.json()["likedBy"] == [str(world.seller.id)]

    @pytest.mark.parametrize("action", ["like", "unlike"])
    def test_missing_listing_is_404(self, world: World, action: str) -> None:
        response = world.client.put(f"/api/properties/{action}/{uuid4()}", headers=BUYER_AUTH)
        assert response.status_code == 404

    def test_requires_token(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        response = world.client.put(f"/api/properties/like/{listing.id}")
        assert response.status_code == 401


class TestInterest:
    def test_sends_seller_contact_to_caller(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id, place="7 Koregaon Park")

        response = world.client.put(f"/api/properties/interested/{listing.id}", headers=BUYER_AUTH)

        assert response.status_code == 200
        assert response.json() == {"msg": "Interest shown and email sent"}
        assert len(world.sender.sent) == 1
        message = world.sender.sent[0]
        assert message.to == "vikram@example.com"
        assert "7 Koregaon Park" in message.body
        assert "asha@example.com" in message.body

    def test_missing_listing_is_404_without_dispatch(self, world: World) -> None:
        response = world.client.put(f"/api/properties/interested/{uuid4()}", headers=BUYER_AUTH)
        assert response.status_code == 404
        assert world.sender.sent == []

    def test_delivery_failure_is_reported(self, world: World) -> None:
        listing = world.repo.seed(world.seller.id)
        world.sender.fail = True

        response = world.client.put(f"/api/properties/interested/{listing.id}", headers=BUYER_AUTH)

        assert response.status_code == 500
        assert response.json() == {"msg": "Email sending failed"}
        assert world.repo.stored(listing.id).liked_by == []  # type: ignore[union-attr]


class TestStorageFailure:
    def test_storage_error_is_generic_500(self, world: World) -> None:
        class BrokenRepo(InMemoryPropertyRepository):
            async def list_page(self, *, limit: int = 10, offset: int = 0):  # type: ignore[no-untyped-def]
                raise StorageError("list_properties failed")

        app.dependency_overrides[get_property_repo] = lambda: BrokenRepo()

        response = world.client.get("/api/properties")

        assert response.status_code == 500
        assert response.json() == {"msg": "Server error"}


def test_health_reports_degraded_without_database() -> None:
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


def test_health_does_not_expose_connection_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    database = MagicMock()
    database.session_factory.side_effect = OSError(
        "could not connect to postgresql://rentify:hunter2@db:5432/rentify"
    )
    monkeypatch.setattr(app.state, "database", database, raising=False)

    response = TestClient(app).get("/health")

    assert response.json() == {"status": "degraded", "database": "error"}
    assert "hunter2" not in response.text
