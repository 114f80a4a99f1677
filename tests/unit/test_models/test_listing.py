"""Tests for Listing models."""

import pytest
from src.models.listing import Listing, ListingsResponse
from tests.utils.factories import create_listing_data


@pytest.mark.unit
def test_listing_from_wire_payload():
    """Test camelCase wire names map onto listing fields."""
    data = create_listing_data(listing_id=42, latitude=59.9, longitude=10.7)

    listing = Listing.model_validate(data)

    assert listing.id == 42
    assert listing.image_url == data["imageUrl"]
    assert listing.user_id == data["userId"]
    assert listing.latitude == 59.9
    assert listing.has_coordinates


@pytest.mark.unit
def test_listing_accepts_python_field_names():
    """Test listings can be built with snake_case names."""
    listing = Listing(id=1, user_id="user-1", image_url="https://cdn.test/1.jpg")

    assert listing.user_id == "user-1"
    assert listing.image_url == "https://cdn.test/1.jpg"


@pytest.mark.unit
def test_listing_without_id():
    """Test that not-yet-persisted listings have no id."""
    listing = Listing(title="Draft", latitude=59.9, longitude=10.7)

    assert listing.id is None


@pytest.mark.unit
@pytest.mark.parametrize("latitude,longitude", [
    (None, None),
    (59.9, None),
    (None, 10.7),
    (95.0, 10.7),
    (59.9, 200.0),
])
def test_listing_without_usable_coordinates(latitude, longitude):
    """Test that missing or out-of-range coordinates are not map-eligible."""
    listing = Listing(id=1, latitude=latitude, longitude=longitude)

    assert not listing.has_coordinates
    assert listing.coordinate is None


@pytest.mark.unit
def test_listing_coordinate():
    """Test coordinate helper."""
    listing = Listing(id=1, latitude=59.9, longitude=10.7)

    assert listing.coordinate.latitude == 59.9
    assert listing.coordinate.longitude == 10.7


@pytest.mark.unit
def test_listing_is_active():
    """Test completed listings are not active."""
    assert Listing(id=1).is_active
    assert Listing(id=1, status="ACTIVE").is_active
    assert not Listing(id=1, status="COMPLETED").is_active
    assert not Listing(id=1, status="completed").is_active
    assert not Listing(id=1, isCompleted=True).is_active


@pytest.mark.unit
def test_listings_response_envelope(listings_payload):
    """Test decoding of the service envelope."""
    response = ListingsResponse.model_validate(listings_payload)

    assert response.success
    assert [listing.id for listing in response.listings] == [10, 11]
    assert response.listings[1].status == "COMPLETED"


@pytest.mark.unit
def test_listings_response_null_data():
    """Test that a null data field means no listings."""
    response = ListingsResponse.model_validate({"success": True, "data": None})

    assert response.listings == []
