"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LISTINGS_API_BASE_URL", "http://listings.test")
os.environ.setdefault("LOG_FORMAT", "text")

from src.models.listing import Listing
from src.models.viewport import ViewportRegion


@pytest.fixture
def oslo_viewport():
    """Default 0.04 degree viewport over central Oslo."""
    return ViewportRegion.around(59.91, 10.75, 0.04)


@pytest.fixture
def sample_listings():
    """Listings in central Oslo, one without coordinates."""
    return [
        Listing(id=1, title="Snow clearing", latitude=59.9139, longitude=10.7522, userId="user-1"),
        Listing(id=2, title="Lawn mowing", latitude=59.9141, longitude=10.7525, userId="user-2"),
        Listing(id=3, title="Window washing", latitude=59.9270, longitude=10.7300, userId="user-3"),
        Listing(id=4, title="Dog walking", latitude=None, longitude=None, userId="user-4"),
    ]


@pytest.fixture
def listings_payload():
    """Listing service envelope as sent over the wire."""
    return {
        "success": True,
        "message": None,
        "data": [
            {
                "id": 10,
                "title": "Moving help",
                "description": "Two people, one van",
                "imageUrl": "https://cdn.test/10.jpg",
                "address": "Karl Johans gate 1",
                "latitude": 59.9127,
                "longitude": 10.7461,
                "price": 500.0,
                "userId": "000123.abcdef0123456789",
                "userName": "Kari",
                "isCompleted": False,
                "createdAt": "2026-10-01T12:00:00Z"
            },
            {
                "id": 11,
                "title": "Furniture assembly",
                "description": "",
                "imageUrl": None,
                "address": "Storgata 5",
                "latitude": 59.9150,
                "longitude": 10.7510,
                "price": 0,
                "userId": "000456.fedcba9876543210",
                "userName": None,
                "isCompleted": None,
                "status": "COMPLETED",
                "createdAt": None
            }
        ]
    }


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2026-10-19 12:00:00") as frozen_time:
        yield frozen_time
