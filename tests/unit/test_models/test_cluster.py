"""Tests for ListingCluster model."""

import pytest
from pydantic import ValidationError
from src.models.cluster import ListingCluster
from src.models.listing import Listing
from src.models.viewport import Coordinate


@pytest.mark.unit
def test_cluster_single():
    """Test size-1 cluster helpers."""
    listing = Listing(id=7, latitude=59.9, longitude=10.7)
    cluster = ListingCluster(
        id="7",
        coordinate=Coordinate(latitude=59.9, longitude=10.7),
        listings=(listing,)
    )

    assert cluster.count == 1
    assert cluster.is_single
    assert cluster.listing_ids == [7]


@pytest.mark.unit
def test_cluster_multiple():
    """Test size-N cluster keeps member order."""
    members = (Listing(id=2), Listing(id=None), Listing(id=1))
    cluster = ListingCluster(
        id="1_2",
        coordinate=Coordinate(latitude=59.9, longitude=10.7),
        listings=members
    )

    assert cluster.count == 3
    assert not cluster.is_single
    assert cluster.listing_ids == [2, None, 1]


@pytest.mark.unit
def test_cluster_requires_members():
    """Test that an empty cluster is rejected."""
    with pytest.raises(ValidationError):
        ListingCluster(
            id="empty",
            coordinate=Coordinate(latitude=0, longitude=0),
            listings=()
        )
