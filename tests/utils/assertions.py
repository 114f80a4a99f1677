"""Custom assertion helpers."""

from collections import Counter
from typing import Any, Dict, Iterable
import json

from src.models.cluster import ListingCluster
from src.models.listing import Listing


def assert_valid_cluster(cluster: ListingCluster) -> None:
    """Assert that a cluster is non-empty and its coordinate is on the map."""
    assert cluster.id
    assert cluster.count >= 1
    assert -90.0 <= cluster.coordinate.latitude <= 90.0
    assert -180.0 <= cluster.coordinate.longitude <= 180.0


def assert_partition(clusters: Iterable[ListingCluster], listings: Iterable[Listing]) -> None:
    """Assert every listing with coordinates is in exactly one cluster and no other listing is."""
    clusters = list(clusters)
    for cluster in clusters:
        assert_valid_cluster(cluster)

    counts = Counter(listing_id for cluster in clusters for listing_id in cluster.listing_ids)
    expected = {listing.id for listing in listings if listing.has_coordinates}
    assert set(counts) == expected
    assert all(count == 1 for count in counts.values()), "Listing appears in more than one cluster"


def assert_valid_response(response: Dict[str, Any], expected_status: int = 200) -> None:
    """Assert that a Vercel function response is valid."""
    assert 'statusCode' in response
    assert response['statusCode'] == expected_status
    assert 'headers' in response
    assert 'body' in response

    if 'application/json' in response.get('headers', {}).get('Content-Type', ''):
        try:
            json.loads(response['body'])
        except json.JSONDecodeError:
            assert False, "Response body is not valid JSON"
