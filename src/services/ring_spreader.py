"""Ring layout for listings that share (nearly) the same coordinate.

When clustering is off, listings at one address would otherwise render as a
single stacked marker. Each group of co-located listings is laid out on a
small circle around the group's base coordinate so every listing stays
individually tappable.
"""

import math
from typing import Iterable

from src.models.cluster import ListingCluster
from src.models.listing import Listing
from src.models.viewport import Coordinate
from src.services.geo import offset_coordinate

# 5 decimals is roughly 1.1 m
KEY_PRECISION = 5
KEY_STEP = 10 ** -KEY_PRECISION

BASE_RADIUS_METERS = 18.0
RADIUS_STEP_METERS = 4.0
MAX_RADIUS_METERS = 32.0

CoordinateKey = tuple[float, float]


def coordinate_key(latitude: float, longitude: float) -> CoordinateKey:
    return round(latitude, KEY_PRECISION), round(longitude, KEY_PRECISION)


def _sort_id(listing: Listing) -> int:
    return listing.id if listing.id is not None else 0


def _neighbour_keys(key: CoordinateKey) -> list[CoordinateKey]:
    """The key itself and the eight keys one rounding step away."""
    return [
        coordinate_key(key[0] + d_lat * KEY_STEP, key[1] + d_lon * KEY_STEP)
        for d_lat in (-1, 0, 1)
        for d_lon in (-1, 0, 1)
    ]


def group_by_coordinate(listings: Iterable[Listing]) -> list[tuple[CoordinateKey, list[Listing]]]:
    """
    Group listings whose rounded coordinates match.

    A listing joins the earliest group whose anchor key is within one
    rounding step on both axes, so two points straddling a rounding boundary
    are not split apart. Anchors are picked in ascending (key, id) order,
    which makes grouping independent of input order. Anchors are indexed by
    key, so each listing inspects at most nine candidates.
    """
    keyed = [
        (coordinate_key(listing.latitude, listing.longitude), listing)
        for listing in listings
        if listing.has_coordinates
    ]
    keyed.sort(key=lambda item: (item[0], _sort_id(item[1])))

    groups: list[tuple[CoordinateKey, list[Listing]]] = []
    anchors: dict[CoordinateKey, int] = {}
    for key, listing in keyed:
        candidates = [anchors[k] for k in _neighbour_keys(key) if k in anchors]
        if candidates:
            groups[min(candidates)][1].append(listing)
        else:
            anchors[key] = len(groups)
            groups.append((key, [listing]))
    return groups


def ring_radius(count: int) -> float:
    """Ring radius in meters for a group of ``count`` listings."""
    return min(BASE_RADIUS_METERS + (count - 2) * RADIUS_STEP_METERS, MAX_RADIUS_METERS)


def ring_positions(base: Coordinate, count: int) -> list[Coordinate]:
    """Evenly spaced positions on a circle around ``base``; ``[base]`` for one member."""
    if count <= 1:
        return [base]

    radius = ring_radius(count)
    step = 2.0 * math.pi / count
    return [offset_coordinate(base, radius, step * index) for index in range(count)]


def _marker_id(listing: Listing, suffix: str, index: int | None = None) -> str:
    """
    Marker id for one listing.

    Persisted listings use their id, unsaved ones the coordinate key plus
    their ring slot so several of them never share a marker id.
    """
    if listing.id is not None:
        return str(listing.id) if index is None else f"{listing.id}_{suffix}"
    return f"0_{suffix}" if index is None else f"0-{index}_{suffix}"


def spread_listings(listings: Iterable[Listing]) -> list[ListingCluster]:
    """Produce one single-listing cluster per listing, ringed where co-located."""
    clusters: list[ListingCluster] = []

    for (key_lat, key_lon), group in group_by_coordinate(listings):
        members = sorted(group, key=_sort_id)
        first = members[0]
        base = Coordinate(latitude=first.latitude, longitude=first.longitude)
        suffix = f"{key_lat:.5f}_{key_lon:.5f}"

        if len(members) == 1:
            clusters.append(
                ListingCluster(id=_marker_id(first, suffix), coordinate=base, listings=(first,))
            )
            continue

        positions = ring_positions(base, len(members))
        for index, (listing, position) in enumerate(zip(members, positions)):
            clusters.append(
                ListingCluster(
                    id=_marker_id(listing, suffix, index),
                    coordinate=position,
                    listings=(listing,),
                )
            )

    return clusters
