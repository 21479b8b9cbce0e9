"""Greedy single-pass clustering of map points.

For each unprocessed point in input order a cluster is seeded and every later
unprocessed point closer than the threshold (Euclidean distance in degree
space, measured to the seed) is absorbed. This is O(n^2) and only meant for
hundreds of points; membership for borderline points depends on input order.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from carenet.config import settings
from carenet.models import AttentionLevel, GeoPoint

logger = logging.getLogger(__name__)

# Marker diameter bounds (render hints)
MARKER_SIZE_MIN = 30
MARKER_SIZE_MAX = 60
MARKER_SIZE_PER_MEMBER = 8


def summarize_attention(points: Iterable[GeoPoint]) -> dict[AttentionLevel, int]:
    """Count points per attention level, with every level present."""
    counts = Counter(p.attention for p in points)
    return {level: counts.get(level, 0) for level in AttentionLevel}


def dominant_attention(counts: dict[AttentionLevel, int]) -> AttentionLevel:
    """Worst level present: critical > needs-attention > good."""
    present = [level for level, n in counts.items() if n > 0]
    if not present:
        return AttentionLevel.GOOD
    return max(present, key=lambda level: level.rank)


@dataclass
class Cluster:
    """A group of nearby points with a centroid."""

    lat: float
    lng: float
    members: list[GeoPoint] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.members)

    @property
    def counts(self) -> dict[AttentionLevel, int]:
        return summarize_attention(self.members)

    @property
    def dominant(self) -> AttentionLevel:
        return dominant_attention(self.counts)

    @property
    def color(self) -> str:
        return self.dominant.color

    @property
    def size(self) -> int:
        """Marker diameter in pixels."""
        return max(MARKER_SIZE_MIN, min(MARKER_SIZE_MAX, self.total * MARKER_SIZE_PER_MEMBER))

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "lat": self.lat,
            "lng": self.lng,
            "total": self.total,
            "member_ids": [p.id for p in self.members],
            "counts": {level.value: n for level, n in self.counts.items()},
            "dominant": self.dominant.value,
            "color": self.color,
            "size": self.size,
        }


def degree_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Euclidean distance in lat/lng degree space."""
    return math.sqrt((a.lat - b.lat) ** 2 + (a.lng - b.lng) ** 2)


def cluster_points(
    points: Iterable[GeoPoint],
    threshold_degrees: float | None = None,
) -> list[Cluster]:
    """
    Cluster points greedily.

    Args:
        points: Points in the order they should be processed
        threshold_degrees: Absorb points strictly closer than this
            (defaults to settings.cluster_threshold_degrees)

    Returns:
        Clusters in seed order; points without valid coordinates are skipped
    """
    if threshold_degrees is None:
        threshold_degrees = settings.cluster_threshold_degrees

    valid: list[GeoPoint] = []
    for point in points:
        if point.has_valid_coordinates():
            valid.append(point)
        else:
            logger.debug(f"Skipping point {point.id}: invalid coordinates")

    if len(valid) > settings.cluster_warn_size:
        logger.warning(
            f"Clustering {len(valid)} points (O(n^2)); consider pre-aggregating"
        )

    clusters: list[Cluster] = []
    processed = [False] * len(valid)

    for index, seed in enumerate(valid):
        if processed[index]:
            continue
        processed[index] = True

        members = [seed]
        for other_index in range(index + 1, len(valid)):
            if processed[other_index]:
                continue
            other = valid[other_index]
            if degree_distance(seed, other) < threshold_degrees:
                members.append(other)
                processed[other_index] = True

        if len(members) > 1:
            lat = sum(p.lat for p in members) / len(members)
            lng = sum(p.lng for p in members) / len(members)
        else:
            lat, lng = seed.lat, seed.lng

        clusters.append(Cluster(lat=lat, lng=lng, members=members))

    logger.debug(f"Clustered {len(valid)} points into {len(clusters)} clusters")
    return clusters
