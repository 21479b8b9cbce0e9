"""Geographic view: attention scoring and greedy point clustering."""

from carenet.geo.attention import AttentionScore, classify_score, score_attention, scored_point
from carenet.geo.clustering import (
    Cluster,
    cluster_points,
    dominant_attention,
    summarize_attention,
)

__all__ = [
    "AttentionScore",
    "classify_score",
    "score_attention",
    "scored_point",
    "Cluster",
    "cluster_points",
    "dominant_attention",
    "summarize_attention",
]
