"""Referral network graph engine.

Provides:
- Graph building with case-bucket aggregation
- Deterministic column/grid layout
- Visibility filtering with focus mode
- Hover/selection highlight classification
- Network summary metrics
"""

from carenet.graph.builder import BuildResult, build_graph
from carenet.graph.config import ExplorerConfig, LayoutConfig
from carenet.graph.filtering import (
    FilterCriteria,
    FilterMode,
    FilterResult,
    Focused,
    Unfocused,
    filter_graph,
)
from carenet.graph.interaction import InteractionState, classify, resolve_active
from carenet.graph.layout import JitterSource, assign_layout
from carenet.graph.metrics import NetworkStats, VisibleCounts, compute_network_stats

__all__ = [
    # Config
    "ExplorerConfig",
    "LayoutConfig",
    # Building
    "BuildResult",
    "build_graph",
    # Layout
    "JitterSource",
    "assign_layout",
    # Filtering
    "FilterCriteria",
    "FilterMode",
    "FilterResult",
    "Focused",
    "Unfocused",
    "filter_graph",
    # Interaction
    "InteractionState",
    "classify",
    "resolve_active",
    # Metrics
    "NetworkStats",
    "VisibleCounts",
    "compute_network_stats",
]
