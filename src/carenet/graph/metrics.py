"""Network summary metrics for the explorer's header cards."""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from carenet.models import Case, Graph, NodeType, Organization, OrganizationCategory

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to nearest int with .5 going up (display rounding)."""
    return int(math.floor(value + 0.5))


@dataclass
class NetworkStats:
    """Summary of the full (unfiltered) network."""

    total_cases: int = 0
    total_referrers: int = 0
    total_providers: int = 0
    total_connections: int = 0  # Edges in the built graph

    avg_cases_per_referrer: int = 0
    avg_cases_per_provider: int = 0

    max_connections: int = 0  # Over organization nodes
    min_connections: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_cases": self.total_cases,
            "total_referrers": self.total_referrers,
            "total_providers": self.total_providers,
            "total_connections": self.total_connections,
            "avg_cases_per_referrer": self.avg_cases_per_referrer,
            "avg_cases_per_provider": self.avg_cases_per_provider,
            "max_connections": self.max_connections,
            "min_connections": self.min_connections,
        }


@dataclass
class VisibleCounts:
    """Node/edge counts of a (possibly filtered or focused) graph."""

    referrers: int = 0
    providers: int = 0
    cases: int = 0  # Case and case-group nodes
    connections: int = 0

    @classmethod
    def from_graph(cls, graph: Graph) -> "VisibleCounts":
        counts = Counter(n.type for n in graph.nodes)
        return cls(
            referrers=counts[NodeType.REFERRER],
            providers=counts[NodeType.SERVICE_PROVIDER],
            cases=counts[NodeType.CASE] + counts[NodeType.CASE_GROUP],
            connections=len(graph.edges),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "referrers": self.referrers,
            "providers": self.providers,
            "cases": self.cases,
            "connections": self.connections,
        }


def compute_network_stats(
    organizations: Sequence[Organization],
    cases: Sequence[Case],
    graph: Graph,
) -> NetworkStats:
    """Compute network-wide statistics from source records and the built graph."""
    referrers = [o for o in organizations if o.category == OrganizationCategory.REFERRER]
    providers = [
        o for o in organizations if o.category == OrganizationCategory.SERVICE_PROVIDER
    ]
    total_cases = len(cases)

    org_connections = [n.connections for n in graph.nodes if n.type.is_organization]

    stats = NetworkStats(
        total_cases=total_cases,
        total_referrers=len(referrers),
        total_providers=len(providers),
        total_connections=len(graph.edges),
        avg_cases_per_referrer=round_half_up(total_cases / len(referrers)) if referrers else 0,
        avg_cases_per_provider=round_half_up(total_cases / len(providers)) if providers else 0,
        max_connections=max(org_connections) if org_connections else 0,
        min_connections=min(org_connections) if org_connections else 0,
    )

    logger.debug(f"Network stats: {stats}")
    return stats
