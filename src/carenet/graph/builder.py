"""Build the referral network graph from organization and case records.

Cases are bucketed by (referrer, provider, status). In overview mode a bucket
larger than the aggregation threshold is rolled up into one case-group node
whose two edges carry the bucket size as weight, which bounds the number of
rendered nodes while keeping exact counts on the edges.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from carenet.config import settings
from carenet.graph.metrics import NetworkStats, compute_network_stats
from carenet.models import (
    Case,
    Edge,
    EdgeType,
    Graph,
    Node,
    NodeType,
    Organization,
    OrganizationCategory,
)

logger = logging.getLogger(__name__)

# Node size bounds (render hints)
ORG_SIZE_MIN = 40
ORG_SIZE_MAX = 80
GROUP_SIZE_MIN = 25
GROUP_SIZE_MAX = 60
CASE_SIZE = 20

# Edge width bounds (render hints)
EDGE_WIDTH_MIN = 2.0
EDGE_WIDTH_MAX = 8.0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


@dataclass
class BuildResult:
    """Result of building the network graph."""

    graph: Graph
    dropped_case_ids: list[str] = field(default_factory=list)  # Cases with dangling org names
    duplicate_names: list[str] = field(default_factory=list)  # Org names seen more than once
    stats: NetworkStats | None = None


def short_label(name: str, words: int) -> str:
    """First `words` whitespace-separated words of a name."""
    return " ".join(name.split()[:words])


class NameIndex:
    """
    Name -> organization lookup for one category.

    Cases join to organizations by display name. When two organizations share
    a name the first one keeps the slot and the name is reported as a
    duplicate instead of being merged silently.
    """

    def __init__(self, organizations: Iterable[Organization]) -> None:
        self._by_name: dict[str, Organization] = {}
        self.duplicates: list[str] = []
        for org in organizations:
            if org.name in self._by_name:
                if org.name not in self.duplicates:
                    self.duplicates.append(org.name)
                continue
            self._by_name[org.name] = org

    def get(self, name: str) -> Organization | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


def org_node_id(org: Organization) -> str:
    prefix = "referrer" if org.category == OrganizationCategory.REFERRER else "provider"
    return f"{prefix}-{org.id}"


def edge_id(source: str, target: str) -> str:
    return f"edge-{source}-{target}"


def bucket_cases(cases: Iterable[Case]) -> dict[tuple[str, str, str], list[Case]]:
    """Group cases by (referrer, provider, status), keeping first-seen order."""
    buckets: dict[tuple[str, str, str], list[Case]] = {}
    for case in cases:
        buckets.setdefault(case.bucket_key, []).append(case)
    return buckets


def _organization_node(org: Organization, connections: int) -> Node:
    node_type = (
        NodeType.REFERRER
        if org.category == OrganizationCategory.REFERRER
        else NodeType.SERVICE_PROVIDER
    )
    return Node(
        id=org_node_id(org),
        type=node_type,
        label=org.name,
        short_label=short_label(org.name, 3),
        organization=org,
        size=clamp(ORG_SIZE_MIN + connections, ORG_SIZE_MIN, ORG_SIZE_MAX),
        connections=connections,
    )


def _link(
    referrer: Node,
    middle: Node,
    provider: Node,
    weight: int,
    grouped: bool,
) -> list[Edge]:
    """Referral and assignment edges through a case or case-group node."""
    if grouped:
        width = clamp(EDGE_WIDTH_MIN + weight * 0.5, EDGE_WIDTH_MIN, EDGE_WIDTH_MAX)
        label = str(weight)
    else:
        width = EDGE_WIDTH_MIN
        label = None

    return [
        Edge(
            id=edge_id(referrer.id, middle.id),
            source=referrer.id,
            target=middle.id,
            type=EdgeType.REFERRAL,
            weight=weight,
            width=width,
            label=label,
        ),
        Edge(
            id=edge_id(middle.id, provider.id),
            source=middle.id,
            target=provider.id,
            type=EdgeType.ASSIGNMENT,
            weight=weight,
            width=width,
            label=label,
        ),
    ]


def build_graph(
    organizations: Iterable[Organization],
    cases: Iterable[Case],
    aggregation_threshold: int | None = None,
    individual_mode: bool = False,
) -> BuildResult:
    """
    Convert organization and case records into a typed node/edge graph.

    Organization connections count the cases joined to it by name, including
    cases dropped for a dangling counterpart, so they can exceed the summed
    edge weights. An organization that lost its name to an earlier duplicate
    gets no cases and 0 connections.

    Args:
        organizations: Referrers and service providers
        cases: Cases referencing one referrer and one provider by name
        aggregation_threshold: Buckets with more cases than this are grouped
            (defaults to settings.aggregation_threshold)
        individual_mode: If True, never aggregate (one node per case)

    Returns:
        BuildResult with the graph (positions unassigned) and data-quality notes
    """
    if aggregation_threshold is None:
        aggregation_threshold = settings.aggregation_threshold

    organizations = list(organizations)
    cases = list(cases)

    referrers = [o for o in organizations if o.category == OrganizationCategory.REFERRER]
    providers = [
        o for o in organizations if o.category == OrganizationCategory.SERVICE_PROVIDER
    ]
    referrer_index = NameIndex(referrers)
    provider_index = NameIndex(providers)

    duplicate_names = referrer_index.duplicates + provider_index.duplicates
    for name in duplicate_names:
        logger.warning(f"Duplicate organization name '{name}', cases join to the first one")

    # Counted per winning organization; a case with a dangling counterpart
    # still counts for the side that resolves
    referral_counts: Counter[str] = Counter()
    assignment_counts: Counter[str] = Counter()
    for case in cases:
        referrer = referrer_index.get(case.referrer_name)
        if referrer is not None:
            referral_counts[org_node_id(referrer)] += 1
        provider = provider_index.get(case.provider_name)
        if provider is not None:
            assignment_counts[org_node_id(provider)] += 1

    nodes: list[Node] = []
    edges: list[Edge] = []
    org_nodes: dict[str, Node] = {}  # node id -> node

    for org in referrers:
        node = _organization_node(org, referral_counts.get(org_node_id(org), 0))
        nodes.append(node)
        org_nodes[node.id] = node

    for org in providers:
        node = _organization_node(org, assignment_counts.get(org_node_id(org), 0))
        nodes.append(node)
        org_nodes[node.id] = node

    dropped: list[str] = []
    group_index = 0

    for (referrer_name, provider_name, status), bucket in bucket_cases(cases).items():
        referrer = referrer_index.get(referrer_name)
        provider = provider_index.get(provider_name)
        if referrer is None or provider is None:
            dropped.extend(c.id for c in bucket)
            logger.debug(
                f"Dropping {len(bucket)} case(s): no organization for "
                f"referrer '{referrer_name}' / provider '{provider_name}'"
            )
            continue

        referrer_node = org_nodes[org_node_id(referrer)]
        provider_node = org_nodes[org_node_id(provider)]

        if not individual_mode and len(bucket) > aggregation_threshold:
            count = len(bucket)
            group = Node(
                id=f"case-group-{group_index}",
                type=NodeType.CASE_GROUP,
                label=f"{count} Cases",
                short_label=f"{count}x",
                cases=tuple(bucket),
                referrer_name=referrer_name,
                provider_name=provider_name,
                status=status,
                size=clamp(GROUP_SIZE_MIN + count * 2, GROUP_SIZE_MIN, GROUP_SIZE_MAX),
                connections=2,
            )
            group_index += 1
            nodes.append(group)
            edges.extend(_link(referrer_node, group, provider_node, count, grouped=True))
            continue

        for case in bucket:
            case_node = Node(
                id=f"case-{case.id}",
                type=NodeType.CASE,
                label=case.name,
                short_label=short_label(case.name, 1),
                cases=(case,),
                referrer_name=referrer_name,
                provider_name=provider_name,
                status=status,
                size=CASE_SIZE,
                connections=2,
            )
            nodes.append(case_node)
            edges.extend(_link(referrer_node, case_node, provider_node, 1, grouped=False))

    graph = Graph(nodes=nodes, edges=edges)
    stats = compute_network_stats(organizations, cases, graph)

    logger.info(
        f"Built network: {len(nodes)} nodes, {len(edges)} edges "
        f"({group_index} groups, {len(dropped)} dropped cases)"
    )

    return BuildResult(
        graph=graph,
        dropped_case_ids=dropped,
        duplicate_names=duplicate_names,
        stats=stats,
    )
