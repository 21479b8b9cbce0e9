"""Visibility filter for the network explorer.

Two modes, modelled as a tagged union:

- Unfocused(criteria): search / status / min-connections / type toggles
- Focused(node_id): one-hop neighbourhood of a hub node; criteria are ignored

A Focused mode whose node is no longer in the graph (e.g. after a data
refresh) degrades to Unfocused with the same criteria.
"""

import logging
from dataclasses import dataclass, field
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from carenet.models import Edge, Graph, Node

logger = logging.getLogger(__name__)

STATUS_ALL = "all"


class FilterCriteria(BaseModel):
    """General filters applied when no node is focused."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    status: str = STATUS_ALL
    min_connections: int = Field(default=1, ge=0)
    show_cases: bool = True
    show_edges: bool = True


@dataclass(frozen=True)
class Unfocused:
    """Filter-driven mode."""

    criteria: FilterCriteria = field(default_factory=FilterCriteria)


@dataclass(frozen=True)
class Focused:
    """Focus mode around one node. Criteria are kept for the fallback path."""

    node_id: str
    criteria: FilterCriteria = field(default_factory=FilterCriteria)


FilterMode = Union[Unfocused, Focused]


@dataclass
class FilterResult:
    """Visible subgraph plus the mode that produced it."""

    graph: Graph
    mode: FilterMode  # Effective mode (an unresolvable focus becomes Unfocused)
    focus_cleared: bool = False

    @property
    def focused_id(self) -> str | None:
        return self.mode.node_id if isinstance(self.mode, Focused) else None


def _edges_within(edges: list[Edge], node_ids: set[str]) -> list[Edge]:
    return [e for e in edges if e.source in node_ids and e.target in node_ids]


def matches_search(node: Node, term: str) -> bool:
    """Case-insensitive substring match on label or any wrapped case number."""
    needle = term.lower()
    if needle in node.label.lower():
        return True
    return any(c.case_number and needle in c.case_number.lower() for c in node.cases)


def focus_neighbourhood(graph: Graph, target: Node) -> list[Node]:
    """
    One-hop neighbourhood of a focus target, target first.

    Referrer: its cases/groups plus the providers those cases point at.
    Provider: symmetric. Case or group: its referrer and provider.
    Walks the target's edges, so an organization that lost its name to a
    duplicate only sees what is actually linked to it.
    """
    visible: list[Node] = [target]
    seen = {target.id}
    nodes_by_id = {n.id: n for n in graph.nodes}

    def add(node: Node) -> None:
        if node.id not in seen:
            seen.add(node.id)
            visible.append(node)

    def neighbours(node: Node) -> list[Node]:
        found = []
        for edge in graph.edges_for(node.id):
            other = nodes_by_id.get(edge.other_end(node.id))
            if other is not None:
                found.append(other)
        return found

    if target.type.is_organization:
        linked = [n for n in neighbours(target) if n.type.is_case_like]
        for node in linked:
            add(node)
        for node in linked:
            for counterpart in neighbours(node):
                if counterpart.type.is_organization:
                    add(counterpart)
    else:
        for node in neighbours(target):
            if node.type.is_organization:
                add(node)

    return visible


def apply_criteria(graph: Graph, criteria: FilterCriteria) -> Graph:
    """Apply the general (unfocused) filters."""
    nodes = list(graph.nodes)

    if criteria.search:
        nodes = [n for n in nodes if matches_search(n, criteria.search)]

    if criteria.status != STATUS_ALL:
        nodes = [n for n in nodes if not n.type.is_case_like or n.status == criteria.status]

    # Case nodes are exempt from the connection threshold
    nodes = [
        n
        for n in nodes
        if n.type.is_case_like or n.connections >= criteria.min_connections
    ]

    if not criteria.show_cases:
        nodes = [n for n in nodes if not n.type.is_case_like]

    if criteria.show_edges:
        edges = _edges_within(graph.edges, {n.id for n in nodes})
    else:
        edges = []

    return Graph(nodes=nodes, edges=edges)


def filter_graph(graph: Graph, mode: FilterMode | None = None) -> FilterResult:
    """
    Compute the visible node/edge set.

    Args:
        graph: Full built graph
        mode: Unfocused(criteria) or Focused(node_id); None means default criteria

    Returns:
        FilterResult whose graph only has edges between visible nodes
    """
    if mode is None:
        mode = Unfocused()

    if isinstance(mode, Focused):
        target = graph.get_node(mode.node_id)
        if target is not None:
            nodes = focus_neighbourhood(graph, target)
            edges = _edges_within(graph.edges, {n.id for n in nodes})
            return FilterResult(graph=Graph(nodes=nodes, edges=edges), mode=mode)

        logger.info(f"Focus node {mode.node_id} not in graph, clearing focus")
        fallback = Unfocused(criteria=mode.criteria)
        return FilterResult(
            graph=apply_criteria(graph, fallback.criteria),
            mode=fallback,
            focus_cleared=True,
        )

    return FilterResult(graph=apply_criteria(graph, mode.criteria), mode=mode)
