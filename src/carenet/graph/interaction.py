"""Highlight/dim classification for hover and selection.

Works on the visible graph only and never changes it: the result carries the
same graph object plus the ids of highlighted edges and connected nodes.
"""

import logging
from dataclasses import dataclass

from carenet.models import Graph

logger = logging.getLogger(__name__)


def resolve_active(selected_id: str | None, hovered_id: str | None) -> str | None:
    """Selection wins over hover."""
    return selected_id or hovered_id


@dataclass(frozen=True)
class InteractionState:
    """Per-render highlight flags for a visible graph."""

    graph: Graph
    highlighted_edges: frozenset[str]
    connected_nodes: frozenset[str]
    active_id: str | None = None
    focused_id: str | None = None

    def is_highlighted(self, edge_id: str) -> bool:
        return edge_id in self.highlighted_edges

    def is_connected(self, node_id: str) -> bool:
        return node_id in self.connected_nodes

    def is_dimmed(self, node_id: str) -> bool:
        return node_id not in self.connected_nodes

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "active_id": self.active_id,
            "focused_id": self.focused_id,
            "highlighted_edges": sorted(self.highlighted_edges),
            "connected_nodes": sorted(self.connected_nodes),
        }


def classify(
    graph: Graph,
    active_id: str | None,
    focused_id: str | None = None,
) -> InteractionState:
    """
    Classify edges as highlighted and nodes as connected.

    Args:
        graph: Visible graph (after filtering)
        active_id: Selected node id, else hovered node id, else None
        focused_id: Focus hub, always treated as connected

    Returns:
        InteractionState over the untouched input graph
    """
    if active_id is None:
        # Nothing active: nothing is dimmed
        return InteractionState(
            graph=graph,
            highlighted_edges=frozenset(),
            connected_nodes=frozenset(n.id for n in graph.nodes),
            active_id=None,
            focused_id=focused_id,
        )

    visible_ids = graph.node_ids()
    highlighted: set[str] = set()
    connected: set[str] = set()

    if active_id in visible_ids:
        connected.add(active_id)
        for edge in graph.edges:
            other = edge.other_end(active_id)
            if other is not None:
                highlighted.add(edge.id)
                connected.add(other)
    else:
        logger.debug(f"Active node {active_id} is not visible")

    if focused_id is not None and focused_id in visible_ids:
        connected.add(focused_id)

    return InteractionState(
        graph=graph,
        highlighted_edges=frozenset(highlighted),
        connected_nodes=frozenset(connected),
        active_id=active_id,
        focused_id=focused_id,
    )
