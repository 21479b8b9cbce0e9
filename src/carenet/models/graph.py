"""Graph node/edge models for the network explorer."""

from dataclasses import dataclass, field
from enum import Enum

from carenet.models.records import Case, Organization


class NodeType(str, Enum):
    """Kind of node in the referral network."""

    REFERRER = "referrer"
    SERVICE_PROVIDER = "service_provider"
    CASE = "case"  # Wraps exactly one case
    CASE_GROUP = "case_group"  # Wraps 2+ cases sharing referrer, provider and status

    @property
    def is_organization(self) -> bool:
        return self in (NodeType.REFERRER, NodeType.SERVICE_PROVIDER)

    @property
    def is_case_like(self) -> bool:
        return self in (NodeType.CASE, NodeType.CASE_GROUP)


class EdgeType(str, Enum):
    """Kind of edge in the referral network."""

    REFERRAL = "referral"  # Referrer -> case / case group
    ASSIGNMENT = "assignment"  # Case / case group -> service provider


@dataclass(frozen=True)
class Node:
    """
    A renderable node.

    Organization nodes carry `organization`; case and case-group nodes carry
    the wrapped `cases` plus the names they were bucketed by.
    """

    id: str
    type: NodeType
    label: str
    short_label: str
    organization: Organization | None = None
    cases: tuple[Case, ...] = ()
    referrer_name: str | None = None
    provider_name: str | None = None
    status: str | None = None

    # Layout
    x: float = 0.0
    y: float = 0.0
    size: float = 20.0

    connections: int = 0

    @property
    def count(self) -> int:
        """Number of cases this node represents."""
        return len(self.cases)

    @property
    def name(self) -> str | None:
        """Organization name for organization nodes."""
        return self.organization.name if self.organization else None

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "short_label": self.short_label,
            "organization_id": self.organization.id if self.organization else None,
            "case_ids": [c.id for c in self.cases],
            "count": self.count,
            "referrer_name": self.referrer_name,
            "provider_name": self.provider_name,
            "status": self.status,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "connections": self.connections,
        }


@dataclass(frozen=True)
class Edge:
    """A directed, weighted edge between two nodes."""

    id: str
    source: str
    target: str
    type: EdgeType
    weight: int = 1  # Number of cases represented
    width: float = 2.0  # Stroke width hint
    label: str | None = None

    def touches(self, node_id: str) -> bool:
        """True if either endpoint is `node_id`."""
        return self.source == node_id or self.target == node_id

    def other_end(self, node_id: str) -> str | None:
        """Return the opposite endpoint, or None if the edge doesn't touch `node_id`."""
        if self.source == node_id:
            return self.target
        if self.target == node_id:
            return self.source
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "weight": self.weight,
            "width": self.width,
            "label": self.label,
        }


@dataclass
class Graph:
    """A node/edge set. Operations return new graphs rather than editing one."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def edges_for(self, node_id: str) -> list[Edge]:
        """Edges touching `node_id`."""
        return [e for e in self.edges if e.touches(node_id)]

    def nodes_of_type(self, *types: NodeType) -> list[Node]:
        return [n for n in self.nodes if n.type in types]

    def is_consistent(self) -> bool:
        """True if every edge endpoint is present in the node set."""
        ids = self.node_ids()
        return all(e.source in ids and e.target in ids for e in self.edges)

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
