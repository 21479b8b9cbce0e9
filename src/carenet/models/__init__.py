"""Carenet data models."""

from carenet.models.graph import Edge, EdgeType, Graph, Node, NodeType
from carenet.models.records import (
    AttentionLevel,
    Case,
    GeoPoint,
    Organization,
    OrganizationCategory,
)

__all__ = [
    "AttentionLevel",
    "Case",
    "GeoPoint",
    "Organization",
    "OrganizationCategory",
    "Node",
    "NodeType",
    "Edge",
    "EdgeType",
    "Graph",
]
