"""Deterministic column/grid layout for the referral network.

Referrers sit in a left column, service providers in a right column and case
nodes in a centered grid. No force simulation is involved, so the same node
list always yields the same coordinates unless jitter is switched on.
"""

import logging
import math
import random
from dataclasses import replace
from typing import Sequence

from carenet.graph.config import LayoutConfig
from carenet.models import Node, NodeType

logger = logging.getLogger(__name__)


class JitterSource:
    """Seedable source of small cosmetic offsets for case nodes."""

    def __init__(self, amplitude: float = 30.0, seed: int | None = None) -> None:
        self.amplitude = amplitude
        self._rng = random.Random(seed)

    def offset(self) -> float:
        """Offset in [-amplitude/2, amplitude/2)."""
        return (self._rng.random() - 0.5) * self.amplitude


def column_positions(count: int, height: float) -> list[float]:
    """Evenly spaced y coordinates for a column of `count` nodes."""
    if count == 0:
        return []
    step = height / (count + 1)
    return [step * (i + 1) for i in range(count)]


def grid_positions(count: int, config: LayoutConfig) -> list[tuple[float, float]]:
    """Grid coordinates for `count` case nodes, filled row by row."""
    if count == 0:
        return []

    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    col_width = config.case_band / cols
    row_height = config.grid_height / rows
    left = config.center - config.case_band / 2

    positions = []
    for index in range(count):
        col = index % cols
        row = index // cols
        positions.append((left + col * col_width, config.grid_top + row * row_height))
    return positions


def assign_layout(
    nodes: Sequence[Node],
    config: LayoutConfig | None = None,
    jitter: JitterSource | None = None,
) -> list[Node]:
    """
    Assign 2-D positions to nodes.

    Args:
        nodes: Nodes in build order
        config: Canvas geometry (defaults from settings)
        jitter: Optional jitter source applied to case/case-group nodes only

    Returns:
        New list of nodes with x/y set; input nodes are not modified
    """
    config = config or LayoutConfig.from_settings()

    referrers = [n for n in nodes if n.type == NodeType.REFERRER]
    providers = [n for n in nodes if n.type == NodeType.SERVICE_PROVIDER]
    case_like = [n for n in nodes if n.type.is_case_like]

    positions: dict[str, tuple[float, float]] = {}

    for node, y in zip(referrers, column_positions(len(referrers), config.height)):
        positions[node.id] = (config.left_column, y)

    for node, y in zip(providers, column_positions(len(providers), config.height)):
        positions[node.id] = (config.right_column, y)

    for node, (x, y) in zip(case_like, grid_positions(len(case_like), config)):
        if jitter is not None:
            x += jitter.offset()
            y += jitter.offset()
        positions[node.id] = (x, y)

    logger.debug(
        f"Layout: {len(referrers)} referrers, {len(providers)} providers, "
        f"{len(case_like)} case nodes"
    )

    placed = []
    for node in nodes:
        x, y = positions[node.id]
        placed.append(replace(node, x=x, y=y))
    return placed
