"""Network explorer session.

Holds the source records and the UI state of the network page (view mode,
filters, focus, selection, hover). Source changes and view-mode switches
rebuild from the full records; every call to `view()` re-filters the full
built graph:

1. Build graph (aggregated or individual cases)
2. Assign layout
3. Filter (criteria or focus)
4. Classify highlight/dim for the active node
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from carenet.graph.builder import BuildResult, build_graph
from carenet.graph.config import ExplorerConfig
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
from carenet.graph.metrics import NetworkStats, VisibleCounts
from carenet.models import Case, Graph, Organization

logger = logging.getLogger(__name__)


@dataclass
class ExplorerView:
    """Everything the network page needs for one render."""

    filtered: FilterResult
    interaction: InteractionState
    visible: VisibleCounts
    stats: NetworkStats

    @property
    def graph(self) -> Graph:
        return self.filtered.graph

    @property
    def focused_id(self) -> str | None:
        return self.filtered.focused_id

    def to_dict(self) -> dict:
        """Convert to dictionary for the rendering layer."""
        return {
            "graph": self.graph.to_dict(),
            "focused_id": self.focused_id,
            "interaction": self.interaction.to_dict(),
            "visible": self.visible.to_dict(),
            "stats": self.stats.to_dict(),
        }


class NetworkExplorer:
    """
    Interactive state over the referral network.

    Clicking a referrer or provider toggles focus on it (and selects it);
    clicking a case or case group toggles selection only.
    """

    def __init__(
        self,
        organizations: Iterable[Organization] = (),
        cases: Iterable[Case] = (),
        config: ExplorerConfig | None = None,
        individual_mode: bool = False,
    ) -> None:
        self.config = config or ExplorerConfig.from_settings()
        self.individual_mode = individual_mode
        self.criteria = FilterCriteria()

        self.focused_id: str | None = None
        self.selected_id: str | None = None
        self.hovered_id: str | None = None

        self._organizations: list[Organization] = []
        self._cases: list[Case] = []
        self.load(organizations, cases)

    @property
    def graph(self) -> Graph:
        """Full laid-out graph before filtering."""
        return self._build.graph

    @property
    def build_result(self) -> BuildResult:
        return self._build

    @property
    def mode(self) -> FilterMode:
        if self.focused_id is not None:
            return Focused(node_id=self.focused_id, criteria=self.criteria)
        return Unfocused(criteria=self.criteria)

    def load(self, organizations: Iterable[Organization], cases: Iterable[Case]) -> None:
        """Replace source data and rebuild."""
        self._organizations = list(organizations)
        self._cases = list(cases)
        self._rebuild()

    def set_individual_mode(self, individual: bool) -> None:
        """Switch between aggregated overview and one node per case."""
        if individual == self.individual_mode:
            return
        self.individual_mode = individual
        self._rebuild()

    def _rebuild(self) -> None:
        result = build_graph(
            self._organizations,
            self._cases,
            aggregation_threshold=self.config.aggregation_threshold,
            individual_mode=self.individual_mode,
        )

        jitter = None
        if self.config.jitter_seed is not None:
            jitter = JitterSource(self.config.jitter_amplitude, self.config.jitter_seed)
        result.graph = Graph(
            nodes=assign_layout(result.graph.nodes, self.config.layout, jitter),
            edges=result.graph.edges,
        )
        self._build = result

        node_ids = result.graph.node_ids()
        if self.focused_id is not None and self.focused_id not in node_ids:
            logger.info(f"Focused node {self.focused_id} gone after rebuild, clearing focus")
            self.focused_id = None
            self.selected_id = None
        if self.selected_id is not None and self.selected_id not in node_ids:
            self.selected_id = None
        if self.hovered_id is not None and self.hovered_id not in node_ids:
            self.hovered_id = None

    def update_criteria(self, **changes: Any) -> FilterCriteria:
        """Change filter fields; raises pydantic.ValidationError on bad values."""
        data = self.criteria.model_dump()
        data.update(changes)
        self.criteria = FilterCriteria.model_validate(data)
        return self.criteria

    def click(self, node_id: str) -> None:
        """Handle a click on a node."""
        node = self.graph.get_node(node_id)
        if node is None:
            logger.debug(f"Click on unknown node {node_id}")
            return

        if node.type.is_organization:
            if self.focused_id == node_id:
                self.focused_id = None
                self.selected_id = None
            else:
                self.focused_id = node_id
                self.selected_id = node_id
            return

        self.selected_id = None if self.selected_id == node_id else node_id

    def hover(self, node_id: str | None) -> None:
        self.hovered_id = node_id

    def exit_focus(self) -> None:
        self.focused_id = None
        self.selected_id = None

    def reset_filters(self) -> None:
        """Back to default criteria with no focus or selection."""
        self.criteria = FilterCriteria()
        self.focused_id = None
        self.selected_id = None

    def view(self) -> ExplorerView:
        """Recompute the visible graph and highlight state."""
        filtered = filter_graph(self.graph, self.mode)
        interaction = classify(
            filtered.graph,
            resolve_active(self.selected_id, self.hovered_id),
            focused_id=filtered.focused_id,
        )
        return ExplorerView(
            filtered=filtered,
            interaction=interaction,
            visible=VisibleCounts.from_graph(filtered.graph),
            stats=self._build.stats or NetworkStats(),
        )
