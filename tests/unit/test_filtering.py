"""Unit tests for the visibility filter and focus mode."""

import pytest
from pydantic import ValidationError

from carenet.graph import (
    BuildResult,
    FilterCriteria,
    Focused,
    Unfocused,
    build_graph,
    filter_graph,
)
from carenet.graph.filtering import matches_search
from carenet.models import Graph, Organization, OrganizationCategory


def ids(graph: Graph) -> list[str]:
    return [n.id for n in graph.nodes]


class TestUnfocused:
    """Tests for criteria-driven filtering."""

    def test_default_keeps_everything(self, built: BuildResult) -> None:
        """Test default criteria keep all connected nodes and edges."""
        result = filter_graph(built.graph)
        assert ids(result.graph) == ids(built.graph)
        assert len(result.graph.edges) == 6
        assert result.focused_id is None
        assert not result.focus_cleared

    def test_hide_cases(self, built: BuildResult) -> None:
        """Test show_cases=False leaves 5 organization nodes and no edges."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(show_cases=False)))
        assert len(result.graph.nodes) == 5
        assert result.graph.edges == []
        assert all(n.type.is_organization for n in result.graph.nodes)

    def test_hide_edges(self, built: BuildResult) -> None:
        """Test show_edges=False keeps nodes but clears edges."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(show_edges=False)))
        assert len(result.graph.nodes) == 8
        assert result.graph.edges == []

    def test_search_label(self, built: BuildResult) -> None:
        """Test case-insensitive label search."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(search="ALPHA")))
        assert ids(result.graph) == ["referrer-r1"]
        assert result.graph.edges == []

    def test_search_case_number(self, built: BuildResult) -> None:
        """Test search matches wrapped case numbers, including inside groups."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(search="cn-1006")))
        assert ids(result.graph) == ["case-c6"]

        result = filter_graph(built.graph, Unfocused(FilterCriteria(search="cn-1003")))
        assert ids(result.graph) == ["case-group-0"]

    def test_status_filter(self, built: BuildResult) -> None:
        """Test status filter only affects case nodes."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(status="pending")))
        case_ids = [n.id for n in result.graph.nodes if n.type.is_case_like]
        assert case_ids == ["case-c7"]
        assert len(result.graph.nodes) == 6
        assert {e.id for e in result.graph.edges} == {
            "edge-referrer-r3-case-c7",
            "edge-case-c7-provider-p2",
        }

    def test_min_connections(self, built: BuildResult) -> None:
        """Test weakly connected organizations drop, case nodes are exempt."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(min_connections=2)))
        assert ids(result.graph) == [
            "referrer-r1",
            "provider-p1",
            "provider-p2",
            "case-group-0",
            "case-c6",
            "case-c7",
        ]
        assert len(result.graph.edges) == 4
        assert result.graph.is_consistent()

    def test_zero_connection_org_hidden_by_default(self, organizations, cases) -> None:
        """Test the default threshold of 1 hides organizations with no cases."""
        result = filter_graph(build_graph(organizations, cases[:5]).graph)
        assert ids(result.graph) == ["referrer-r1", "provider-p1", "case-group-0"]

    def test_empty_result(self, built: BuildResult) -> None:
        """Test filters that match nothing return an empty graph."""
        result = filter_graph(built.graph, Unfocused(FilterCriteria(search="no such thing")))
        assert result.graph.nodes == []
        assert result.graph.edges == []

    def test_empty_graph(self) -> None:
        """Test filtering an empty graph."""
        result = filter_graph(Graph())
        assert result.graph.nodes == []

    def test_negative_threshold_rejected(self) -> None:
        """Test criteria validation."""
        with pytest.raises(ValidationError):
            FilterCriteria(min_connections=-1)


class TestFocused:
    """Tests for focus mode."""

    def test_focus_referrer(self, built: BuildResult) -> None:
        """Test focusing referrer A shows A, its group and provider X."""
        result = filter_graph(built.graph, Focused("referrer-r1"))
        assert ids(result.graph) == ["referrer-r1", "case-group-0", "provider-p1"]
        assert len(result.graph.edges) == 2
        assert result.focused_id == "referrer-r1"

    def test_focus_provider(self, built: BuildResult) -> None:
        """Test focusing provider Y shows its cases and their referrers."""
        result = filter_graph(built.graph, Focused("provider-p2"))
        assert ids(result.graph) == [
            "provider-p2",
            "case-c6",
            "case-c7",
            "referrer-r2",
            "referrer-r3",
        ]
        assert len(result.graph.edges) == 4

    def test_focus_case(self, built: BuildResult) -> None:
        """Test focusing a case shows its referrer and provider."""
        result = filter_graph(built.graph, Focused("case-c6"))
        assert ids(result.graph) == ["case-c6", "referrer-r2", "provider-p2"]
        assert len(result.graph.edges) == 2

    def test_focus_ignores_criteria(self, built: BuildResult) -> None:
        """Test every criteria field is ignored while focused."""
        criteria = FilterCriteria(
            search="zzz", status="pending", min_connections=99, show_cases=False, show_edges=False
        )
        result = filter_graph(built.graph, Focused("referrer-r1", criteria))
        assert len(result.graph.nodes) == 3
        assert len(result.graph.edges) == 2

    def test_unresolvable_focus_falls_back(self, built: BuildResult) -> None:
        """Test a focus id missing from the graph falls back to criteria filtering."""
        criteria = FilterCriteria(show_cases=False)
        result = filter_graph(built.graph, Focused("referrer-gone", criteria))
        assert result.focus_cleared
        assert isinstance(result.mode, Unfocused)
        assert result.mode.criteria == criteria
        assert len(result.graph.nodes) == 5

    def test_focus_toggle_restores_unfocused_view(self, built: BuildResult) -> None:
        """Test unfocusing returns exactly the filter-driven set."""
        criteria = FilterCriteria(status="billable")
        before = filter_graph(built.graph, Unfocused(criteria))
        filter_graph(built.graph, Focused("referrer-r1", criteria))
        after = filter_graph(built.graph, Unfocused(criteria))
        assert ids(before.graph) == ids(after.graph)
        assert before.graph.edges == after.graph.edges

    def test_focus_duplicate_name_loser(self, cases) -> None:
        """Test focusing an organization that lost its name shows only itself."""
        orgs = [
            Organization(id="r1", name="Alpha Medical Group", category=OrganizationCategory.REFERRER),
            Organization(id="r9", name="Alpha Medical Group", category=OrganizationCategory.REFERRER),
            Organization(id="p1", name="Xavier Home Health", category=OrganizationCategory.SERVICE_PROVIDER),
        ]
        graph = build_graph(orgs, cases[:5]).graph

        loser = filter_graph(graph, Focused("referrer-r9"))
        assert ids(loser.graph) == ["referrer-r9"]
        assert loser.graph.edges == []

        winner = filter_graph(graph, Focused("referrer-r1"))
        assert ids(winner.graph) == ["referrer-r1", "case-group-0", "provider-p1"]

        provider = filter_graph(graph, Focused("provider-p1"))
        assert "referrer-r9" not in ids(provider.graph)

    def test_focus_results_are_consistent(self, built: BuildResult) -> None:
        """Test every focus result only has edges between visible nodes."""
        for node in built.graph.nodes:
            result = filter_graph(built.graph, Focused(node.id))
            assert result.graph.is_consistent()
            assert result.graph.nodes[0].id == node.id


class TestMatchesSearch:
    """Tests for search matching."""

    def test_matches_label_substring(self, built: BuildResult) -> None:
        """Test substring match on label."""
        node = built.graph.get_node("provider-p2")
        assert matches_search(node, "yard")
        assert not matches_search(node, "xav")
