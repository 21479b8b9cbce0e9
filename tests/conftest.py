"""Pytest configuration and fixtures."""

import pytest

from carenet.config import Settings, get_test_settings
from carenet.graph import BuildResult, LayoutConfig, build_graph
from carenet.models import AttentionLevel, Case, GeoPoint, Organization, OrganizationCategory


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return get_test_settings()


@pytest.fixture
def layout_config() -> LayoutConfig:
    """Default canvas geometry."""
    return LayoutConfig()


@pytest.fixture
def organizations() -> list[Organization]:
    """Three referrers (A, B, C) and two service providers (X, Y)."""
    return [
        Organization(id="r1", name="Alpha Medical Group", category=OrganizationCategory.REFERRER, location="Austin, TX"),
        Organization(id="r2", name="Bayside Physicians", category=OrganizationCategory.REFERRER, location="Tampa, FL"),
        Organization(id="r3", name="Cedar Clinic", category=OrganizationCategory.REFERRER, location="Boise, ID"),
        Organization(id="p1", name="Xavier Home Health", category=OrganizationCategory.SERVICE_PROVIDER, location="Austin, TX"),
        Organization(id="p2", name="Yardley Care", category=OrganizationCategory.SERVICE_PROVIDER, location="Tampa, FL"),
    ]


@pytest.fixture
def cases() -> list[Case]:
    """Seven cases: five share (Alpha, Xavier, billable), two are singletons."""
    alpha_x = [
        Case(
            id=f"c{i}",
            name=f"Patient {i}",
            referrer_name="Alpha Medical Group",
            provider_name="Xavier Home Health",
            status="billable",
            case_number=f"CN-100{i}",
        )
        for i in range(1, 6)
    ]
    return alpha_x + [
        Case(
            id="c6",
            name="Maria Lopez",
            referrer_name="Bayside Physicians",
            provider_name="Yardley Care",
            status="unbillable",
            case_number="CN-1006",
        ),
        Case(
            id="c7",
            name="John Smith",
            referrer_name="Cedar Clinic",
            provider_name="Yardley Care",
            status="pending",
            case_number="CN-1007",
        ),
    ]


@pytest.fixture
def built(organizations: list[Organization], cases: list[Case]) -> BuildResult:
    """Overview-mode build with threshold 2 (one group of five, two single cases)."""
    return build_graph(organizations, cases, aggregation_threshold=2)


@pytest.fixture
def sample_points() -> list[GeoPoint]:
    """Two tight pairs of points far apart."""
    return [
        GeoPoint(id="g1", lat=30.0, lng=-97.0, attention=AttentionLevel.GOOD),
        GeoPoint(id="g2", lat=30.1, lng=-97.1, attention=AttentionLevel.CRITICAL),
        GeoPoint(id="g3", lat=35.0, lng=-90.0, attention=AttentionLevel.NEEDS_ATTENTION),
        GeoPoint(id="g4", lat=35.2, lng=-90.0, attention=AttentionLevel.GOOD),
    ]
