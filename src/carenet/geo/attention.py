"""Attention scoring for organizations shown on the map.

The overall score averages four 0-100 component scores. Below 45 an
organization is critical, below 70 it needs attention, otherwise it is good.
"""

from dataclasses import dataclass

from carenet.models import AttentionLevel, GeoPoint

REVENUE_TARGET = 50_000.0
VOLUME_TARGET = 50.0
CRITICAL_BELOW = 45.0
NEEDS_ATTENTION_BELOW = 70.0


@dataclass(frozen=True)
class AttentionScore:
    """Score breakdown for one organization."""

    overall: int
    level: AttentionLevel
    billability: int  # Billable share of active cases, percent
    revenue_score: float
    volume_score: float
    risk_score: float

    @property
    def color(self) -> str:
        return self.level.color


def classify_score(score: float) -> AttentionLevel:
    if score < CRITICAL_BELOW:
        return AttentionLevel.CRITICAL
    if score < NEEDS_ATTENTION_BELOW:
        return AttentionLevel.NEEDS_ATTENTION
    return AttentionLevel.GOOD


def score_attention(
    active_cases: int,
    total_revenue: float,
    billable_cases: int,
) -> AttentionScore:
    """Score an organization from its case volume, revenue and billable count."""
    billability = (billable_cases / active_cases) * 100 if active_cases > 0 else 0.0

    revenue_score = min(total_revenue / REVENUE_TARGET * 100, 100.0)
    volume_score = min(active_cases / VOLUME_TARGET * 100, 100.0)
    risk_score = min(billable_cases / max(active_cases, 1) * 100, 100.0)

    overall = (revenue_score + billability + volume_score + risk_score) / 4

    return AttentionScore(
        overall=round(overall),
        level=classify_score(overall),
        billability=round(billability),
        revenue_score=revenue_score,
        volume_score=volume_score,
        risk_score=risk_score,
    )


def scored_point(
    point_id: str,
    lat: float | None,
    lng: float | None,
    active_cases: int,
    total_revenue: float,
    billable_cases: int,
    name: str = "",
) -> GeoPoint:
    """Build a map point whose attention level comes from `score_attention`."""
    score = score_attention(active_cases, total_revenue, billable_cases)
    return GeoPoint(
        id=point_id,
        name=name,
        lat=lat,
        lng=lng,
        attention=score.level,
        payload={
            "overall_score": score.overall,
            "billability": score.billability,
            "active_cases": active_cases,
            "total_revenue": round(total_revenue),
            "billable_cases": billable_cases,
        },
    )
