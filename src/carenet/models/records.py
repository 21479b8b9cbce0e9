"""Source records - organizations, cases and geographic points."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OrganizationCategory(str, Enum):
    """Role an organization plays in the referral network."""

    REFERRER = "referrer"  # Refers cases into the network (e.g. physician group)
    SERVICE_PROVIDER = "service_provider"  # Receives assigned cases (e.g. home health agency)


class AttentionLevel(str, Enum):
    """Attention classification of a point on the map."""

    CRITICAL = "critical"
    NEEDS_ATTENTION = "needs-attention"
    GOOD = "good"

    @property
    def rank(self) -> int:
        """Severity rank, higher is worse."""
        return _ATTENTION_RANK[self]

    @property
    def color(self) -> str:
        """Marker color for this level."""
        return _ATTENTION_COLORS[self]


_ATTENTION_RANK = {
    AttentionLevel.GOOD: 0,
    AttentionLevel.NEEDS_ATTENTION: 1,
    AttentionLevel.CRITICAL: 2,
}

_ATTENTION_COLORS = {
    AttentionLevel.CRITICAL: "#EF4444",  # red
    AttentionLevel.NEEDS_ATTENTION: "#F59E0B",  # amber
    AttentionLevel.GOOD: "#10B981",  # green
}


@dataclass(frozen=True)
class Organization:
    """
    A referring organization or a service provider.

    Cases point at organizations by display name, not by id.
    """

    id: str
    name: str
    category: OrganizationCategory
    location: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Organization":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=OrganizationCategory(data["category"]),
            location=data.get("location") or "",
        )


@dataclass(frozen=True)
class Case:
    """
    A single case linking one referrer to one service provider.

    Example: patient "Jane Doe" referred by "Valley Physicians",
    assigned to "Sunrise Home Health", status "billable".
    """

    id: str
    name: str
    referrer_name: str
    provider_name: str
    status: str  # billable, unbillable, pending, ...
    case_number: str = ""  # Stable identifier shown to users, distinct from name

    @property
    def bucket_key(self) -> tuple[str, str, str]:
        """Aggregation key shared by cases that can be rolled up together."""
        return (self.referrer_name, self.provider_name, self.status)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "referrer_name": self.referrer_name,
            "provider_name": self.provider_name,
            "status": self.status,
            "case_number": self.case_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Case":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            referrer_name=data["referrer_name"],
            provider_name=data["provider_name"],
            status=data["status"],
            case_number=data.get("case_number") or "",
        )


@dataclass(frozen=True)
class GeoPoint:
    """A point entity with coordinates, rendered on the map view."""

    id: str
    lat: float | None
    lng: float | None
    attention: AttentionLevel = AttentionLevel.GOOD
    name: str = ""
    payload: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def has_valid_coordinates(self) -> bool:
        """True if both coordinates are present and finite."""
        for value in (self.lat, self.lng):
            if value is None or isinstance(value, bool):
                return False
            try:
                if not math.isfinite(value):
                    return False
            except TypeError:
                return False
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "attention": self.attention.value,
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeoPoint":
        """Create from dictionary (missing coordinates are kept as None)."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            lat=data.get("lat"),
            lng=data.get("lng"),
            attention=AttentionLevel(data.get("attention", AttentionLevel.GOOD.value)),
            payload=data.get("payload") or {},
        )
