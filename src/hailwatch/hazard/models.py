"""
Hazard verdicts and the per-stage result type threaded through the fallback chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Literal, Optional, Sequence, Tuple, TypeVar

from ..config import SensorConfig

Severity = Literal["medium", "high"]
Source = Literal["openmeteo", "owm", "demo"]
StageStatus = Literal["data", "empty", "failure"]

HAZARD_TYPE = "HAIL_RISK"
MAX_OCCURRENCES = 5
DISPLAY_OCCURRENCES = 3

T = TypeVar("T")


@dataclass(frozen=True)
class HazardVerdict:
    """
    Final hazard determination for one sensor in one query.

    Attributes:
        sensor: The sensor the verdict belongs to.
        present: Whether a hazard was detected.
        severity: "medium" or "high".
        description: Human-readable summary.
        source: Which provider family produced the verdict.
        next_occurrences: Up to five upcoming hazard times in provider order.
    """
    sensor: SensorConfig
    present: bool = True
    severity: Severity = "medium"
    description: str = ""
    source: Source = "openmeteo"
    next_occurrences: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(self.next_occurrences) > MAX_OCCURRENCES:
            object.__setattr__(self, "next_occurrences", tuple(self.next_occurrences[:MAX_OCCURRENCES]))

    def display_occurrences(self, limit: int = DISPLAY_OCCURRENCES) -> Tuple[str, ...]:
        return self.next_occurrences[:limit]

    def to_marker(self) -> Dict[str, Any]:
        """Minimal map-marker shape."""
        return {
            "name": self.sensor.name,
            "lat": self.sensor.lat,
            "lon": self.sensor.lon,
            "type": HAZARD_TYPE,
        }

    def to_detail(self) -> Dict[str, Any]:
        """Detailed danger-panel shape."""
        return {
            **self.to_marker(),
            "source": self.source,
            "severity": self.severity,
            "description": self.description,
            "nextOccurrences": list(self.next_occurrences),
        }


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """
    Outcome of one provider stage: usable data, a successful empty answer, or a failure.
    """
    status: StageStatus
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def from_data(cls, data: Optional[Sequence[Any]]) -> "StageResult":
        if data:
            return cls(status="data", data=data)
        return cls(status="empty", data=data)

    @classmethod
    def failure(cls, error: str) -> "StageResult":
        return cls(status="failure", error=error)

    @property
    def has_data(self) -> bool:
        return self.status == "data"

    @property
    def failed(self) -> bool:
        return self.status == "failure"
