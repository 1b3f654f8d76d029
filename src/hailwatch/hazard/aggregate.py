"""
Response shapes for the marker and danger queries, including demo mode.

Demo mode is checked before the orchestrator is touched, so no provider call
happens for demo requests.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from .demo import DEMO_SOURCE, demo_verdicts
from .orchestrator import HazardOrchestrator

DEMO_FLAG = "1"
LIVE_SOURCE = "openmeteo"


def is_demo(flag: Optional[str]) -> bool:
    return flag == DEMO_FLAG


def marker_payload(orchestrator: HazardOrchestrator, *, demo: bool = False, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Minimal ``{name, lat, lon, type}`` list for map markers."""
    verdicts = demo_verdicts(now) if demo else orchestrator.marker_list()
    return [verdict.to_marker() for verdict in verdicts]


def danger_payload(orchestrator: HazardOrchestrator, *, demo: bool = False, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Detailed ``{alerts, source}`` body for the danger panel."""
    if demo:
        return {"alerts": [verdict.to_detail() for verdict in demo_verdicts(now)], "source": DEMO_SOURCE}
    return {"alerts": [verdict.to_detail() for verdict in orchestrator.danger_list()], "source": LIVE_SOURCE}


def raw_alerts_payload(orchestrator: HazardOrchestrator, latitude: float, longitude: float) -> Dict[str, Any]:
    return {"alerts": orchestrator.raw_alerts(latitude, longitude)}
