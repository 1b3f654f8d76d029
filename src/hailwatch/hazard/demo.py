"""
Fixed hazard set used to validate map markers and the danger panel
without depending on live weather.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..config import SensorConfig
from ..util import hour_stamp
from .models import HazardVerdict

DEMO_SOURCE = "demo"

_MENDOZA = SensorConfig(name="Mendoza", lat=-32.8895, lon=-68.8458)
_SAN_RAFAEL = SensorConfig(name="San Rafael", lat=-34.6177, lon=-68.3301)


def demo_verdicts(now: Optional[datetime] = None) -> List[HazardVerdict]:
    """Return the two synthetic verdicts, stamped with the current UTC hour."""
    stamp = hour_stamp(now)
    return [
        HazardVerdict(
            sensor=_MENDOZA,
            severity="high",
            description="Tormenta con granizo (simulación para validar)",
            source=DEMO_SOURCE,
            next_occurrences=(stamp,),
        ),
        HazardVerdict(
            sensor=_SAN_RAFAEL,
            severity="medium",
            description="Tormenta – riesgo de granizo (simulación)",
            source=DEMO_SOURCE,
            next_occurrences=(stamp,),
        ),
    ]
