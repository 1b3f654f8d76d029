"""
Hazard detection: provider schemas, classifiers and the fallback orchestrator.
"""

from .aggregate import danger_payload, is_demo, marker_payload, raw_alerts_payload
from .classifiers import CodeHazard, classify_weather_codes, is_hazardous_alert, is_hazardous_entry
from .demo import demo_verdicts
from .models import HazardVerdict, StageResult
from .orchestrator import HazardOrchestrator
from .schemas import (
    AlertRecord,
    ForecastEntry,
    WeatherCodeSample,
    WeatherCondition,
    decode_alerts,
    decode_forecast_entries,
    decode_weather_codes,
)

__all__ = [
    "danger_payload",
    "is_demo",
    "marker_payload",
    "raw_alerts_payload",
    "CodeHazard",
    "classify_weather_codes",
    "is_hazardous_alert",
    "is_hazardous_entry",
    "demo_verdicts",
    "HazardVerdict",
    "StageResult",
    "HazardOrchestrator",
    "AlertRecord",
    "ForecastEntry",
    "WeatherCodeSample",
    "WeatherCondition",
    "decode_alerts",
    "decode_forecast_entries",
    "decode_weather_codes",
]
