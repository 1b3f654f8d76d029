"""
Pure hazard classifiers, one per provider record shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..util import contains_any, normalize_text
from .models import MAX_OCCURRENCES, Severity
from .schemas import AlertRecord, ForecastEntry, WeatherCodeSample

HAIL_TEXT = ("hail", "granizo")
FROZEN_TEXT = ("sleet", "ice pellets", "freezing", "aguanieve", "lluvia helada", "hielo")
LEGACY_HAIL_ID = 906
FREEZING_TEMPERATURE_C = 2.0

ALERT_FROZEN_TERMS = ("granizo", "hail", "hielo", "aguanieve", "lluvia helada", "ice pellets", "sleet")
ALERT_STORM_TERMS = ("tormenta", "storm", "thunderstorm")

# WMO codes in ascending severity: storm, storm + hail, severe storm + hail.
HAZARD_CODES: Tuple[int, ...] = (95, 96, 99)
_CODE_LABELS = {
    99: ("high", "Tormenta fuerte con granizo"),
    96: ("high", "Tormenta con granizo"),
    95: ("medium", "Tormenta (riesgo de granizo)"),
}


@dataclass(frozen=True)
class CodeHazard:
    """Result of the weather-code classifier for one sensor."""

    worst_code: int
    severity: Severity
    description: str
    next_occurrences: Tuple[str, ...]


def is_hazardous_entry(entry: Optional[ForecastEntry]) -> bool:
    """
    Decide whether one 3-hour forecast entry signals hail, storm or frozen precipitation.

    Thunderstorm ids (2xx), the legacy hail id 906, snow ids (6xx), hail/sleet
    wording in either English or Spanish, and near-freezing temperatures with
    any precipitation all count. Entries without a condition block never do.
    """
    if entry is None or entry.weather is None:
        return False

    condition = entry.weather
    description = condition.description.lower()
    main = condition.main.lower()

    thunderstorm = 200 <= condition.id < 300
    hail = condition.id == LEGACY_HAIL_ID or contains_any(description, HAIL_TEXT)
    frozen = contains_any(description, FROZEN_TEXT)
    snow = 600 <= condition.id < 700 or "snow" in main
    freezing_precip = (
        entry.temperature is not None
        and entry.temperature <= FREEZING_TEMPERATURE_C
        and entry.precipitation_mm > 0
    )
    return thunderstorm or hail or frozen or snow or freezing_precip


def is_hazardous_alert(alert: Optional[AlertRecord]) -> bool:
    """Keyword match over the alert event and description."""
    if alert is None:
        return False
    text = normalize_text(alert.event, alert.description)
    return contains_any(text, ALERT_FROZEN_TERMS) or contains_any(text, ALERT_STORM_TERMS)


def classify_weather_codes(samples: Iterable[WeatherCodeSample]) -> Optional[CodeHazard]:
    """
    Rank the hazardous hours of a weather-code series.

    Returns None when no hour carries a code in HAZARD_CODES. Otherwise the
    highest code sets severity and description, and the first matching times
    are kept in their original order.
    """
    matches: List[WeatherCodeSample] = [sample for sample in samples if sample.code in HAZARD_CODES]
    if not matches:
        return None

    worst = max(sample.code for sample in matches)
    severity, description = code_label(worst)
    return CodeHazard(
        worst_code=worst,
        severity=severity,
        description=description,
        next_occurrences=tuple(sample.time for sample in matches[:MAX_OCCURRENCES]),
    )


def code_label(code: int) -> Tuple[Severity, str]:
    return _CODE_LABELS.get(code, ("medium", "Tormenta"))
