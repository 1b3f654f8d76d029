"""
Per-provider record schemas and the decode step from raw JSON payloads.

Decoding turns absent or malformed fields into explicit "no signal" values
(``None`` conditions, zero precipitation, empty text) so classifiers never
probe raw dictionaries.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherCondition:
    """OpenWeatherMap ``weather[0]`` block: condition id, category and description."""

    id: int = 0
    main: str = ""
    description: str = ""


@dataclass(frozen=True)
class ForecastEntry:
    """
    One 3-hour OpenWeatherMap forecast entry.

    Attributes:
        weather: Primary condition, or None when the provider omitted it.
        temperature: Air temperature in °C, if reported.
        rain_3h: Rain accumulation over 3 hours in mm (0 when absent).
        snow_3h: Snow accumulation over 3 hours in mm (0 when absent).
    """

    weather: Optional[WeatherCondition] = None
    temperature: Optional[float] = None
    rain_3h: float = 0.0
    snow_3h: float = 0.0

    @property
    def precipitation_mm(self) -> float:
        return self.rain_3h + self.snow_3h


@dataclass(frozen=True)
class AlertRecord:
    """
    A severe-weather alert from the One Call API.

    ``raw`` keeps the provider's dictionary untouched for pass-through display.
    """

    event: str = ""
    description: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class WeatherCodeSample:
    """One hourly WMO weather code with its provider-formatted local time."""

    code: int
    time: str


def decode_forecast_entries(payload: Any) -> List[ForecastEntry]:
    """Decode the ``list`` array of an OpenWeatherMap forecast payload."""
    if not isinstance(payload, dict):
        return []
    entries = payload.get("list")
    if not isinstance(entries, list):
        return []
    return [decode_forecast_entry(item) for item in entries if isinstance(item, dict)]


def decode_forecast_entry(item: Dict[str, Any]) -> ForecastEntry:
    weather_block = item.get("weather")
    condition: Optional[WeatherCondition] = None
    if isinstance(weather_block, list) and weather_block and isinstance(weather_block[0], dict):
        first = weather_block[0]
        condition = WeatherCondition(
            id=_as_int(first.get("id")) or 0,
            main=_as_text(first.get("main")),
            description=_as_text(first.get("description")),
        )

    main_block = item.get("main") if isinstance(item.get("main"), dict) else {}
    return ForecastEntry(
        weather=condition,
        temperature=_as_float(main_block.get("temp")),
        rain_3h=_accumulation(item.get("rain")),
        snow_3h=_accumulation(item.get("snow")),
    )


def decode_alerts(payload: Any) -> List[AlertRecord]:
    """Decode the optional ``alerts`` array of a One Call payload."""
    if not isinstance(payload, dict):
        return []
    alerts = payload.get("alerts")
    if not isinstance(alerts, list):
        return []
    return [
        AlertRecord(
            event=_as_text(alert.get("event")),
            description=_as_text(alert.get("description")),
            raw=alert,
        )
        for alert in alerts
        if isinstance(alert, dict)
    ]


def decode_weather_codes(payload: Any) -> List[WeatherCodeSample]:
    """
    Pair ``hourly.weather_code`` values with ``hourly.time`` in provider order.

    Hours with a null/non-numeric code or without a matching time are dropped.
    """
    if not isinstance(payload, dict):
        return []
    hourly = payload.get("hourly")
    if not isinstance(hourly, dict):
        return []
    times = hourly.get("time") or []
    codes = hourly.get("weather_code") or []
    if not isinstance(times, list) or not isinstance(codes, list):
        return []

    samples: List[WeatherCodeSample] = []
    for idx, raw_code in enumerate(codes):
        code = _as_int(raw_code)
        if code is None or idx >= len(times) or not times[idx]:
            continue
        samples.append(WeatherCodeSample(code=code, time=str(times[idx])))
    if len(samples) < len(codes):
        logger.debug("Dropped %d weather-code hours without usable data", len(codes) - len(samples))
    return samples


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    if number is None or not math.isfinite(number) or number != int(number):
        return None
    return int(number)


def _accumulation(block: Any) -> float:
    if not isinstance(block, dict):
        return 0.0
    return _as_float(block.get("3h")) or 0.0
