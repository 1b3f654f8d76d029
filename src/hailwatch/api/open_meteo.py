"""
Client for the Open-Meteo hourly weather-code forecast.

Open-Meteo is free and keyless; it is the primary hazard source.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from .base import DEFAULT_TIMEOUT_SECONDS, get_json

logger = logging.getLogger(__name__)

HAZARD_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
PROVIDER_NAME = "open-meteo"


def fetch_weather_codes(
    latitude: float,
    longitude: float,
    *,
    timezone: str,
    forecast_days: int = 2,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """
    Fetch the hourly WMO weather-code series for a coordinate.

    Args:
        latitude: Target latitude.
        longitude: Target longitude.
        timezone: Timezone used by Open-Meteo to label the hourly times.
        forecast_days: Horizon in days.
        timeout: Request timeout in seconds.

    Returns:
        The raw JSON payload. ``hourly.time`` and ``hourly.weather_code`` are
        parallel arrays when present.

    Raises:
        ProviderUnavailable: On network, HTTP or JSON errors.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": "weather_code",
        "timezone": timezone,
        "forecast_days": forecast_days,
    }
    data = get_json(HAZARD_FORECAST_URL, provider=PROVIDER_NAME, params=params, timeout=timeout)
    logger.debug("Fetched Open-Meteo weather codes for %.4f,%.4f", latitude, longitude)
    return data if isinstance(data, dict) else {}
