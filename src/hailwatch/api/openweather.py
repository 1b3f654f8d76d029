"""
Clients for the OpenWeatherMap endpoints used as fallback hazard sources.

All of them require an API key passed as the ``appid`` query parameter.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .base import DEFAULT_TIMEOUT_SECONDS, ProviderUnavailable, get_bytes, get_json

logger = logging.getLogger(__name__)

ONECALL_URL_TEMPLATE = "https://api.openweathermap.org/data/{version}/onecall"
ONECALL_PRIMARY_VERSION = "3.0"
ONECALL_LEGACY_VERSION = "2.5"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
RADAR_TILE_URL = "https://tile.openweathermap.org/map/precipitation_new/{z}/{x}/{y}.png"


def _require_key(api_key: Optional[str], provider: str) -> str:
    if not api_key:
        raise ProviderUnavailable(provider, "OWM_API_KEY not configured")
    return api_key


def fetch_onecall_alerts(
    latitude: float,
    longitude: float,
    *,
    api_key: Optional[str],
    version: str = ONECALL_PRIMARY_VERSION,
    language: str = "es",
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """
    Fetch the One Call payload restricted to its ``alerts`` block.

    Args:
        latitude: Target latitude.
        longitude: Target longitude.
        api_key: OpenWeatherMap credential.
        version: API version path segment ("3.0" or the legacy "2.5").
        language: Language for alert text.
        timeout: Request timeout in seconds.

    Raises:
        ProviderUnavailable: On missing key, network, HTTP or JSON errors.
    """
    provider = f"openweather-onecall-{version}"
    params = {
        "lat": latitude,
        "lon": longitude,
        "appid": _require_key(api_key, provider),
        "lang": language,
        "units": "metric",
        "exclude": "minutely,hourly,daily",
    }
    url = ONECALL_URL_TEMPLATE.format(version=version)
    data = get_json(url, provider=provider, params=params, timeout=timeout)
    return data if isinstance(data, dict) else {}


def fetch_forecast_entries(
    latitude: float,
    longitude: float,
    *,
    api_key: Optional[str],
    count: int = 4,
    language: str = "es",
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Dict[str, Any]:
    """
    Fetch the next ``count`` 3-hour forecast entries.

    Raises:
        ProviderUnavailable: On missing key, network, HTTP or JSON errors.
    """
    provider = "openweather-forecast"
    params = {
        "lat": latitude,
        "lon": longitude,
        "appid": _require_key(api_key, provider),
        "cnt": count,
        "lang": language,
        "units": "metric",
    }
    data = get_json(FORECAST_URL, provider=provider, params=params, timeout=timeout)
    return data if isinstance(data, dict) else {}


def fetch_radar_tile(
    z: int,
    x: int,
    y: int,
    *,
    api_key: Optional[str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> bytes:
    """
    Fetch one precipitation radar PNG tile, keeping the credential server-side.

    Raises:
        ProviderUnavailable: On missing key, network or HTTP errors.
    """
    provider = "openweather-tiles"
    url = RADAR_TILE_URL.format(z=z, x=x, y=y)
    return get_bytes(url, provider=provider, params={"appid": _require_key(api_key, provider)}, timeout=timeout)
