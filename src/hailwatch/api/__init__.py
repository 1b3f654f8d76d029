"""
External weather provider clients used by the hazard pipeline.
"""

from .base import ProviderUnavailable
from .open_meteo import HAZARD_FORECAST_URL, fetch_weather_codes
from .openweather import (
    ONECALL_PRIMARY_VERSION,
    ONECALL_LEGACY_VERSION,
    fetch_forecast_entries,
    fetch_onecall_alerts,
    fetch_radar_tile,
)

__all__ = [
    "ProviderUnavailable",
    "HAZARD_FORECAST_URL",
    "fetch_weather_codes",
    "ONECALL_PRIMARY_VERSION",
    "ONECALL_LEGACY_VERSION",
    "fetch_forecast_entries",
    "fetch_onecall_alerts",
    "fetch_radar_tile",
]
