from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from typer.testing import CliRunner

from hailwatch.api import ProviderUnavailable
from hailwatch.config import DEFAULT_SENSORS, HazardConfig


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def hazard_config() -> HazardConfig:
    return HazardConfig(openweathermap_api_key="test-key", batch_timeout_seconds=5.0)


def sensor_name(lat: float, lon: float) -> str:
    for sensor in DEFAULT_SENSORS:
        if sensor.lat == lat and sensor.lon == lon:
            return sensor.name
    return f"{lat},{lon}"


def codes_payload(codes: List[Optional[int]], *, day: str = "2026-01-15") -> dict:
    times = [f"{day}T{hour:02d}:00" for hour in range(len(codes))]
    return {"hourly": {"time": times, "weather_code": codes}}


class FakeProviders:
    """
    Provider stand-ins keyed by sensor name.

    A value that is an Exception instance is raised instead of returned.
    Every call is recorded as (provider, sensor, extra).
    """

    def __init__(
        self,
        *,
        codes: Optional[Dict[str, object]] = None,
        onecall: Optional[Dict[str, Dict[str, object]]] = None,
        forecast: Optional[Dict[str, object]] = None,
    ) -> None:
        self.codes = codes or {}
        self.onecall_payloads = onecall or {}
        self.forecast_payloads = forecast or {}
        self.calls: List[tuple] = []

    def _answer(self, value: object) -> dict:
        if isinstance(value, Exception):
            raise value
        return value  # type: ignore[return-value]

    def weather_codes(self, lat: float, lon: float, **kwargs) -> dict:
        name = sensor_name(lat, lon)
        self.calls.append(("codes", name, None))
        return self._answer(self.codes.get(name, codes_payload([0, 1, 2])))

    def onecall(self, lat: float, lon: float, *, version: str, **kwargs) -> dict:
        name = sensor_name(lat, lon)
        self.calls.append(("onecall", name, version))
        by_version = self.onecall_payloads.get(name, {})
        return self._answer(by_version.get(version, {"alerts": []}))

    def forecast(self, lat: float, lon: float, **kwargs) -> dict:
        name = sensor_name(lat, lon)
        self.calls.append(("forecast", name, kwargs.get("count")))
        return self._answer(self.forecast_payloads.get(name, {"list": []}))

    def calls_for(self, provider: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == provider]


def unavailable(provider: str = "fake") -> ProviderUnavailable:
    return ProviderUnavailable(provider, "boom")
