"""
Multi-provider hazard orchestration with per-sensor fallback chains.

Open-Meteo weather codes are authoritative. Only when they show no hazard for
any sensor does the marker query consult OpenWeatherMap: One Call alerts
(3.0, then the legacy 2.5 API) and finally the short 3-hour forecast.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..api import (
    ONECALL_LEGACY_VERSION,
    ONECALL_PRIMARY_VERSION,
    ProviderUnavailable,
    fetch_forecast_entries,
    fetch_onecall_alerts,
    fetch_weather_codes,
)
from ..config import HazardConfig, SensorConfig
from .classifiers import classify_weather_codes, is_hazardous_alert, is_hazardous_entry
from .models import HazardVerdict, StageResult
from .schemas import AlertRecord, decode_alerts, decode_forecast_entries, decode_weather_codes

logger = logging.getLogger(__name__)

ALERT_DESCRIPTION_FALLBACK = "Alerta de tormenta o granizo"
FORECAST_DESCRIPTION = "Riesgo de granizo o precipitación helada (pronóstico)"

ProviderCall = Callable[..., Dict[str, Any]]
Resolver = Callable[[SensorConfig], Optional[HazardVerdict]]


class HazardOrchestrator:
    """
    Resolve hazard verdicts for every sensor in the configured registry.

    Provider callables default to the real clients and can be swapped for
    fakes. The orchestrator keeps no state between queries.
    """

    def __init__(
        self,
        config: HazardConfig,
        *,
        weather_codes: Optional[ProviderCall] = None,
        onecall: Optional[ProviderCall] = None,
        forecast: Optional[ProviderCall] = None,
    ) -> None:
        self._config = config
        self._weather_codes = weather_codes or fetch_weather_codes
        self._onecall = onecall or fetch_onecall_alerts
        self._forecast = forecast or fetch_forecast_entries

    @property
    def config(self) -> HazardConfig:
        return self._config

    @property
    def sensors(self) -> Sequence[SensorConfig]:
        return self._config.sensors

    # queries ------------------------------------------------------------
    def danger_list(self) -> List[HazardVerdict]:
        """Weather-code verdicts with full severity and occurrence detail."""
        return self._collect(self._code_verdict)

    def marker_list(self) -> List[HazardVerdict]:
        """
        Hazardous sensors for the map.

        A non-empty weather-code result wins outright. Otherwise each sensor
        runs its own alert/forecast fallback chain.
        """
        primary = self.danger_list()
        if primary:
            logger.info("Open-Meteo reports %d hazardous sensor(s)", len(primary))
            return primary

        logger.info("No weather-code hazards; falling back to OpenWeatherMap")
        return self._collect(self._fallback_verdict)

    def raw_alerts(self, latitude: float, longitude: float) -> List[Dict[str, Any]]:
        """Pass-through of upstream alerts for one coordinate (empty on failure)."""
        result = self._alert_stage(latitude, longitude, label=f"{latitude},{longitude}")
        if not result.has_data:
            return []
        return [alert.raw for alert in result.data]

    # per-sensor resolvers -----------------------------------------------
    def _code_verdict(self, sensor: SensorConfig) -> Optional[HazardVerdict]:
        stage = self._code_stage(sensor)
        if not stage.has_data:
            return None
        hazard = classify_weather_codes(stage.data)
        if hazard is None:
            return None
        return HazardVerdict(
            sensor=sensor,
            severity=hazard.severity,
            description=hazard.description,
            source="openmeteo",
            next_occurrences=hazard.next_occurrences,
        )

    def _fallback_verdict(self, sensor: SensorConfig) -> Optional[HazardVerdict]:
        alerts = self._alert_stage(sensor.lat, sensor.lon, label=sensor.name)
        if alerts.has_data:
            matching = [alert for alert in alerts.data if is_hazardous_alert(alert)]
            if matching:
                logger.debug("Alert hazard for %s: %s", sensor.name, matching[0].event)
                return HazardVerdict(
                    sensor=sensor,
                    description=matching[0].event or ALERT_DESCRIPTION_FALLBACK,
                    source="owm",
                )

        forecast = self._forecast_stage(sensor)
        if forecast.has_data and any(is_hazardous_entry(entry) for entry in forecast.data):
            logger.debug("Forecast hazard for %s", sensor.name)
            return HazardVerdict(sensor=sensor, description=FORECAST_DESCRIPTION, source="owm")

        if alerts.failed and forecast.failed:
            logger.info("No fallback provider answered for %s; omitting", sensor.name)
        return None

    # stages -------------------------------------------------------------
    def _code_stage(self, sensor: SensorConfig) -> StageResult:
        try:
            payload = self._weather_codes(
                sensor.lat,
                sensor.lon,
                timezone=self._config.timezone,
                forecast_days=self._config.forecast_days,
                timeout=self._config.request_timeout_seconds,
            )
        except ProviderUnavailable as exc:
            logger.warning("Open-Meteo failed for %s: %s", sensor.name, exc)
            return StageResult.failure(str(exc))
        return StageResult.from_data(decode_weather_codes(payload))

    def _alert_stage(self, latitude: float, longitude: float, *, label: str) -> StageResult:
        api_key = self._config.openweathermap_api_key
        if not api_key:
            logger.debug("OWM_API_KEY not configured; skipping alerts for %s", label)
            return StageResult.failure("missing credential")

        errors: List[str] = []
        for version in (ONECALL_PRIMARY_VERSION, ONECALL_LEGACY_VERSION):
            try:
                payload = self._onecall(
                    latitude,
                    longitude,
                    api_key=api_key,
                    version=version,
                    language=self._config.language,
                    timeout=self._config.request_timeout_seconds,
                )
            except ProviderUnavailable as exc:
                logger.debug("One Call %s failed for %s: %s", version, label, exc)
                errors.append(str(exc))
                continue
            alerts: List[AlertRecord] = decode_alerts(payload)
            return StageResult.from_data(alerts)

        reason = "; ".join(errors)
        logger.warning("Alert providers failed for %s: %s", label, reason)
        return StageResult.failure(reason)

    def _forecast_stage(self, sensor: SensorConfig) -> StageResult:
        api_key = self._config.openweathermap_api_key
        if not api_key:
            logger.debug("OWM_API_KEY not configured; skipping forecast for %s", sensor.name)
            return StageResult.failure("missing credential")

        try:
            payload = self._forecast(
                sensor.lat,
                sensor.lon,
                api_key=api_key,
                count=self._config.forecast_entries,
                language=self._config.language,
                timeout=self._config.request_timeout_seconds,
            )
        except ProviderUnavailable as exc:
            logger.warning("Forecast failed for %s: %s", sensor.name, exc)
            return StageResult.failure(str(exc))
        entries = decode_forecast_entries(payload)
        return StageResult.from_data(entries[: self._config.forecast_entries])

    # fan-out / fan-in ---------------------------------------------------
    def _collect(self, resolve: Resolver) -> List[HazardVerdict]:
        """
        Run ``resolve`` for every sensor concurrently and keep registry order.

        Sensors that raise or outlast the batch timeout are omitted.
        """
        sensors = list(self._config.sensors)
        if not sensors:
            return []

        workers = min(self._config.max_workers, len(sensors))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hailwatch")
        try:
            futures: List[Future] = [executor.submit(resolve, sensor) for sensor in sensors]
            done, _pending = wait(futures, timeout=self._config.batch_timeout_seconds)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        verdicts: List[HazardVerdict] = []
        for sensor, future in zip(sensors, futures):
            if future not in done:
                logger.warning(
                    "Sensor %s did not resolve within %.1fs; omitting",
                    sensor.name,
                    self._config.batch_timeout_seconds,
                )
                continue
            exc = future.exception()
            if exc is not None:
                logger.error("Hazard lookup failed for %s", sensor.name, exc_info=exc)
                continue
            verdict = future.result()
            if verdict is not None and verdict.present:
                verdicts.append(verdict)
        return verdicts
