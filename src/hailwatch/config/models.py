"""
Pydantic models for the sensor registry and service configuration.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .settings import Secrets, get_secrets


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class SensorConfig(BaseModel):
    """
    A fixed, named geographic point monitored for hazards.

    Attributes:
        name: Display name and identity of the sensor.
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


DEFAULT_SENSORS: Tuple[SensorConfig, ...] = (
    SensorConfig(name="Mendoza", lat=-32.8895, lon=-68.8458),
    SensorConfig(name="Barrancas", lat=-32.9127, lon=-68.8851),
    SensorConfig(name="San Rafael", lat=-34.6177, lon=-68.3301),
    SensorConfig(name="Valle Grande", lat=-34.8294, lon=-68.5065),
    SensorConfig(name="El Nihuil", lat=-35.0333, lon=-68.6833),
    SensorConfig(name="Gral Alvear", lat=-34.9667, lon=-67.7000),
)

DEFAULT_TIMEZONE = "America/Argentina/Mendoza"


class HazardConfig(BaseModel):
    """
    Top-level configuration handed to the orchestrator and web app at startup.

    Attributes:
        sensors: Immutable sensor registry, queried in this order.
        timezone: Timezone used for Open-Meteo hourly timestamps.
        forecast_days: Horizon of the weather-code series.
        forecast_entries: Number of 3-hour OpenWeatherMap entries checked in the last fallback stage.
        language: Language requested from OpenWeatherMap for alert text.
        request_timeout_seconds: Per-request timeout passed to the HTTP client.
        max_workers: Upper bound on concurrent sensor lookups.
        batch_timeout_seconds: How long a query waits for all sensors before dropping stragglers.
        cors_origins: Origins allowed by the web app.
        static_dir: Optional built frontend directory served for non-API paths.
        openweathermap_api_key: Credential for the fallback providers and radar tiles.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    sensors: Tuple[SensorConfig, ...] = DEFAULT_SENSORS
    timezone: str = DEFAULT_TIMEZONE
    forecast_days: int = Field(default=2, ge=1, le=16)
    forecast_entries: int = Field(default=4, ge=1, le=40)
    language: str = "es"
    request_timeout_seconds: float = Field(default=20.0, gt=0)
    max_workers: int = Field(default=6, ge=1)
    batch_timeout_seconds: float = Field(default=30.0, gt=0)
    cors_origins: Tuple[str, ...] = ("*",)
    static_dir: Optional[Path] = None
    openweathermap_api_key: Optional[str] = Field(default=None, repr=False)

    @field_validator("sensors")
    @classmethod
    def _unique_sensor_names(cls, value: Tuple[SensorConfig, ...]) -> Tuple[SensorConfig, ...]:
        seen = set()
        for sensor in value:
            if sensor.name in seen:
                raise ValueError(f"duplicate sensor name: {sensor.name}")
            seen.add(sensor.name)
        return value


def build_config(secrets: Optional[Secrets] = None, **overrides: Any) -> HazardConfig:
    """
    Build a HazardConfig from defaults, filling the credential from secrets.

    Explicit overrides take precedence over the environment.
    """
    secrets = secrets or get_secrets()
    overrides.setdefault("openweathermap_api_key", secrets.openweathermap_api_key)
    try:
        return HazardConfig.model_validate(overrides)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: Path | str, *, secrets: Optional[Secrets] = None) -> HazardConfig:
    """
    Load and validate a TOML config file into a HazardConfig instance.

    Sensors are declared as ``[[sensor]]`` blocks; omitting them keeps the
    default registry.

    Args:
        path: Path to the TOML configuration file.
        secrets: Optional Secrets used when the file does not set a key.

    Returns:
        A validated HazardConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    return build_config(secrets, **_normalize_toml_schema(raw_data))


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """Map singular ``[[sensor]]`` table arrays onto the plural ``sensors`` field."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table/object.")
    if "sensors" in data:
        raise ConfigError("Use [[sensor]] blocks (singular) instead of [[sensors]].")

    normalized = dict(data)
    sensors = _coerce_table_array(normalized.pop("sensor", None), "sensor")
    if sensors:
        normalized["sensors"] = tuple(sensors)
    return normalized


def _coerce_table_array(value: Any, label: str) -> List[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")
