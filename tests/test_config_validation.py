from pathlib import Path
import textwrap

import pytest

from hailwatch.config import DEFAULT_SENSORS, ConfigError, HazardConfig, Secrets, build_config, load_config


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_defaults_use_the_six_sensor_registry() -> None:
    config = build_config(Secrets(openweathermap_api_key="abc"))

    assert [sensor.name for sensor in config.sensors] == [
        "Mendoza",
        "Barrancas",
        "San Rafael",
        "Valle Grande",
        "El Nihuil",
        "Gral Alvear",
    ]
    assert config.timezone == "America/Argentina/Mendoza"
    assert config.forecast_days == 2
    assert config.forecast_entries == 4
    assert config.openweathermap_api_key == "abc"


def test_registry_is_immutable() -> None:
    config = HazardConfig()

    with pytest.raises(Exception):
        config.sensors[0].name = "Changed"  # type: ignore[misc]
    with pytest.raises(Exception):
        config.timezone = "UTC"  # type: ignore[misc]
    assert DEFAULT_SENSORS[0].name == "Mendoza"


def test_loads_sensor_blocks(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        timezone = "UTC"
        forecast_entries = 2

        [[sensor]]
        name = "Tunuyán"
        lat = -33.5763
        lon = -69.0153
        """,
    )

    config = load_config(path, secrets=Secrets())

    assert [sensor.name for sensor in config.sensors] == ["Tunuyán"]
    assert config.timezone == "UTC"
    assert config.forecast_entries == 2
    assert config.openweathermap_api_key is None


def test_file_key_wins_over_environment(tmp_path: Path) -> None:
    path = _write_config(tmp_path, 'openweathermap_api_key = "from-file"\n')

    config = load_config(path, secrets=Secrets(openweathermap_api_key="from-env"))

    assert config.openweathermap_api_key == "from-file"
    assert config.sensors == DEFAULT_SENSORS


def test_rejects_unknown_keys(tmp_path: Path) -> None:
    path = _write_config(tmp_path, 'unexpected = "nope"\n')

    with pytest.raises(ConfigError) as exc:
        load_config(path, secrets=Secrets())

    assert "extra" in str(exc.value).lower()


def test_rejects_plural_sensor_blocks(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [[sensors]]
        name = "Mendoza"
        lat = -32.8895
        lon = -68.8458
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path, secrets=Secrets())

    assert "[[sensor]]" in str(exc.value)


def test_rejects_duplicate_sensor_names(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [[sensor]]
        name = "Mendoza"
        lat = -32.8895
        lon = -68.8458

        [[sensor]]
        name = "Mendoza"
        lat = -33.0
        lon = -68.0
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path, secrets=Secrets())

    assert "duplicate" in str(exc.value)


def test_rejects_out_of_range_coordinates(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [[sensor]]
        name = "Nowhere"
        lat = -132.0
        lon = 0.0
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_config(path, secrets=Secrets())

    assert "lat" in str(exc.value)


def test_missing_and_invalid_files(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.toml")

    bad = tmp_path / "bad.toml"
    bad.write_text("this is = = not toml", encoding="utf-8")
    with pytest.raises(ConfigError) as exc:
        load_config(bad, secrets=Secrets())
    assert "Invalid TOML" in str(exc.value)
