from __future__ import annotations

import pytest

from hailwatch.hazard.classifiers import classify_weather_codes, is_hazardous_alert, is_hazardous_entry
from hailwatch.hazard.schemas import (
    AlertRecord,
    ForecastEntry,
    WeatherCodeSample,
    WeatherCondition,
    decode_forecast_entry,
)


def _entry(cond_id: int = 800, main: str = "Clear", description: str = "cielo claro", **kwargs) -> ForecastEntry:
    return ForecastEntry(weather=WeatherCondition(id=cond_id, main=main, description=description), **kwargs)


@pytest.mark.parametrize("cond_id", [200, 211, 232, 299])
def test_thunderstorm_ids_are_hazardous_regardless_of_other_fields(cond_id: int) -> None:
    entry = _entry(cond_id, main="Thunderstorm", description="", temperature=30.0)
    assert is_hazardous_entry(entry) is True


def test_entry_without_weather_block_is_not_hazardous() -> None:
    assert is_hazardous_entry(ForecastEntry(weather=None, temperature=-5.0, rain_3h=3.0)) is False
    assert is_hazardous_entry(decode_forecast_entry({"main": {"temp": -5.0}, "rain": {"3h": 3.0}})) is False
    assert is_hazardous_entry(None) is False


def test_legacy_hail_id_and_hail_wording() -> None:
    assert is_hazardous_entry(_entry(906, main="Extreme", description="")) is True
    assert is_hazardous_entry(_entry(500, main="Rain", description="Lluvia con GRANIZO")) is True
    assert is_hazardous_entry(_entry(500, main="Rain", description="small hail")) is True


@pytest.mark.parametrize(
    "description",
    ["sleet", "ice pellets", "freezing rain", "aguanieve", "lluvia helada", "hielo"],
)
def test_frozen_precipitation_wording(description: str) -> None:
    assert is_hazardous_entry(_entry(500, main="Rain", description=description, temperature=10.0)) is True


def test_snow_by_id_or_category() -> None:
    assert is_hazardous_entry(_entry(601, main="Nieve", description="nevada")) is True
    assert is_hazardous_entry(_entry(0, main="Snow", description="")) is True


def test_freezing_precipitation_heuristic() -> None:
    assert is_hazardous_entry(_entry(500, main="Rain", description="lluvia ligera", temperature=2.0, rain_3h=0.2)) is True
    assert is_hazardous_entry(_entry(500, main="Rain", description="lluvia ligera", temperature=1.0, snow_3h=0.1)) is True
    assert is_hazardous_entry(_entry(500, main="Rain", description="lluvia ligera", temperature=2.5, rain_3h=4.0)) is False
    assert is_hazardous_entry(_entry(800, temperature=-3.0)) is False
    assert is_hazardous_entry(_entry(500, main="Rain", description="lluvia ligera", rain_3h=4.0)) is False


def test_clear_entry_is_not_hazardous() -> None:
    assert is_hazardous_entry(_entry(800, temperature=25.0)) is False


def test_alert_matching_storm_and_hail_terms() -> None:
    assert is_hazardous_alert(AlertRecord(event="", description="Tormenta de granizo prevista")) is True
    assert is_hazardous_alert(AlertRecord(event="Severe Thunderstorm Warning")) is True
    assert is_hazardous_alert(AlertRecord(event="Aviso", description="Posible caída de HIELO")) is True


def test_alert_without_hazard_terms_or_absent() -> None:
    assert is_hazardous_alert(AlertRecord(event="Viento Zonda", description="Ráfagas de 60 km/h")) is False
    assert is_hazardous_alert(None) is False


def _samples(*pairs: tuple[int, str]) -> list[WeatherCodeSample]:
    return [WeatherCodeSample(code=code, time=time) for code, time in pairs]


def test_code_99_is_high_even_with_lower_codes() -> None:
    result = classify_weather_codes(_samples((95, "t1"), (99, "t2"), (96, "t3")))
    assert result is not None
    assert result.severity == "high"
    assert result.worst_code == 99
    assert result.description == "Tormenta fuerte con granizo"


def test_occurrences_keep_original_order() -> None:
    result = classify_weather_codes(_samples((3, "t0"), (95, "t1"), (99, "t2")))
    assert result is not None
    assert result.severity == "high"
    assert result.next_occurrences == ("t1", "t2")


def test_code_95_only_is_medium() -> None:
    result = classify_weather_codes(_samples((95, "t1")))
    assert result is not None
    assert (result.severity, result.description) == ("medium", "Tormenta (riesgo de granizo)")


def test_code_96_is_high() -> None:
    result = classify_weather_codes(_samples((96, "t1"), (95, "t2")))
    assert result is not None
    assert (result.severity, result.description) == ("high", "Tormenta con granizo")


def test_no_hazard_codes_yield_no_verdict() -> None:
    assert classify_weather_codes(_samples((0, "t0"), (61, "t1"), (97, "t2"), (80, "t3"))) is None
    assert classify_weather_codes([]) is None


def test_occurrences_capped_at_five() -> None:
    samples = _samples(*[(95, f"t{idx}") for idx in range(8)])
    result = classify_weather_codes(samples)
    assert result is not None
    assert result.next_occurrences == ("t0", "t1", "t2", "t3", "t4")
