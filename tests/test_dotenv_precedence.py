import os

from hailwatch.config import settings


def test_project_dotenv_overrides_environment(tmp_path, monkeypatch) -> None:
    project_dir = tmp_path / "project"
    project_env = project_dir / ".env"

    project_dir.mkdir()
    project_env.write_text("OWM_API_KEY=project\n", encoding="utf-8")

    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("OWM_API_KEY", "env-value")

    settings._load_dotenv()

    assert os.getenv("OWM_API_KEY") == "project"


def test_long_key_name_is_accepted(monkeypatch) -> None:
    monkeypatch.delenv("OWM_API_KEY", raising=False)
    monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "long-name")
    settings.get_secrets.cache_clear()
    try:
        assert settings.get_secrets().openweathermap_api_key == "long-name"
    finally:
        settings.get_secrets.cache_clear()


def test_short_key_name_wins(monkeypatch) -> None:
    monkeypatch.setenv("OWM_API_KEY", "short-name")
    monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "long-name")
    settings.get_secrets.cache_clear()
    try:
        assert settings.get_secrets().openweathermap_api_key == "short-name"
    finally:
        settings.get_secrets.cache_clear()
