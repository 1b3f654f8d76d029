"""
Settings/secret loading helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel
from dotenv import load_dotenv


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Secrets(BaseModel):
    """
    Container for API keys loaded from environment variables.

    Attributes:
        openweathermap_api_key: Key for the OpenWeatherMap alert, forecast and tile APIs.
    """
    openweathermap_api_key: Optional[str] = None


@lru_cache(maxsize=1)
def get_secrets() -> Secrets:
    """
    Load secrets from environment/.env exactly once.

    ``OWM_API_KEY`` wins over the longer ``OPENWEATHERMAP_API_KEY`` spelling.

    Returns:
        A Secrets object populated from environment variables.
    """
    key = os.getenv("OWM_API_KEY") or os.getenv("OPENWEATHERMAP_API_KEY")
    return Secrets(openweathermap_api_key=key or None)
