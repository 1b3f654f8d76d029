"""
Shared HTTP plumbing for provider clients.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..util import format_request_exception

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 20.0


class ProviderUnavailable(RuntimeError):
    """Raised when an upstream provider cannot be reached or answers with an error."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


def get_json(
    url: str,
    *,
    provider: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    Issue a single GET and decode the JSON body.

    Network errors, timeouts, non-2xx answers and invalid JSON all surface as
    ProviderUnavailable. No retries are attempted here.
    """
    try:
        resp = requests.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderUnavailable(provider, format_request_exception(exc)) from exc

    try:
        return resp.json()
    except (json.JSONDecodeError, ValueError) as exc:
        raise ProviderUnavailable(provider, f"invalid JSON ({exc})") from exc


def get_bytes(
    url: str,
    *,
    provider: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> bytes:
    """Issue a single GET and return the raw body."""
    try:
        resp = requests.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderUnavailable(provider, format_request_exception(exc)) from exc
    return resp.content
