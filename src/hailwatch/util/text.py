"""
Text-related helpers.
"""

from __future__ import annotations

from typing import Iterable, Optional

import requests


def normalize_text(*parts: Optional[str]) -> str:
    """Join the non-empty parts with a space and lower-case the result."""
    return " ".join(part for part in parts if part).lower()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """
    Return True if any keyword occurs in text.

    Matching is a plain case-insensitive substring search, so Spanish and
    English provider wording can share one keyword list.
    """
    haystack = (text or "").lower()
    return any(keyword.lower() in haystack for keyword in keywords)


def format_request_exception(exc: requests.RequestException) -> str:
    """
    Render a requests exception without leaking query-string credentials.

    HTTP errors are reported by status code and path only.
    """
    response = getattr(exc, "response", None)
    if response is not None:
        url = str(getattr(response, "url", "") or "")
        path = url.split("?", 1)[0]
        return f"HTTP {response.status_code} for {path}" if path else f"HTTP {response.status_code}"
    message = str(exc)
    if not message or "appid=" in message:
        return exc.__class__.__name__
    return f"{exc.__class__.__name__}: {message}"
