"""
Shared utility helpers for text matching, time stamps and request errors.
"""

from .text import contains_any, format_request_exception, normalize_text
from .time import hour_stamp, utc_now

__all__ = [
    "contains_any",
    "format_request_exception",
    "normalize_text",
    "hour_stamp",
    "utc_now",
]
