"""
HTTP surface for map clients.
"""

from .app import create_app

__all__ = ["create_app"]
