"""
Hail and storm hazard aggregation for a fixed registry of sensor locations.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("hailwatch")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
