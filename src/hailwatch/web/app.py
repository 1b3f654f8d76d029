"""
FastAPI application exposing the hazard queries and the radar tile proxy.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse

from .. import __version__
from ..api import ProviderUnavailable, fetch_radar_tile
from ..config import HazardConfig, build_config
from ..hazard import HazardOrchestrator, danger_payload, is_demo, marker_payload, raw_alerts_payload

logger = logging.getLogger(__name__)

DEFAULT_RAW_LAT = -32.8895
DEFAULT_RAW_LON = -68.8458
TILE_NOT_FOUND = "Tile no encontrado"


def parse_coordinate(value: Optional[str], *, default: float, limit: float) -> Optional[float]:
    """
    Parse a query-string coordinate.

    Blank or missing values give ``default``. Unparseable, non-finite or
    out-of-range values give None.
    """
    if value is None or not value.strip():
        return default
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or abs(number) > limit:
        return None
    return number


def parse_tile_index(value: str) -> Optional[int]:
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number >= 0 else None


def create_app(
    config: Optional[HazardConfig] = None,
    *,
    orchestrator: Optional[HazardOrchestrator] = None,
) -> FastAPI:
    """
    Build the web app around an explicitly constructed configuration.

    Args:
        config: Service configuration; built from the environment when omitted.
        orchestrator: Optional pre-built orchestrator (e.g. with fake providers).
    """
    if orchestrator is not None:
        config = orchestrator.config
    config = config or build_config()
    orchestrator = orchestrator or HazardOrchestrator(config)

    app = FastAPI(
        title="Hailwatch API",
        description="Hail and storm hazard markers for a fixed sensor registry",
        version=__version__,
    )
    app.state.config = config
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Handlers are sync so FastAPI runs the blocking provider calls in its threadpool.

    @app.get("/api/alerts", tags=["Alerts"])
    def get_alerts(demo: Optional[str] = Query(default=None)) -> List[Dict[str, Any]]:
        """Map markers; Open-Meteo first, OpenWeatherMap as fallback."""
        return marker_payload(orchestrator, demo=is_demo(demo))

    @app.get("/api/alerts/danger", tags=["Alerts"])
    def get_danger(demo: Optional[str] = Query(default=None)) -> Dict[str, Any]:
        """Detailed dangerous-precipitation panel from Open-Meteo weather codes."""
        return danger_payload(orchestrator, demo=is_demo(demo))

    @app.get("/api/alerts/raw", tags=["Alerts"])
    def get_raw_alerts(
        lat: Optional[str] = Query(default=None),
        lon: Optional[str] = Query(default=None),
    ) -> Dict[str, Any]:
        """Upstream alerts for one point, as OpenWeatherMap publishes them."""
        latitude = parse_coordinate(lat, default=DEFAULT_RAW_LAT, limit=90.0)
        longitude = parse_coordinate(lon, default=DEFAULT_RAW_LON, limit=180.0)
        if latitude is None or longitude is None:
            logger.warning("Ignoring raw alert query with invalid coordinates lat=%r lon=%r", lat, lon)
            return {"alerts": []}
        return raw_alerts_payload(orchestrator, latitude, longitude)

    @app.get("/api/radar/{z}/{x}/{y}", tags=["Radar"])
    def get_radar_tile(z: str, x: str, y: str) -> Response:
        """Precipitation tile proxy that keeps the OpenWeatherMap key server-side."""
        indices = [parse_tile_index(part) for part in (z, x, y)]
        if any(index is None for index in indices):
            logger.warning("Invalid radar tile path %s/%s/%s", z, x, y)
            return PlainTextResponse(TILE_NOT_FOUND, status_code=404)

        tile_z, tile_x, tile_y = indices
        try:
            content = fetch_radar_tile(
                tile_z,
                tile_x,
                tile_y,
                api_key=config.openweathermap_api_key,
                timeout=config.request_timeout_seconds,
            )
        except ProviderUnavailable as exc:
            logger.warning("Radar tile %s/%s/%s unavailable: %s", z, x, y, exc)
            return PlainTextResponse(TILE_NOT_FOUND, status_code=404)
        return Response(content=content, media_type="image/png")

    if config.static_dir is not None:
        _mount_frontend(app, config.static_dir)

    return app


def _mount_frontend(app: FastAPI, static_dir: Path) -> None:
    """
    Serve a built single-page frontend: real files as-is, any other
    non-API path falls back to ``index.html``.
    """
    root = Path(static_dir).expanduser().resolve()
    index_file = root / "index.html"
    if not index_file.is_file():
        logger.warning("Frontend directory %s has no index.html; not serving it", root)
        return

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str) -> Response:
        if full_path == "api" or full_path.startswith("api/"):
            return PlainTextResponse("Not Found", status_code=404)
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index_file)

    logger.info("Serving frontend from %s", root)
