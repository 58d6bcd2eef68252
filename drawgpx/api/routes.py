"""FastAPI route definitions."""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Annotated, Optional
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import Response

from ..config import get_yaml_setting
from ..export.gpx import GPX_MEDIA_TYPE, generate_gpx, gpx_filename
from ..models.geo import TravelProfile
from ..models.requests import PerimeterRequest, RouteRequest, ExportRequest
from ..models.routing import GeneratedRoute, RouteStatus
from ..processing.geometry import shape_perimeter_km
from ..processing.pipeline import ShapeRoutePipeline
from ..storage.routes import RouteStore, get_route_store

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependency to get pipeline instance (set in main.py)
_pipeline: ShapeRoutePipeline = None


def get_pipeline() -> ShapeRoutePipeline:
    """Get the pipeline instance."""
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialized")
    return _pipeline


def set_pipeline(pipeline: ShapeRoutePipeline):
    """Set the pipeline instance (called from main.py)."""
    global _pipeline
    _pipeline = pipeline


def _content_disposition(filename: str) -> str:
    """
    Attachment header safe for any caller-supplied name.

    `filename` carries an ASCII-only fallback (quotes, backslashes, control
    and non-ASCII characters replaced); `filename*` carries the exact name
    percent-encoded as UTF-8 (RFC 6266).
    """
    fallback = re.sub(r"[^A-Za-z0-9 ._()-]", "_", filename)
    if not fallback.strip(" ._"):
        fallback = get_yaml_setting("export", "default_filename", default="route.gpx")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def _gpx_response(gpx_text: str, filename: str) -> Response:
    return Response(
        content=gpx_text,
        media_type=GPX_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


def _route_gpx_response(entry: GeneratedRoute) -> Response:
    if not entry.route:
        raise HTTPException(status_code=400, detail="Route is empty, nothing to export")
    return _gpx_response(generate_gpx(entry.route), gpx_filename(entry.target_distance_km))


@router.get("/health")
async def health_check(pipeline: Annotated[ShapeRoutePipeline, Depends(get_pipeline)]):
    """Health check endpoint - does NOT call the routing engine."""
    return {
        "status": "ok",
        "message": "Pipeline initialized",
    }


@router.get("/profiles")
async def list_profiles():
    """List available travel profiles."""
    return [profile.value for profile in TravelProfile]


@router.post("/perimeter")
async def measure_perimeter(request: PerimeterRequest):
    """Perimeter of a drawn shape, closing edge included."""
    return {"perimeter_km": shape_perimeter_km(request.points)}


@router.post("/generate", response_model=GeneratedRoute)
async def generate_route(
    request: RouteRequest,
    pipeline: Annotated[ShapeRoutePipeline, Depends(get_pipeline)],
    store: Annotated[RouteStore, Depends(get_route_store)],
) -> GeneratedRoute:
    """Scale the drawn shape to the target distance and match it to roads."""
    try:
        result = await pipeline.generate_route(
            shape=request.points,
            distance_km=request.distance_km,
            profile=request.profile,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    entry = GeneratedRoute(
        request_id=str(uuid.uuid4()),
        timestamp=datetime.now(timezone.utc),
        status=RouteStatus.EMPTY if result.is_empty else RouteStatus.SUCCESS,
        profile=result.profile,
        target_distance_km=result.target_distance_km,
        shape_perimeter_km=result.shape_perimeter_km,
        route_distance_km=result.route_distance_km,
        vertex_count=result.vertex_count,
        scaled_shape=result.scaled_shape,
        route=result.route,
    )
    store.add_entry(entry)

    return entry


@router.get("/routes")
async def list_routes(
    store: Annotated[RouteStore, Depends(get_route_store)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    since: Optional[datetime] = None,
):
    """
    List recently generated routes (newest first), without geometry.

    `total` counts every stored route matching `since`, not just this page.
    """
    if since is not None and since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)

    return {
        "total": store.count(since=since),
        "routes": [
            entry.model_dump(exclude={"scaled_shape", "route"})
            for entry in store.list_entries(limit=limit, offset=offset, since=since)
        ],
    }


@router.get("/routes/latest/gpx")
async def download_latest_route(
    store: Annotated[RouteStore, Depends(get_route_store)],
):
    """Download the most recently generated route as GPX."""
    entry = store.latest()
    if entry is None:
        raise HTTPException(status_code=404, detail="No route generated yet")
    return _route_gpx_response(entry)


@router.get("/routes/{request_id}/gpx")
async def download_route(
    request_id: str,
    store: Annotated[RouteStore, Depends(get_route_store)],
):
    """Download a generated route as GPX."""
    entry = store.get_entry(request_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Unknown route: {request_id}")
    return _route_gpx_response(entry)


@router.post("/export")
async def export_points(request: ExportRequest):
    """Export arbitrary points as a GPX download."""
    if not request.points:
        raise HTTPException(status_code=400, detail="Path is empty, nothing to export")

    filename = request.filename or get_yaml_setting(
        "export", "default_filename", default="route.gpx"
    )
    return _gpx_response(generate_gpx(request.points), filename)
