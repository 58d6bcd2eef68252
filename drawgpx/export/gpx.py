"""GPX track export."""

import logging
from pathlib import Path as FilePath
from typing import Optional, Sequence, Union

import gpxpy.gpx

from ..config import get_yaml_setting
from ..models.geo import GeoPoint

logger = logging.getLogger(__name__)

GPX_MEDIA_TYPE = "application/gpx+xml"


def generate_gpx(points: Sequence[GeoPoint], name: Optional[str] = None) -> str:
    """
    Serialize points as a GPX 1.1 document with a single track segment.

    Args:
        points: Track points in travel order
        name: Track name (defaults to export.track_name)

    Returns:
        GPX XML text
    """
    if name is None:
        name = get_yaml_setting("export", "track_name", default="DrawGPX Custom Route")

    gpx = gpxpy.gpx.GPX()
    gpx.creator = get_yaml_setting("export", "creator", default="DrawGPX")

    track = gpxpy.gpx.GPXTrack(name=name)
    segment = gpxpy.gpx.GPXTrackSegment()
    segment.points.extend(
        gpxpy.gpx.GPXTrackPoint(latitude=p.lat, longitude=p.lon) for p in points
    )
    track.segments.append(segment)
    gpx.tracks.append(track)

    return gpx.to_xml(version="1.1")


def gpx_filename(distance_km: float) -> str:
    """Download name for a generated route, e.g. 'drawgpx - 5 km.gpx'."""
    return f"drawgpx - {distance_km:g} km.gpx"


def export_gpx(
    points: Sequence[GeoPoint],
    filename: Union[str, FilePath, None] = None,
) -> None:
    """
    Write points to a GPX file. Does nothing for an empty path.

    Args:
        points: Track points in travel order
        filename: Output file (defaults to export.default_filename)
    """
    if not points:
        return

    if filename is None:
        filename = get_yaml_setting("export", "default_filename", default="route.gpx")

    output = FilePath(filename)
    output.write_text(generate_gpx(points), encoding="utf-8")
    logger.info(f"Exported {len(points)} track points to {output}")
