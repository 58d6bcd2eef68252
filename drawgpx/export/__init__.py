"""Track file export."""

from .gpx import GPX_MEDIA_TYPE, generate_gpx, gpx_filename, export_gpx

__all__ = [
    "GPX_MEDIA_TYPE",
    "generate_gpx",
    "gpx_filename",
    "export_gpx",
]
