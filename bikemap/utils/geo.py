"""
Geography and GeoJSON Utilities
================================
Web Mercator projection for the map camera and GeoJSON line extraction.
"""

import math
from typing import Any, Dict, Iterator, List, Tuple

from ..config import TILE_SIZE, OFF_CANVAS

# Web Mercator is undefined beyond this latitude
MAX_LATITUDE = 85.0511287798


def _to_float(value: Any) -> float:
    """Coerce a coordinate to a finite float or raise ValueError."""
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"non-finite coordinate: {value!r}")
    return number


def mercator_world_xy(lat: float, lon: float, zoom: float,
                      tile_size: int = TILE_SIZE) -> Tuple[float, float]:
    """
    Project a coordinate to world pixel space at a zoom level.

    Args:
        lat, lon: Coordinates in degrees
        zoom: Map zoom level (fractional zooms allowed)
        tile_size: Tile edge in pixels

    Returns:
        (x, y) with origin at the north-west corner of the world
    """
    world = tile_size * 2 ** zoom
    x = (lon + 180.0) / 360.0 * world
    sin_lat = math.sin(math.radians(lat))
    y = (0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)) * world
    return x, y


def project_to_pixels(lat: Any, lon: Any, camera) -> Tuple[float, float]:
    """
    Convert a coordinate to viewport pixels for the given camera.

    Invalid coordinates (non-numeric, NaN, infinite or outside the
    Mercator range) map to OFF_CANVAS instead of raising.
    """
    try:
        lat = _to_float(lat)
        lon = _to_float(lon)
    except (TypeError, ValueError):
        return OFF_CANVAS
    if abs(lat) > MAX_LATITUDE or abs(lon) > 180:
        return OFF_CANVAS

    x, y = mercator_world_xy(lat, lon, camera.zoom)
    center_x, center_y = mercator_world_xy(camera.center_lat, camera.center_lon, camera.zoom)
    return (x - center_x + camera.width / 2, y - center_y + camera.height / 2)


def iter_lines(geojson: Dict[str, Any]) -> Iterator[List[Tuple[float, float]]]:
    """
    Yield every line of a FeatureCollection as (lon, lat) tuples.

    LineString and MultiLineString geometries are supported; features with
    no geometry or other geometry types are skipped.
    """
    for feature in geojson.get('features', []):
        geometry = feature.get('geometry') or {}
        geom_type = geometry.get('type')
        coords = geometry.get('coordinates') or []
        if geom_type == 'LineString':
            yield [tuple(c[:2]) for c in coords]
        elif geom_type == 'MultiLineString':
            for line in coords:
                yield [tuple(c[:2]) for c in line]
