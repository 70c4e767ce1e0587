"""Data models for the traffic map."""

from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_MAP_CENTER, DEFAULT_ZOOM, DEFAULT_VIEWPORT, BALANCED_RATIO


@dataclass
class Camera:
    """Map camera state used to project stations to pixels."""
    center_lat: float = DEFAULT_MAP_CENTER[0]
    center_lon: float = DEFAULT_MAP_CENTER[1]
    zoom: float = DEFAULT_ZOOM
    width: int = DEFAULT_VIEWPORT[0]
    height: int = DEFAULT_VIEWPORT[1]


@dataclass
class Circle:
    """Visual circle bound to one station."""
    station_id: str
    lat: object  # raw roster value, may be non-numeric
    lon: object
    cx: float = 0.0
    cy: float = 0.0
    r: float = 0.0
    ratio: float = BALANCED_RATIO  # departures / total traffic
    tooltip: str = ""


@dataclass
class FilterChanged:
    """Slider moved; minute is minutes since midnight or NO_FILTER."""
    minute: Optional[int]


@dataclass
class ViewportChanged:
    """Map was panned, zoomed or resized."""
    camera: Camera
