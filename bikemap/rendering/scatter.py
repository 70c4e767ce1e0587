"""
Scatter Renderer
================
Binds per-station traffic to circles and positions them on the viewport.

The radius domain is fixed from the unfiltered traffic when the renderer
is built, so radii stay comparable across time filters.
"""

import math
import logging
from typing import List, Tuple

import pandas as pd

from ..config import (
    STATION_ID_COLUMN,
    RADIUS_RANGE,
    BALANCED_RATIO,
    DEPARTURE_COLOR,
    ARRIVAL_COLOR,
)
from ..models import Camera, Circle
from ..utils.geo import project_to_pixels

logger = logging.getLogger(__name__)


def departure_ratio(departures: int, total: int) -> float:
    """Share of traffic that departs; BALANCED_RATIO when there is none."""
    if total == 0:
        return BALANCED_RATIO
    return departures / total


def format_tooltip(total: int, departures: int, arrivals: int) -> str:
    return f"{total} trips ({departures} departures, {arrivals} arrivals)"


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip('#')
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def ratio_color(ratio: float) -> str:
    """Blend from ARRIVAL_COLOR (0.0) to DEPARTURE_COLOR (1.0)."""
    ratio = min(max(ratio, 0.0), 1.0)
    start = _hex_to_rgb(ARRIVAL_COLOR)
    end = _hex_to_rgb(DEPARTURE_COLOR)
    mixed = (round(a + (b - a) * ratio) for a, b in zip(start, end))
    return '#' + ''.join(f'{c:02x}' for c in mixed)


class ScatterRenderer:
    """One circle per station, sized by total traffic."""

    def __init__(self, stations: pd.DataFrame, radius_range: Tuple[float, float] = RADIUS_RANGE):
        """
        Build circles from the unfiltered station traffic.

        Args:
            stations: Output of aggregate_traffic over all trips
            radius_range: (min, max) radius in pixels
        """
        self.radius_range = radius_range
        self.max_traffic = int(stations['total_traffic'].max()) if len(stations) else 0
        self.circles: List[Circle] = [
            Circle(station_id=str(row[STATION_ID_COLUMN]), lat=row['lat'], lon=row['lon'])
            for _, row in stations.iterrows()
        ]
        logger.info(f"Scatter ready: {len(self.circles)} circles, radius domain [0, {self.max_traffic}]")

    def radius(self, total: float) -> float:
        """Square-root scale from [0, max_traffic] onto radius_range."""
        low, high = self.radius_range
        if self.max_traffic <= 0:
            return low
        return low + (high - low) * math.sqrt(total) / math.sqrt(self.max_traffic)

    def render(self, stations: pd.DataFrame) -> None:
        """Update radius, ratio and tooltip of every circle."""
        if len(stations) != len(self.circles):
            raise ValueError(
                f"expected {len(self.circles)} stations, got {len(stations)}"
            )

        rows = zip(stations['departures'], stations['arrivals'], stations['total_traffic'])
        for circle, (departures, arrivals, total) in zip(self.circles, rows):
            circle.r = self.radius(total)
            circle.ratio = departure_ratio(departures, total)
            circle.tooltip = format_tooltip(total, departures, arrivals)

    def reposition(self, camera: Camera) -> None:
        """Recompute pixel centers from the camera. No traffic data is touched."""
        for circle in self.circles:
            circle.cx, circle.cy = project_to_pixels(circle.lat, circle.lon, camera)
