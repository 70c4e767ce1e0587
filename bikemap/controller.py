"""
Interaction Controller
======================
Routes map events onto the two update paths of the traffic overlay:

- FilterChanged  -> filter trips, aggregate, render, reposition
- ViewportChanged -> reposition only
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from .config import NO_FILTER
from .data.traffic import aggregate_traffic, filter_trips_by_minute
from .models import Camera, Circle, FilterChanged, ViewportChanged
from .rendering.scatter import ScatterRenderer
from .utils.html_builder import format_time_of_day

logger = logging.getLogger(__name__)


@dataclass
class TrafficMapContext:
    """State shared by the update paths for the lifetime of the map."""
    stations: pd.DataFrame  # roster, never modified
    trips: pd.DataFrame  # full unfiltered trip set
    camera: Camera
    renderer: Optional[ScatterRenderer] = None
    traffic: Optional[pd.DataFrame] = None  # stations annotated for the current filter
    time_filter: int = NO_FILTER
    time_label: str = ""
    any_time_visible: bool = True


class InteractionController:
    """
    Owns the map context and reacts to slider and viewport events.

    Usage:
        controller = InteractionController(loader.stations, loader.trips, Camera())
        controller.dispatch(FilterChanged(480))
        controller.dispatch(ViewportChanged(Camera(zoom=14)))
        circles = controller.circles
    """

    def __init__(self, stations: pd.DataFrame, trips: pd.DataFrame,
                 camera: Optional[Camera] = None):
        self.context = TrafficMapContext(stations=stations, trips=trips,
                                         camera=camera or Camera())

        # Initial state: unfiltered traffic fixes the radius domain
        traffic = aggregate_traffic(stations, trips)
        self.context.traffic = traffic
        self.context.renderer = ScatterRenderer(traffic)
        self.context.renderer.render(traffic)
        self.context.renderer.reposition(self.context.camera)

    @property
    def renderer(self) -> ScatterRenderer:
        return self.context.renderer

    @property
    def circles(self) -> List[Circle]:
        return self.context.renderer.circles

    def dispatch(self, event) -> None:
        """Apply one event to the context."""
        if isinstance(event, FilterChanged):
            self._on_filter_changed(event.minute)
        elif isinstance(event, ViewportChanged):
            self._on_viewport_changed(event.camera)
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def _on_filter_changed(self, minute: Optional[int]) -> None:
        ctx = self.context
        minute = NO_FILTER if minute is None else minute

        # Raises for an out-of-range minute before any state changes
        filtered = filter_trips_by_minute(ctx.trips, minute)

        ctx.time_filter = minute
        if minute == NO_FILTER:
            ctx.time_label = ""
            ctx.any_time_visible = True
        else:
            ctx.time_label = format_time_of_day(minute)
            ctx.any_time_visible = False

        ctx.traffic = aggregate_traffic(ctx.stations, filtered)
        logger.debug(f"Filter {ctx.time_filter}: {len(filtered):,} of {len(ctx.trips):,} trips")

        ctx.renderer.render(ctx.traffic)
        ctx.renderer.reposition(ctx.camera)

    def _on_viewport_changed(self, camera: Camera) -> None:
        self.context.camera = camera
        self.context.renderer.reposition(camera)
