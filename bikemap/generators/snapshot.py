"""
Snapshot Generator
==================
Renders the traffic overlay for one time filter and one camera to PNG.

The whole pipeline runs in Python: time filter, aggregation, scatter
rendering and camera projection. Basemap tiles are not drawn.
"""

import io
from typing import Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch

from .base import BaseGenerator
from ..controller import InteractionController
from ..data.bikeshare_loader import BikeDataLoader
from ..models import Camera, FilterChanged
from ..rendering.scatter import ratio_color
from ..utils.geo import project_to_pixels, iter_lines
from ..config import NO_FILTER, LANE_STYLE, CIRCLE_STYLE, OFF_CANVAS

DPI = 100


def _points(pixels: float) -> float:
    """Convert a pixel width to matplotlib points."""
    return pixels * 72 / DPI


class SnapshotGenerator(BaseGenerator):
    """Generator for a static PNG of the traffic overlay."""

    output_filename = "traffic_snapshot.png"

    def __init__(self, loader: Optional[BikeDataLoader] = None,
                 minute: int = NO_FILTER, camera: Optional[Camera] = None):
        """
        Args:
            loader: BikeDataLoader instance. If None, a new one is created.
            minute: Minutes since midnight to filter on, or NO_FILTER
            camera: Viewport to project onto; defaults to the map defaults
        """
        super().__init__(loader)
        self.minute = minute
        self.camera = camera or Camera()

    def generate(self) -> bytes:
        """Render the snapshot and return PNG bytes."""

        self._log_progress("Computing station traffic...")
        controller = InteractionController(self.loader.stations, self.loader.trips, self.camera)
        if self.minute != NO_FILTER:
            controller.dispatch(FilterChanged(self.minute))

        ctx = controller.context
        fig = plt.figure(figsize=(self.camera.width / DPI, self.camera.height / DPI), dpi=DPI)
        try:
            ax = fig.add_axes([0, 0, 1, 1])
            ax.set_xlim(0, self.camera.width)
            ax.set_ylim(self.camera.height, 0)
            ax.set_aspect('equal')
            ax.axis('off')

            self._log_progress("Drawing bike lanes...")
            line_count = self._draw_lanes(ax)

            self._log_progress(f"Drawing {len(controller.circles)} stations over {line_count:,} lane segments...")
            for circle in controller.circles:
                if (circle.cx, circle.cy) == OFF_CANVAS:
                    continue
                ax.add_patch(CirclePatch(
                    (circle.cx, circle.cy), circle.r,
                    facecolor=ratio_color(circle.ratio),
                    edgecolor=CIRCLE_STYLE['stroke'],
                    linewidth=_points(CIRCLE_STYLE['stroke_width']),
                    alpha=CIRCLE_STYLE['fill_opacity'],
                ))

            label = ctx.time_label if not ctx.any_time_visible else "(any time)"
            ax.text(10, 20, f"Bluebikes traffic {label}", fontsize=12, va='top')

            buffer = io.BytesIO()
            fig.savefig(buffer, format='png', dpi=DPI)
        finally:
            plt.close(fig)
        return buffer.getvalue()

    def _draw_lanes(self, ax) -> int:
        """Project and draw every lane line; returns how many were drawn."""
        count = 0
        for geojson in self.loader.lanes.values():
            for line in iter_lines(geojson):
                pixels = [project_to_pixels(lat, lon, self.camera) for lon, lat in line]
                pixels = [p for p in pixels if p != OFF_CANVAS]
                if len(pixels) < 2:
                    continue
                xs, ys = zip(*pixels)
                ax.plot(xs, ys, color=LANE_STYLE['color'],
                        linewidth=_points(LANE_STYLE['weight']),
                        alpha=LANE_STYLE['opacity'])
                count += 1
        return count
