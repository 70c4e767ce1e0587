"""Tests for the scatter renderer and map projection."""

import math
import unittest

import pandas as pd

from bikemap.config import OFF_CANVAS, BALANCED_RATIO
from bikemap.models import Camera, Circle
from bikemap.rendering.scatter import ScatterRenderer, departure_ratio, ratio_color
from bikemap.utils.geo import project_to_pixels, iter_lines


def make_traffic(rows):
    return pd.DataFrame(rows, columns=['short_name', 'lat', 'lon', 'departures', 'arrivals', 'total_traffic'])


TRAFFIC = make_traffic([
    ('A32000', 42.3581, -71.0936, 60, 40, 100),
    ('M32006', 42.3651, -71.1032, 10, 15, 25),
    ('B32012', 42.3625, -71.0862, 0, 0, 0),
])


class TestDepartureRatio(unittest.TestCase):

    def test_ratio(self):
        self.assertAlmostEqual(departure_ratio(60, 100), 0.6)
        self.assertEqual(departure_ratio(0, 5), 0.0)

    def test_no_traffic_is_balanced(self):
        self.assertEqual(departure_ratio(0, 0), 0.5)
        self.assertEqual(departure_ratio(0, 0), BALANCED_RATIO)

    def test_new_circle_is_balanced(self):
        self.assertEqual(Circle(station_id='A', lat=42.36, lon=-71.09).ratio, BALANCED_RATIO)

    def test_ratio_color_endpoints(self):
        self.assertEqual(ratio_color(1.0), '#4682b4')
        self.assertEqual(ratio_color(0.0), '#ff8c00')
        self.assertEqual(ratio_color(2.0), '#4682b4')


class TestScatterRenderer(unittest.TestCase):

    def test_domain_fixed_from_unfiltered(self):
        renderer = ScatterRenderer(TRAFFIC)
        self.assertEqual(renderer.max_traffic, 100)

        # A later, smaller filter does not change the scale
        renderer.render(make_traffic([
            ('A32000', 42.3581, -71.0936, 20, 5, 25),
            ('M32006', 42.3651, -71.1032, 0, 0, 0),
            ('B32012', 42.3625, -71.0862, 0, 0, 0),
        ]))
        self.assertEqual(renderer.max_traffic, 100)
        self.assertAlmostEqual(renderer.circles[0].r, 12.5)

    def test_sqrt_radius(self):
        renderer = ScatterRenderer(TRAFFIC)
        self.assertEqual(renderer.radius(0), 0)
        self.assertAlmostEqual(renderer.radius(100), 25)
        self.assertAlmostEqual(renderer.radius(25), 12.5)

    def test_zero_domain_uses_min_radius(self):
        renderer = ScatterRenderer(make_traffic([('A', 42.36, -71.09, 0, 0, 0)]))
        self.assertEqual(renderer.radius(0), 0)

    def test_render_sets_ratio_and_tooltip(self):
        renderer = ScatterRenderer(TRAFFIC)
        renderer.render(TRAFFIC)

        first, _, empty = renderer.circles
        self.assertAlmostEqual(first.ratio, 0.6)
        self.assertEqual(first.tooltip, "100 trips (60 departures, 40 arrivals)")
        self.assertEqual(empty.ratio, 0.5)
        self.assertEqual(empty.r, 0)

    def test_render_rejects_mismatched_stations(self):
        renderer = ScatterRenderer(TRAFFIC)
        with self.assertRaises(ValueError):
            renderer.render(TRAFFIC.iloc[:2])

    def test_reposition_centers_camera(self):
        renderer = ScatterRenderer(TRAFFIC)
        camera = Camera(center_lat=42.3581, center_lon=-71.0936, zoom=14, width=800, height=600)
        renderer.reposition(camera)

        first, second, _ = renderer.circles
        self.assertAlmostEqual(first.cx, 400)
        self.assertAlmostEqual(first.cy, 300)
        # Central Square is west and north of MIT
        self.assertLess(second.cx, first.cx)
        self.assertLess(second.cy, first.cy)

    def test_reposition_invalid_position_is_off_canvas(self):
        traffic = make_traffic([
            ('A', 'not-a-number', -71.09, 1, 1, 2),
            ('B', float('nan'), -71.09, 0, 0, 0),
            ('C', None, None, 0, 0, 0),
        ])
        renderer = ScatterRenderer(traffic)
        renderer.reposition(Camera())

        for circle in renderer.circles:
            self.assertEqual((circle.cx, circle.cy), OFF_CANVAS)


class TestProjection(unittest.TestCase):

    def test_zoom_doubles_distances(self):
        near = Camera(center_lat=42.36, center_lon=-71.09, zoom=12, width=0, height=0)
        far = Camera(center_lat=42.36, center_lon=-71.09, zoom=13, width=0, height=0)

        x1, y1 = project_to_pixels(42.37, -71.08, near)
        x2, y2 = project_to_pixels(42.37, -71.08, far)
        self.assertAlmostEqual(x2, 2 * x1)
        self.assertAlmostEqual(y2, 2 * y1)

    def test_numeric_strings_are_accepted(self):
        camera = Camera()
        self.assertEqual(project_to_pixels('42.36', '-71.09', camera),
                         project_to_pixels(42.36, -71.09, camera))

    def test_out_of_range_latitude(self):
        self.assertEqual(project_to_pixels(90, 0, Camera()), OFF_CANVAS)
        self.assertEqual(project_to_pixels(math.inf, 0, Camera()), OFF_CANVAS)

    def test_iter_lines(self):
        geojson = {"type": "FeatureCollection", "features": [
            {"geometry": {"type": "LineString", "coordinates": [[1, 2], [3, 4]]}},
            {"geometry": {"type": "MultiLineString", "coordinates": [[[5, 6, 0], [7, 8, 0]], [[9, 10], [11, 12]]]}},
            {"geometry": {"type": "Point", "coordinates": [0, 0]}},
            {"geometry": None},
        ]}
        lines = list(iter_lines(geojson))
        self.assertEqual(lines, [[(1, 2), (3, 4)], [(5, 6), (7, 8)], [(9, 10), (11, 12)]])


if __name__ == '__main__':
    unittest.main()
