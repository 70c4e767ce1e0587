"""
Traffic Map Generator
=====================
Generates the interactive station traffic map.

Features:
- Boston and Cambridge bike lanes as line layers
- One circle per station, sized by total traffic
- Circle color from the departure/arrival balance
- Time-of-day slider that re-filters trips in the browser
"""

import json
import math

import pandas as pd

from .base import BaseGenerator
from ..controller import InteractionController
from ..data.traffic import minute_of_day
from ..config import (
    STATION_ID_COLUMN,
    LANE_STYLE,
    CIRCLE_STYLE,
    RADIUS_RANGE,
    NO_FILTER,
    TIME_WINDOW_MINUTES,
    BALANCED_RATIO,
    OFF_CANVAS,
    MINUTES_PER_DAY,
    DEFAULT_MAP_CENTER,
    DEFAULT_ZOOM,
)
from ..utils.html_builder import build_leaflet_page

# Stands in for an unparseable timestamp; never within the time window
MISSING_MINUTE = -100000


def _script_json(value) -> str:
    """JSON safe to inline in a <script> block."""
    return json.dumps(value, ensure_ascii=False).replace('</', '<\\/')


def _json_coord(value):
    """Coordinate as a finite float, or None so the page places it off-canvas."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class TrafficMapGenerator(BaseGenerator):
    """Generator for the interactive traffic map."""

    output_filename = "traffic_map.html"

    def generate(self) -> str:
        """Generate the traffic map HTML."""

        self._log_progress("Loading bike lanes...")
        lanes = self.loader.lanes

        self._log_progress("Computing station traffic...")
        controller = InteractionController(self.loader.stations, self.loader.trips)
        traffic = controller.context.traffic

        self._log_progress("Packing trips for the time filter...")
        trips = self._pack_trips(traffic, self.loader.trips)

        self._log_progress(
            f"Generating HTML with {len(traffic)} stations, "
            f"{len(trips['s']):,} trips and {len(lanes)} lane layers..."
        )
        return self._generate_html(lanes, self._build_stations(traffic),
                                   trips, controller.renderer.max_traffic)

    def _build_stations(self, traffic: pd.DataFrame) -> list:
        """Station records with their unfiltered traffic."""
        stations = []
        for _, row in traffic.iterrows():
            stations.append({
                'id': str(row[STATION_ID_COLUMN]),
                'name': str(row.get('name', '')),
                'lat': _json_coord(row['lat']),
                'lon': _json_coord(row['lon']),
                'departures': int(row['departures']),
                'arrivals': int(row['arrivals']),
                'total': int(row['total_traffic']),
            })
        return stations

    def _pack_trips(self, traffic: pd.DataFrame, trips: pd.DataFrame) -> dict:
        """
        Encode trips as parallel arrays of station indexes and minutes.

        Trips touching no known station are dropped since they never
        change a circle.
        """
        index = {sid: i for i, sid in enumerate(traffic[STATION_ID_COLUMN].astype(str))}

        starts = trips['start_station_id'].astype(str).map(index).fillna(-1).astype(int)
        ends = trips['end_station_id'].astype(str).map(index).fillna(-1).astype(int)
        keep = (starts >= 0) | (ends >= 0)

        start_minutes = minute_of_day(trips['started_at']).fillna(MISSING_MINUTE).astype(int)
        end_minutes = minute_of_day(trips['ended_at']).fillna(MISSING_MINUTE).astype(int)

        return {
            's': starts[keep].tolist(),
            'e': ends[keep].tolist(),
            'sm': start_minutes[keep].tolist(),
            'em': end_minutes[keep].tolist(),
        }

    def _generate_html(self, lanes: dict, stations: list, trips: dict, max_traffic: int) -> str:
        """Generate the complete HTML file."""

        body = f'''
    <header class="header">
        <h1>🚲 Bluebikes Traffic</h1>
        <label class="time-filter">
            Filter by time:
            <input id="time-slider" type="range" min="{NO_FILTER}" max="{MINUTES_PER_DAY - 1}" value="{NO_FILTER}">
            <time id="selected-time"></time>
            <em id="any-time">(any time)</em>
        </label>
    </header>
    <div id="map"></div>
    <div class="legend">
        <span><span class="swatch" style="background: steelblue"></span>More departures</span>
        <span><span class="swatch" style="background: color-mix(in oklch, steelblue, darkorange)"></span>Balanced</span>
        <span><span class="swatch" style="background: darkorange"></span>More arrivals</span>
    </div>'''

        scripts = f'''
        const LANES = {_script_json(lanes)};
        const STATIONS = {_script_json(stations)};
        const TRIPS = {json.dumps(trips)};
        const MAX_TRAFFIC = {max_traffic};
        const RADIUS_RANGE = {json.dumps(list(RADIUS_RANGE))};
        const NO_FILTER = {NO_FILTER};
        const WINDOW = {TIME_WINDOW_MINUTES};
        const BALANCED_RATIO = {BALANCED_RATIO};
        const OFF_CANVAS = {json.dumps(list(OFF_CANVAS))};

        // Bike lanes
        for (const data of Object.values(LANES)) {{
            L.geoJSON(data, {{ style: {json.dumps(LANE_STYLE)} }}).addTo(map);
        }}

        // Station overlay
        const SVG_NS = 'http://www.w3.org/2000/svg';
        const svg = document.createElementNS(SVG_NS, 'svg');
        svg.classList.add('station-overlay');
        map.getContainer().appendChild(svg);

        const circles = STATIONS.map(station => {{
            const circle = document.createElementNS(SVG_NS, 'circle');
            circle.setAttribute('stroke', '{CIRCLE_STYLE["stroke"]}');
            circle.setAttribute('stroke-width', {CIRCLE_STYLE["stroke_width"]});
            circle.setAttribute('fill-opacity', {CIRCLE_STYLE["fill_opacity"]});
            circle.appendChild(document.createElementNS(SVG_NS, 'title'));
            svg.appendChild(circle);
            return circle;
        }});

        function radius(total) {{
            const [low, high] = RADIUS_RANGE;
            if (MAX_TRAFFIC <= 0) return low;
            return low + (high - low) * Math.sqrt(total) / Math.sqrt(MAX_TRAFFIC);
        }}

        function computeTraffic(minute) {{
            const departures = new Array(STATIONS.length).fill(0);
            const arrivals = new Array(STATIONS.length).fill(0);
            for (let i = 0; i < TRIPS.s.length; i++) {{
                if (minute !== NO_FILTER &&
                    Math.abs(TRIPS.sm[i] - minute) > WINDOW &&
                    Math.abs(TRIPS.em[i] - minute) > WINDOW) continue;
                if (TRIPS.s[i] >= 0) departures[TRIPS.s[i]]++;
                if (TRIPS.e[i] >= 0) arrivals[TRIPS.e[i]]++;
            }}
            return STATIONS.map((_, i) => ({{
                departures: departures[i],
                arrivals: arrivals[i],
                total: departures[i] + arrivals[i],
            }}));
        }}

        function render(traffic) {{
            traffic.forEach((d, i) => {{
                const ratio = d.total === 0 ? BALANCED_RATIO : d.departures / d.total;
                circles[i].setAttribute('r', radius(d.total));
                circles[i].style.setProperty('--departure-ratio', ratio);
                circles[i].firstChild.textContent =
                    `${{d.total}} trips (${{d.departures}} departures, ${{d.arrivals}} arrivals)`;
            }});
        }}

        function reposition() {{
            STATIONS.forEach((station, i) => {{
                let [x, y] = OFF_CANVAS;
                if (station.lat !== null && station.lon !== null) {{
                    const point = map.latLngToContainerPoint([station.lat, station.lon]);
                    if (isFinite(point.x) && isFinite(point.y)) [x, y] = [point.x, point.y];
                }}
                circles[i].setAttribute('cx', x);
                circles[i].setAttribute('cy', y);
            }});
        }}

        // Slider: filter -> aggregate -> render -> reposition
        const slider = document.getElementById('time-slider');
        const selectedTime = document.getElementById('selected-time');
        const anyTime = document.getElementById('any-time');

        function formatTime(minutes) {{
            const date = new Date(0, 0, 0, 0, minutes);
            return date.toLocaleString('en-US', {{ timeStyle: 'short' }});
        }}

        slider.addEventListener('input', () => {{
            const minute = Number(slider.value);
            if (minute === NO_FILTER) {{
                selectedTime.textContent = '';
                anyTime.classList.remove('hidden');
            }} else {{
                selectedTime.textContent = formatTime(minute);
                anyTime.classList.add('hidden');
            }}
            render(computeTraffic(minute));
            reposition();
        }});

        // Viewport changes only move circles
        map.on('move zoom resize moveend', reposition);

        render(STATIONS);
        reposition();'''

        return build_leaflet_page(
            title="Bluebikes Traffic Map",
            body_content=body,
            scripts=scripts,
            center=DEFAULT_MAP_CENTER,
            zoom=DEFAULT_ZOOM,
        )
