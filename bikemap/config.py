"""
Configuration and Constants
============================
Centralized configuration for the Bluebikes traffic map.
"""

from pathlib import Path

# ============================================================================
# PATHS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / "outputs"

# ============================================================================
# DATA SOURCES
# ============================================================================

BOSTON_LANES_URL = (
    "https://bostonopendata-boston.opendata.arcgis.com/datasets/"
    "boston::existing-bike-network-2022.geojson"
)
CAMBRIDGE_LANES_URL = (
    "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/"
    "Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson"
)

LANE_SOURCES = {
    'boston': BOSTON_LANES_URL,
    'cambridge': CAMBRIDGE_LANES_URL,
}

STATIONS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
TRIPS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"

REQUEST_TIMEOUT = 60  # seconds

# Station records are keyed by their short code
STATION_ID_COLUMN = 'short_name'
STATION_COLUMNS = ['short_name', 'name', 'lat', 'lon']

TRIP_COLUMNS = ['ride_id', 'bike_type', 'started_at', 'ended_at',
                'start_station_id', 'end_station_id', 'is_member']

# Column data types for consistent loading
TRIP_DTYPES = {
    'ride_id': str,
    'bike_type': str,
    'start_station_id': str,
    'end_station_id': str,
}

# ============================================================================
# MAP SETTINGS
# ============================================================================

# Default map center (MIT / Kendall Square)
DEFAULT_MAP_CENTER = (42.36027, -71.09415)
DEFAULT_ZOOM = 12
MIN_ZOOM = 5
MAX_ZOOM = 18

# Leaflet tiles are 256px; the snapshot camera projects the same way
TILE_SIZE = 256

DEFAULT_VIEWPORT = (1200, 800)  # width, height in pixels

LANE_STYLE = {
    'color': 'blue',
    'weight': 3,
    'opacity': 0.4,
}

# ============================================================================
# TRAFFIC PARAMETERS
# ============================================================================

MINUTES_PER_DAY = 1440

# Slider value meaning "no time filter"
NO_FILTER = -1

# Trips starting or ending within this many minutes of the slider are kept
TIME_WINDOW_MINUTES = 60

# Departure share shown for stations without any traffic
BALANCED_RATIO = 0.5

# Circle radius range in pixels (square-root scale)
RADIUS_RANGE = (0, 25)

# Pixel position for stations whose coordinates cannot be projected
OFF_CANVAS = (-10000.0, -10000.0)

CIRCLE_STYLE = {
    'stroke': 'black',
    'stroke_width': 0.5,
    'fill_opacity': 0.6,
}

# ratio 1.0 -> all departures, ratio 0.0 -> all arrivals
DEPARTURE_COLOR = '#4682b4'  # steelblue
ARRIVAL_COLOR = '#ff8c00'    # darkorange
