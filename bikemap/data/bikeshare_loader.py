"""
Bikeshare Data Loader
=====================
Loads bike-lane GeoJSON, the Bluebikes station roster and the trip log,
with lazy loading and caching.

Every source is fetched once. A source that fails to load is logged and
treated as empty so the remaining sources still load.
"""

import io
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd
import requests

from ..config import (
    LANE_SOURCES,
    STATIONS_URL,
    TRIPS_URL,
    REQUEST_TIMEOUT,
    STATION_COLUMNS,
    TRIP_COLUMNS,
    TRIP_DTYPES,
)

logger = logging.getLogger(__name__)

LOAD_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError, OSError)


def empty_stations() -> pd.DataFrame:
    """Station table with no rows."""
    return pd.DataFrame({col: pd.Series(dtype=object) for col in STATION_COLUMNS})


def empty_trips() -> pd.DataFrame:
    """Trip table with no rows but parsed timestamp columns."""
    trips = pd.DataFrame({col: pd.Series(dtype=object) for col in TRIP_COLUMNS})
    trips['started_at'] = pd.Series(dtype='datetime64[ns]')
    trips['ended_at'] = pd.Series(dtype='datetime64[ns]')
    return trips


def parse_trip_times(trips: pd.DataFrame) -> pd.DataFrame:
    """Parse started_at/ended_at into datetimes; unparseable values become NaT."""
    trips = trips.copy()
    for col in ('started_at', 'ended_at'):
        trips[col] = pd.to_datetime(trips[col], format='ISO8601', errors='coerce')
    return trips


class BikeDataLoader:
    """
    Bikeshare data loader with lazy loading and caching.

    Usage:
        loader = BikeDataLoader()

        # Access datasets as properties (lazy loaded)
        stations = loader.stations
        trips = loader.trips
        lanes = loader.lanes   # {'boston': {...}, 'cambridge': {...}}

    Sources may be http(s) URLs or local file paths.
    """

    def __init__(
        self,
        stations_source: Union[str, Path] = STATIONS_URL,
        trips_source: Union[str, Path] = TRIPS_URL,
        lane_sources: Optional[Dict[str, Union[str, Path]]] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """
        Initialize the loader.

        Args:
            stations_source: Station roster JSON (URL or path)
            trips_source: Trip log CSV (URL or path)
            lane_sources: Mapping of layer name -> GeoJSON source.
                          Defaults to the Boston and Cambridge networks.
            timeout: HTTP timeout in seconds
        """
        self.stations_source = stations_source
        self.trips_source = trips_source
        self.lane_sources = dict(LANE_SOURCES if lane_sources is None else lane_sources)
        self.timeout = timeout
        self._cache: Dict[str, object] = {}

    def _read_text(self, source: Union[str, Path]) -> str:
        """Fetch a URL or read a local file."""
        source = str(source)
        if source.startswith(('http://', 'https://')):
            logger.info(f"Fetching {source}")
            response = requests.get(source, timeout=self.timeout)
            response.raise_for_status()
            return response.text

        logger.info(f"Reading {source}")
        return Path(source).read_text(encoding='utf-8')

    def _load_lanes(self) -> Dict[str, dict]:
        lanes = {}
        for name, source in self.lane_sources.items():
            try:
                geojson = json.loads(self._read_text(source))
                features = geojson['features']
            except LOAD_ERRORS as e:
                logger.error(f"Error loading {name} bike lanes: {e}")
                continue
            logger.info(f"  Loaded {name} lanes: {len(features):,} features")
            lanes[name] = geojson
        return lanes

    def _load_stations(self) -> pd.DataFrame:
        try:
            payload = json.loads(self._read_text(self.stations_source))
            stations = pd.DataFrame(payload['data']['stations'])
            missing = [c for c in STATION_COLUMNS if c != 'name' and c not in stations.columns]
            if missing:
                raise KeyError(f"station roster is missing fields {missing}")
            stations['short_name'] = stations['short_name'].astype(str)
        except LOAD_ERRORS as e:
            logger.error(f"Error loading stations: {e}")
            return empty_stations()

        logger.info(f"  Loaded stations: {len(stations):,} rows")
        return stations

    def _load_trips(self) -> pd.DataFrame:
        try:
            text = self._read_text(self.trips_source)
            trips = pd.read_csv(io.StringIO(text), dtype=TRIP_DTYPES, low_memory=False)
            missing = [c for c in ('started_at', 'ended_at', 'start_station_id', 'end_station_id')
                       if c not in trips.columns]
            if missing:
                raise KeyError(f"trip log is missing columns {missing}")
            trips = parse_trip_times(trips)
        except LOAD_ERRORS as e:
            logger.error(f"Error loading trips: {e}")
            return empty_trips()

        logger.info(f"  Loaded trips: {len(trips):,} rows")
        return trips

    def clear_cache(self) -> None:
        """Clear the internal cache so the next access reloads."""
        self._cache.clear()
        logger.info("Cache cleared")

    # ========================================================================
    # LAZY PROPERTIES
    # ========================================================================

    @property
    def lanes(self) -> Dict[str, dict]:
        """Bike-lane FeatureCollections keyed by layer name."""
        if 'lanes' not in self._cache:
            self._cache['lanes'] = self._load_lanes()
        return self._cache['lanes']

    @property
    def stations(self) -> pd.DataFrame:
        """Station roster with short_name, name, lat, lon."""
        if 'stations' not in self._cache:
            self._cache['stations'] = self._load_stations()
        return self._cache['stations']

    @property
    def trips(self) -> pd.DataFrame:
        """Trip log with parsed start/end timestamps."""
        if 'trips' not in self._cache:
            self._cache['trips'] = self._load_trips()
        return self._cache['trips']
