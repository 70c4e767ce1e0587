"""
Station Traffic
===============
Per-station departure/arrival counts and the time-of-day trip filter.

Both functions are pure: inputs are never modified.
"""

from typing import Optional

import pandas as pd

from ..config import (
    STATION_ID_COLUMN,
    NO_FILTER,
    TIME_WINDOW_MINUTES,
    MINUTES_PER_DAY,
)


def minute_of_day(timestamps: pd.Series) -> pd.Series:
    """Minutes since midnight (hour*60 + minute), ignoring the date."""
    return timestamps.dt.hour * 60 + timestamps.dt.minute


def aggregate_traffic(stations: pd.DataFrame, trips: pd.DataFrame) -> pd.DataFrame:
    """
    Annotate stations with departures, arrivals and total_traffic.

    A trip is a departure for its start station and an arrival for its
    end station. Stations keep their order; stations without trips get zero.

    Args:
        stations: Station roster keyed by short_name
        trips: Trips with start_station_id / end_station_id

    Returns:
        New DataFrame with the three count columns added
    """
    departures = trips['start_station_id'].astype(str).value_counts()
    arrivals = trips['end_station_id'].astype(str).value_counts()

    result = stations.copy()
    ids = result[STATION_ID_COLUMN].astype(str)
    result['departures'] = ids.map(departures).fillna(0).astype(int)
    result['arrivals'] = ids.map(arrivals).fillna(0).astype(int)
    result['total_traffic'] = result['departures'] + result['arrivals']
    return result


def filter_trips_by_minute(trips: pd.DataFrame, minute: Optional[int]) -> pd.DataFrame:
    """
    Select trips that start or end within TIME_WINDOW_MINUTES of a minute.

    Args:
        trips: Full trip set with parsed started_at / ended_at
        minute: Minutes since midnight, or NO_FILTER / None for all trips

    Returns:
        The input itself for NO_FILTER, otherwise the matching subset
    """
    if minute is None or minute == NO_FILTER:
        return trips
    if not 0 <= minute < MINUTES_PER_DAY:
        raise ValueError(f"minute must be in [0, {MINUTES_PER_DAY}), got {minute}")
    if trips.empty:
        return trips.iloc[0:0]

    starts = minute_of_day(trips['started_at'])
    ends = minute_of_day(trips['ended_at'])
    mask = ((starts - minute).abs() <= TIME_WINDOW_MINUTES) | \
           ((ends - minute).abs() <= TIME_WINDOW_MINUTES)
    return trips[mask]
