"""
Data Modules
============
Bikeshare data loading and station traffic computation.
"""

from .bikeshare_loader import BikeDataLoader
from .traffic import aggregate_traffic, filter_trips_by_minute, minute_of_day

__all__ = ['BikeDataLoader', 'aggregate_traffic', 'filter_trips_by_minute', 'minute_of_day']
