"""
Generators package.
Contains the traffic map outputs: interactive HTML page and PNG snapshot.
"""

from .base import BaseGenerator
from .traffic_map import TrafficMapGenerator
from .snapshot import SnapshotGenerator

__all__ = [
    'BaseGenerator',
    'TrafficMapGenerator',
    'SnapshotGenerator',
]
