"""
Utility Modules
===============
Shared utilities for map projection, GeoJSON and HTML generation.
"""

from .geo import project_to_pixels, iter_lines
from .html_builder import build_leaflet_page, get_base_styles, format_time_of_day

__all__ = [
    'project_to_pixels',
    'iter_lines',
    'build_leaflet_page',
    'get_base_styles',
    'format_time_of_day'
]
