"""
Rendering package.
Binds station traffic to circles on the map viewport.
"""

from .scatter import ScatterRenderer, departure_ratio, ratio_color

__all__ = ['ScatterRenderer', 'departure_ratio', 'ratio_color']
