"""
Visualization module for routing results.
"""

from .visualizer import (
    format_path,
    plot_grid_path,
    plot_route_comparison,
    plot_altitude_profile
)

__all__ = [
    'format_path',
    'plot_grid_path',
    'plot_route_comparison',
    'plot_altitude_profile',
]
