"""
Planning module: grid construction, edge costs and path search.
"""

from .graph import AxisRange, AirspaceGrid, build_grid, build_grid_sync, populate_environment
from .cost import CostCalculator, RandomCost, EnvironmentalCost, ConstantCost, calculate_heading, haversine_km
from .dijkstra import DijkstraPlanner, SearchResult, shortest_path, path_cost

__all__ = [
    'AxisRange',
    'AirspaceGrid',
    'build_grid',
    'build_grid_sync',
    'populate_environment',
    'CostCalculator',
    'RandomCost',
    'EnvironmentalCost',
    'ConstantCost',
    'calculate_heading',
    'haversine_km',
    'DijkstraPlanner',
    'SearchResult',
    'shortest_path',
    'path_cost',
]
