"""
SkyLattice

A Python library for routing through a 3-D airspace grid enriched with
altitude-adjusted weather and nearby air traffic.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Import main classes for easy access
from .exceptions import SkyLatticeError, ConfigurationError, FetchError, WeatherParseError
from .models.environment import Wind, SurfaceWeather, EnvironmentalState, derive_altitude_weather
from .models.node import Node, Edge
from .planning.graph import AxisRange, AirspaceGrid, build_grid, build_grid_sync
from .planning.dijkstra import DijkstraPlanner, SearchResult, shortest_path, path_cost
from .planning.cost import CostCalculator, RandomCost, EnvironmentalCost, ConstantCost
from .config import PlannerConfig
from .planner import plan_route, plan_route_sync

__all__ = [
    'SkyLatticeError',
    'ConfigurationError',
    'FetchError',
    'WeatherParseError',
    'Wind',
    'SurfaceWeather',
    'EnvironmentalState',
    'derive_altitude_weather',
    'Node',
    'Edge',
    'AxisRange',
    'AirspaceGrid',
    'build_grid',
    'build_grid_sync',
    'DijkstraPlanner',
    'SearchResult',
    'shortest_path',
    'path_cost',
    'CostCalculator',
    'RandomCost',
    'EnvironmentalCost',
    'ConstantCost',
    'PlannerConfig',
    'plan_route',
    'plan_route_sync',
]
