"""
End-to-end route planning: configuration in, grid and route out.
"""

import asyncio
import logging
from typing import Optional, Tuple

import httpx

from .config import PlannerConfig
from .planning.cost import CostCalculator
from .planning.dijkstra import DijkstraPlanner, SearchResult
from .planning.graph import AirspaceGrid, build_grid
from .services import ADSBExchangeClient, OpenWeatherClient

logger = logging.getLogger(__name__)

GridIndex = Tuple[int, int, int]


async def plan_route(config: PlannerConfig,
                     source: GridIndex = (0, 0, 0),
                     destination: Optional[GridIndex] = None,
                     http_client: Optional[httpx.AsyncClient] = None,
                     **cost_kwargs) -> Tuple[AirspaceGrid, SearchResult]:
    """
    Build the grid described by ``config`` and search it once.

    Args:
        config: Planner configuration; validated before anything else
        source: Lattice index of the start node
        destination: Lattice index of the goal node; defaults to the far
            corner of the grid
        http_client: Optional shared httpx.AsyncClient for both services
        **cost_kwargs: Forwarded to the edge cost class

    Returns:
        Tuple of (grid, search result)

    Raises:
        ConfigurationError: If the configuration is invalid
        IndexError: If source or destination lies outside the grid
    """
    config.validate()

    shape = tuple(axis.num_steps(config.cell_size)
                  for axis in (config.lat_range, config.lon_range, config.alt_range))
    if destination is None:
        destination = tuple(n - 1 for n in shape)
    for name, index in (('source', source), ('destination', destination)):
        if len(index) != 3 or not all(0 <= v < n for v, n in zip(index, shape)):
            raise IndexError(f"{name} index {index} outside grid of shape {shape}")

    async with OpenWeatherClient(config.weather_api_key,
                                 timeout_s=config.request_timeout_s,
                                 client=http_client) as weather, \
               ADSBExchangeClient(config.traffic_api_key,
                                  timeout_s=config.request_timeout_s,
                                  radius_km=config.traffic_radius_km,
                                  client=http_client) as traffic:
        grid = await build_grid(
            config.lat_range, config.lon_range, config.alt_range, config.cell_size,
            weather_fetcher=weather.fetch,
            traffic_fetcher=traffic.fetch,
            cost_fn=CostCalculator(config.cost_type, **cost_kwargs),
            max_concurrency=config.max_concurrency,
            altitude_unit_m=config.altitude_unit_m,
        )

    planner = DijkstraPlanner(grid)
    result = planner.find_path(grid.node_at(*source), grid.node_at(*destination))
    metrics = planner.get_performance_metrics()
    logger.info("Route %s -> %s: %d nodes, cost %.4f, explored %.1f%% of grid",
                source, destination, len(result.path), result.cost,
                metrics['exploration_ratio'] * 100)
    return grid, result


def plan_route_sync(config: PlannerConfig, *args, **kwargs) -> Tuple[AirspaceGrid, SearchResult]:
    """Run plan_route to completion from synchronous code."""
    return asyncio.run(plan_route(config, *args, **kwargs))
