"""
Graph representation module for path planning.

This module builds the airspace grid: a 3-D lattice of nodes over a
latitude / longitude / altitude bounding box, enriched with weather and air
traffic, with every node wired to its axis-aligned neighbours.

Construction runs in two phases:
1. Fetch phase - weather and traffic for every node, issued concurrently
   under a bounded semaphore. Plain (sync) fetchers run on worker threads.
   A failed, timed-out or malformed fetch leaves the field unset and never
   aborts the build.
2. Wiring phase - starts only once every fetch has finished, so edge costs
   can read the final state of both endpoints.
"""

import asyncio
import inspect
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional, Tuple, Union

from ..exceptions import ConfigurationError
from ..models.environment import SurfaceWeather, derive_altitude_weather
from ..models.node import Node
from .cost import CostFunction, RandomCost

logger = logging.getLogger(__name__)

WeatherFetcher = Callable[[float, float], Union[Awaitable[Optional[SurfaceWeather]], Optional[SurfaceWeather]]]
TrafficFetcher = Callable[[float, float], Union[Awaitable[Optional[Dict[str, Any]]], Optional[Dict[str, Any]]]]

# Axis offsets: +-lat, +-lon, +-alt
NEIGHBOR_OFFSETS = (
    (-1, 0, 0), (1, 0, 0),
    (0, -1, 0), (0, 1, 0),
    (0, 0, -1), (0, 0, 1),
)

# Absorbs float error when the range span is a multiple of the cell size
_STEP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class AxisRange:
    """
    Inclusive numeric range along one grid axis.

    Attributes:
        min: Lower bound
        max: Upper bound (inclusive)
    """
    min: float
    max: float

    def validate(self, name: str = "range"):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ConfigurationError(f"{name} bounds must be finite, got {self}")
        if self.min > self.max:
            raise ConfigurationError(f"{name} is inverted: min {self.min} > max {self.max}")

    def num_steps(self, cell_size: float) -> int:
        """Number of lattice values from min to max inclusive."""
        return int(math.floor((self.max - self.min) / cell_size + _STEP_TOLERANCE)) + 1

    def steps(self, cell_size: float) -> List[float]:
        """
        Lattice values from min to max inclusive.

        Values are computed as min + i * cell_size rather than by repeated
        addition so that long axes do not drift.
        """
        return [self.min + i * cell_size for i in range(self.num_steps(cell_size))]


def validate_grid_parameters(lat_range: AxisRange, lon_range: AxisRange,
                             alt_range: AxisRange, cell_size: float,
                             max_concurrency: int = 1):
    """
    Reject configurations that cannot produce a grid.

    Raises:
        ConfigurationError: On non-positive cell size or concurrency,
            inverted or non-finite ranges, or negative altitude
    """
    if not (isinstance(cell_size, (int, float)) and math.isfinite(cell_size) and cell_size > 0):
        raise ConfigurationError(f"cell_size must be a positive number, got {cell_size!r}")
    if max_concurrency < 1:
        raise ConfigurationError(f"max_concurrency must be >= 1, got {max_concurrency}")
    lat_range.validate("latitude range")
    lon_range.validate("longitude range")
    alt_range.validate("altitude range")
    if alt_range.min < 0:
        raise ConfigurationError(f"altitude range must be >= 0, got min {alt_range.min}")


class AirspaceGrid:
    """
    Owns every node of the lattice, addressed by integer (i, j, k).

    Attributes:
        lat_values: Latitude of each i layer
        lon_values: Longitude of each j layer
        alt_values: Altitude of each k layer (grid units)
        cell_size: Step used on every axis
        altitude_unit_m: Meters per altitude grid unit
        fetch_stats: Counters from the fetch phase
    """

    def __init__(self, lat_range: AxisRange, lon_range: AxisRange,
                 alt_range: AxisRange, cell_size: float,
                 altitude_unit_m: float = 1000.0):
        """
        Create every node of the lattice (no weather, traffic or edges yet).

        Args:
            lat_range: Latitude bounds in degrees
            lon_range: Longitude bounds in degrees
            alt_range: Altitude bounds in grid units
            cell_size: Step on every axis
            altitude_unit_m: Meters per altitude grid unit (1000 = kilometers)
        """
        validate_grid_parameters(lat_range, lon_range, alt_range, cell_size)

        self.lat_range = lat_range
        self.lon_range = lon_range
        self.alt_range = alt_range
        self.cell_size = cell_size
        self.altitude_unit_m = altitude_unit_m

        self.lat_values = lat_range.steps(cell_size)
        self.lon_values = lon_range.steps(cell_size)
        self.alt_values = alt_range.steps(cell_size)

        self._nodes: List[List[List[Node]]] = [
            [
                [
                    Node(latitude=lat, longitude=lon, altitude=alt, index=(i, j, k))
                    for k, alt in enumerate(self.alt_values)
                ]
                for j, lon in enumerate(self.lon_values)
            ]
            for i, lat in enumerate(self.lat_values)
        ]
        self._members = {id(node) for node in self.nodes()}
        self.wired = False
        self.fetch_stats = {'weather_missing': 0, 'traffic_missing': 0}

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (len(self.lat_values), len(self.lon_values), len(self.alt_values))

    def node_at(self, i: int, j: int, k: int) -> Node:
        """
        Get the node at lattice index (i, j, k).

        Raises:
            IndexError: If the index lies outside the grid
        """
        if not self.in_bounds(i, j, k):
            raise IndexError(f"Index {(i, j, k)} outside grid of shape {self.shape}")
        return self._nodes[i][j][k]

    def in_bounds(self, i: int, j: int, k: int) -> bool:
        ni, nj, nk = self.shape
        return 0 <= i < ni and 0 <= j < nj and 0 <= k < nk

    def nodes(self) -> Iterator[Node]:
        """Iterate nodes in (i, j, k) order."""
        for lat_layer in self._nodes:
            for lon_layer in lat_layer:
                yield from lon_layer

    def __len__(self) -> int:
        ni, nj, nk = self.shape
        return ni * nj * nk

    def __iter__(self) -> Iterator[Node]:
        return self.nodes()

    def __contains__(self, node: object) -> bool:
        return id(node) in self._members

    def neighbors_of(self, node: Node) -> List[Node]:
        """
        Axis-aligned neighbours of a node that lie inside the grid.

        Order: -lat, +lat, -lon, +lon, -alt, +alt.
        """
        i, j, k = node.index
        neighbors = []
        for di, dj, dk in NEIGHBOR_OFFSETS:
            if self.in_bounds(i + di, j + dj, k + dk):
                neighbors.append(self._nodes[i + di][j + dj][k + dk])
        return neighbors

    def wire_edges(self, cost_fn: Optional[CostFunction] = None):
        """
        Connect every node to its in-bounds axis neighbours.

        Each direction gets its own weight from ``cost_fn(src, dst)``;
        the two directions of a pair are independent values.

        Args:
            cost_fn: Edge cost callable. Defaults to RandomCost().

        Raises:
            RuntimeError: If the grid has already been wired
        """
        if self.wired:
            raise RuntimeError("Grid edges are already wired")
        if cost_fn is None:
            cost_fn = RandomCost()

        for node in self.nodes():
            for neighbor in self.neighbors_of(node):
                node.add_edge(neighbor, cost_fn(node, neighbor))

        self.wired = True
        logger.debug("Wired %d edges with %r", self.num_edges, cost_fn)

    @property
    def num_edges(self) -> int:
        return sum(len(node.edges) for node in self.nodes())

    def nearest_node(self, latitude: float, longitude: float, altitude: float) -> Node:
        """
        Snap an arbitrary position to the closest lattice node.

        Positions outside the bounding box snap to the boundary.
        """
        def snap(value: float, axis: AxisRange, count: int) -> int:
            step = round((value - axis.min) / self.cell_size)
            return int(min(max(step, 0), count - 1))

        ni, nj, nk = self.shape
        return self._nodes[snap(latitude, self.lat_range, ni)] \
                          [snap(longitude, self.lon_range, nj)] \
                          [snap(altitude, self.alt_range, nk)]

    def altitude_m(self, node: Node) -> float:
        """Node altitude converted to meters."""
        return node.altitude * self.altitude_unit_m

    def get_graph_info(self) -> dict:
        """
        Get information about the graph structure.

        Returns:
            Dictionary with graph statistics
        """
        total_edges = self.num_edges
        num_nodes = len(self)

        return {
            'shape': self.shape,
            'num_nodes': num_nodes,
            'num_edges': total_edges,
            'cell_size': self.cell_size,
            'nodes_with_weather': sum(1 for n in self.nodes() if n.weather is not None),
            'nodes_with_traffic': sum(1 for n in self.nodes() if n.traffic is not None),
            'avg_degree': total_edges / num_nodes if num_nodes else 0,
        }

    def __repr__(self) -> str:
        """String representation of the AirspaceGrid."""
        return (f"AirspaceGrid(shape={self.shape}, "
                f"nodes={len(self)}, "
                f"cell={self.cell_size})")


async def _call_fetcher(fetcher: Callable, latitude: float, longitude: float,
                        timeout_s: Optional[float]) -> Any:
    # Plain callables run on a worker thread so a blocking fetcher cannot
    # stall the loop. The timeout stops the wait, not the thread itself.
    if inspect.iscoroutinefunction(fetcher) or inspect.iscoroutinefunction(
            getattr(fetcher, '__call__', None)):
        pending = fetcher(latitude, longitude)
    else:
        pending = asyncio.to_thread(fetcher, latitude, longitude)

    if timeout_s is not None:
        result = await asyncio.wait_for(pending, timeout=timeout_s)
    else:
        result = await pending

    # Sync wrappers around async code hand back an awaitable
    if inspect.isawaitable(result):
        if timeout_s is not None:
            result = await asyncio.wait_for(result, timeout=timeout_s)
        else:
            result = await result
    return result


async def _fetch_weather(grid: AirspaceGrid, node: Node, fetcher: WeatherFetcher,
                         timeout_s: Optional[float]) -> bool:
    try:
        surface = await _call_fetcher(fetcher, node.latitude, node.longitude, timeout_s)
    except asyncio.TimeoutError:
        logger.warning("Weather fetch timed out for (%s, %s)", node.latitude, node.longitude)
        return False
    except Exception as exc:
        logger.warning("Weather fetch failed for (%s, %s): %s",
                       node.latitude, node.longitude, exc)
        return False

    if surface is None:
        return False
    if not isinstance(surface, SurfaceWeather):
        logger.warning("Discarding weather for (%s, %s): expected SurfaceWeather, got %s",
                       node.latitude, node.longitude, type(surface).__name__)
        return False

    node.update_weather(derive_altitude_weather(surface, grid.altitude_m(node)))
    return True


async def _fetch_traffic(node: Node, fetcher: TrafficFetcher,
                         timeout_s: Optional[float]) -> bool:
    try:
        traffic = await _call_fetcher(fetcher, node.latitude, node.longitude, timeout_s)
    except asyncio.TimeoutError:
        logger.warning("Traffic fetch timed out for (%s, %s)", node.latitude, node.longitude)
        return False
    except Exception as exc:
        logger.warning("Traffic fetch failed for (%s, %s): %s",
                       node.latitude, node.longitude, exc)
        return False

    if traffic is None:
        return False
    if not isinstance(traffic, dict):
        logger.warning("Discarding traffic for (%s, %s): expected a dict, got %s",
                       node.latitude, node.longitude, type(traffic).__name__)
        return False

    node.update_traffic(traffic)
    return True


async def populate_environment(grid: AirspaceGrid,
                               weather_fetcher: WeatherFetcher,
                               traffic_fetcher: TrafficFetcher,
                               max_concurrency: int = 8,
                               fetch_timeout_s: Optional[float] = None):
    """
    Fetch phase: attach weather and traffic to every node of the grid.

    At most ``max_concurrency`` nodes are in flight at once; each node's
    weather and traffic requests run side by side. Returns once every node
    has finished, which is the barrier before edge wiring.

    Args:
        grid: Grid whose nodes are populated in place
        weather_fetcher: (lat, lon) -> SurfaceWeather or None, sync or async
        traffic_fetcher: (lat, lon) -> traffic dict or None, sync or async
        max_concurrency: Upper bound on nodes fetched concurrently
        fetch_timeout_s: Optional per-request timeout; expiry counts as absent
    """
    if max_concurrency < 1:
        raise ConfigurationError(f"max_concurrency must be >= 1, got {max_concurrency}")

    semaphore = asyncio.Semaphore(max_concurrency)

    async def populate(node: Node) -> Tuple[bool, bool]:
        async with semaphore:
            return await asyncio.gather(
                _fetch_weather(grid, node, weather_fetcher, fetch_timeout_s),
                _fetch_traffic(node, traffic_fetcher, fetch_timeout_s),
            )

    results = await asyncio.gather(*(populate(node) for node in grid.nodes()))

    grid.fetch_stats['weather_missing'] = sum(1 for weather_ok, _ in results if not weather_ok)
    grid.fetch_stats['traffic_missing'] = sum(1 for _, traffic_ok in results if not traffic_ok)

    if grid.fetch_stats['weather_missing'] or grid.fetch_stats['traffic_missing']:
        logger.info("Fetch phase finished: %d/%d nodes without weather, %d/%d without traffic",
                    grid.fetch_stats['weather_missing'], len(grid),
                    grid.fetch_stats['traffic_missing'], len(grid))


async def build_grid(lat_range: AxisRange, lon_range: AxisRange,
                     alt_range: AxisRange, cell_size: float,
                     weather_fetcher: WeatherFetcher,
                     traffic_fetcher: TrafficFetcher,
                     cost_fn: Optional[CostFunction] = None,
                     max_concurrency: int = 8,
                     fetch_timeout_s: Optional[float] = None,
                     altitude_unit_m: float = 1000.0) -> AirspaceGrid:
    """
    Build a fully wired airspace grid.

    Args:
        lat_range: Latitude bounds in degrees (inclusive)
        lon_range: Longitude bounds in degrees (inclusive)
        alt_range: Altitude bounds in grid units (inclusive)
        cell_size: Step on every axis
        weather_fetcher: (lat, lon) -> SurfaceWeather or None
        traffic_fetcher: (lat, lon) -> traffic snapshot or None
        cost_fn: Edge cost callable; defaults to RandomCost()
        max_concurrency: Upper bound on nodes fetched concurrently
        fetch_timeout_s: Optional per-request timeout
        altitude_unit_m: Meters per altitude grid unit

    Returns:
        AirspaceGrid with environment populated and edges wired

    Raises:
        ConfigurationError: If the parameters cannot describe a grid.
            Raised before any fetch is issued.
    """
    validate_grid_parameters(lat_range, lon_range, alt_range, cell_size, max_concurrency)

    grid = AirspaceGrid(lat_range, lon_range, alt_range, cell_size,
                        altitude_unit_m=altitude_unit_m)
    logger.info("Building %r", grid)

    await populate_environment(grid, weather_fetcher, traffic_fetcher,
                               max_concurrency=max_concurrency,
                               fetch_timeout_s=fetch_timeout_s)

    grid.wire_edges(cost_fn)
    logger.info("Graph built: %d nodes, %d edges", len(grid), grid.num_edges)
    return grid


def build_grid_sync(*args, **kwargs) -> AirspaceGrid:
    """Run build_grid to completion from synchronous code."""
    return asyncio.run(build_grid(*args, **kwargs))


if __name__ == "__main__":
    # Example usage with offline fetchers
    from ..models.environment import Wind

    def fake_weather(lat, lon):
        return SurfaceWeather(288.15, 101325.0, 60.0, Wind(4.0, 270), 40.0, 9000.0)

    def no_traffic(lat, lon):
        return None

    grid = build_grid_sync(AxisRange(0, 2), AxisRange(0, 2), AxisRange(0, 1), 1,
                           fake_weather, no_traffic)

    print(grid)
    print("\nGraph Information:")
    for key, value in grid.get_graph_info().items():
        print(f"  {key}: {value}")
