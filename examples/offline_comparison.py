"""
Offline comparison of random and environmental edge costs.

No API keys needed: weather and traffic come from synthetic fetchers that
place a band of cloud and a cluster of traffic in the middle of the box,
and fail for a handful of coordinates to show graceful degradation.
"""

import sys
sys.path.append('..')

import asyncio
import random

import numpy as np

from skylattice.logging_config import configure_logging
from skylattice.models.environment import SurfaceWeather, Wind
from skylattice.planning.cost import CostCalculator
from skylattice.planning.dijkstra import DijkstraPlanner
from skylattice.planning.graph import AxisRange, build_grid_sync
from skylattice.visualizer import plot_route_comparison


LAT_RANGE = AxisRange(0, 10)
LON_RANGE = AxisRange(0, 10)
ALT_RANGE = AxisRange(0, 5)
CELL_SIZE = 1


async def synthetic_weather(lat, lon):
    """Overcast band along lat 4..6, otherwise fair; fails 5% of the time."""
    await asyncio.sleep(0)
    if random.random() < 0.05:
        return None
    overcast = 4 <= lat <= 6
    return SurfaceWeather(
        temperature_k=288.15 - 0.3 * lat,
        pressure_pa=101325.0,
        humidity_pct=90.0 if overcast else 50.0,
        wind=Wind(speed_mps=6.0, direction_deg=270.0),
        cloud_cover_pct=95.0 if overcast else 10.0,
        visibility_m=3000.0 if overcast else 10000.0,
    )


async def synthetic_traffic(lat, lon):
    """Busy airspace near the center of the box."""
    await asyncio.sleep(0)
    distance = np.hypot(lat - 5, lon - 5)
    count = int(max(0, 12 - 4 * distance))
    return {'ac': [{'hex': f'{lat:02.0f}{lon:02.0f}{n}'} for n in range(count)]}


def main():
    configure_logging("WARNING")
    random.seed(42)

    print("=" * 70)
    print("COST MODE COMPARISON")
    print("=" * 70)

    paths = {}
    for cost_type, kwargs in (('random', {'seed': 7}), ('environmental', {})):
        grid = build_grid_sync(LAT_RANGE, LON_RANGE, ALT_RANGE, CELL_SIZE,
                               synthetic_weather, synthetic_traffic,
                               cost_fn=CostCalculator(cost_type, **kwargs),
                               max_concurrency=16)

        planner = DijkstraPlanner(grid)
        result = planner.find_path(grid.node_at(0, 0, 0), grid.node_at(10, 10, 5))
        metrics = planner.get_performance_metrics()

        cloudy = sum(1 for n in result.path
                     if n.weather is not None and n.weather.cloud_cover_pct > 50)
        busy = sum(n.traffic_count for n in result.path)

        print(f"\n[{cost_type.upper()}]")
        print(f"    Route length: {len(result.path)} nodes")
        print(f"    Cost: {result.cost:.4f}")
        print(f"    Cloudy nodes on route: {cloudy}")
        print(f"    Aircraft encountered: {busy}")
        print(f"    Exploration ratio: {metrics['exploration_ratio'] * 100:.1f}%")
        print(f"    Missing weather: {grid.fetch_stats['weather_missing']} nodes")

        paths[cost_type] = result.path

    plot_route_comparison(grid, paths, title="Random vs Environmental Cost",
                          save_path="cost_comparison.png", show=False)

    print("\nDemonstration complete.")


if __name__ == "__main__":
    main()
