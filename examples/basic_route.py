"""
Basic routing example against the live weather and traffic services.

This script shows how to:
1. Load configuration (bounding box, cell size, credentials) from the environment
2. Build the airspace grid with altitude-adjusted weather and nearby traffic
3. Find the least-cost route from one corner of the grid to the other
4. Report and plot the result

Set SKYLATTICE_WEATHER_API_KEY and SKYLATTICE_TRAFFIC_API_KEY before running.
Keep the grid small: every node costs two API requests.
"""

import sys
sys.path.append('..')

from skylattice.config import PlannerConfig
from skylattice.exceptions import ConfigurationError
from skylattice.logging_config import configure_logging
from skylattice.planner import plan_route_sync
from skylattice.visualizer import format_path, plot_grid_path, plot_altitude_profile


def main():
    """Run the basic routing demonstration."""
    configure_logging()

    print("=" * 70)
    print("SKYLATTICE - Airspace Routing Demonstration")
    print("=" * 70)

    # ========================================================================
    # Step 1: Load Configuration
    # ========================================================================
    print("\n[1] Loading configuration...")

    config = PlannerConfig.from_env()
    try:
        config.validate()
    except ConfigurationError as exc:
        print(f"    Invalid configuration: {exc}")
        return 1

    print(f"    Latitude:  {config.lat_range.min} .. {config.lat_range.max}")
    print(f"    Longitude: {config.lon_range.min} .. {config.lon_range.max}")
    print(f"    Altitude:  {config.alt_range.min} .. {config.alt_range.max} "
          f"(x{config.altitude_unit_m:g} m)")
    print(f"    Cell size: {config.cell_size}, cost: {config.cost_type}")

    # ========================================================================
    # Step 2: Build Grid and Plan Route
    # ========================================================================
    print("\n[2] Building grid and planning route...")

    grid, result = plan_route_sync(config)

    info = grid.get_graph_info()
    print(f"    Nodes: {info['num_nodes']}, edges: {info['num_edges']}")
    print(f"    Nodes with weather: {info['nodes_with_weather']}")
    print(f"    Nodes with traffic: {info['nodes_with_traffic']}")

    if not result.found:
        print("\n    No route found.")
        return 1

    print(f"    Route: {len(result.path)} nodes, cost {result.cost:.4f}")
    print(f"    Nodes explored: {result.nodes_visited}")

    # ========================================================================
    # Step 3: Report
    # ========================================================================
    print("\n[3] Route details:")
    print(format_path(result.path))

    # ========================================================================
    # Step 4: Visualize
    # ========================================================================
    print("\n[4] Generating visualizations...")
    plot_grid_path(grid, result.path, save_path="route_3d.png", show=False)
    plot_altitude_profile(result.path, save_path="route_profile.png", show=False)

    print("\n" + "=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
