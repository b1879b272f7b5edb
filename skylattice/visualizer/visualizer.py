"""
Visualization module for airspace routing results.

This module provides functions to plot the grid and a planned route in 3-D,
the conditions met along the route, and a plain-text route report.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Dict, List, Optional

from ..models.node import Node
from ..planning.graph import AirspaceGrid


def format_path(path: List[Node]) -> str:
    """
    Render a route as text, one node block per line group.

    Args:
        path: Nodes from source to destination

    Returns:
        Multi-line report; a single line if the path is empty
    """
    if not path:
        return "No route: destination unreachable"

    blocks = [f"Route with {len(path)} nodes"]
    for step, node in enumerate(path):
        blocks.append(f"[{step}] {node.describe()}")
    return "\n".join(blocks)


def _finish(fig, save_path: Optional[str], show: bool):
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)


def plot_grid_path(grid: AirspaceGrid,
                   path: List[Node],
                   title: str = "Airspace Route",
                   color_by: str = 'cloud_cover_pct',
                   save_path: Optional[str] = None,
                   show: bool = True):
    """
    Plot the lattice in 3-D with the planned route on top.

    Grid nodes are colored by a weather attribute; nodes without weather are
    drawn hollow.

    Args:
        grid: Airspace grid
        path: Planned route
        title: Plot title
        color_by: EnvironmentalState attribute used for node color
        save_path: Optional path to save figure
        show: Whether to display the plot
    """
    fig = plt.figure(figsize=(12, 9))
    ax = fig.add_subplot(111, projection='3d')

    known = [n for n in grid.nodes() if n.weather is not None]
    unknown = [n for n in grid.nodes() if n.weather is None]

    if known:
        values = [getattr(n.weather, color_by) for n in known]
        scatter = ax.scatter([n.longitude for n in known],
                             [n.latitude for n in known],
                             [n.altitude for n in known],
                             c=values, cmap='Blues', s=20, alpha=0.5)
        fig.colorbar(scatter, ax=ax, shrink=0.6, label=color_by)

    if unknown:
        ax.scatter([n.longitude for n in unknown],
                   [n.latitude for n in unknown],
                   [n.altitude for n in unknown],
                   facecolors='none', edgecolors='gray', s=20, alpha=0.4,
                   label='No weather')

    if path:
        ax.plot([n.longitude for n in path],
                [n.latitude for n in path],
                [n.altitude for n in path],
                'r-', linewidth=2.5, label='Planned Route')
        ax.scatter([path[0].longitude], [path[0].latitude], [path[0].altitude],
                   color='green', s=120, marker='o', label='Start')
        ax.scatter([path[-1].longitude], [path[-1].latitude], [path[-1].altitude],
                   color='red', s=120, marker='^', label='Goal')

    ax.set_xlabel('Longitude (deg)', fontsize=11)
    ax.set_ylabel('Latitude (deg)', fontsize=11)
    ax.set_zlabel(f'Altitude (x{grid.altitude_unit_m:g} m)', fontsize=11)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='upper left')

    _finish(fig, save_path, show)


def plot_route_comparison(grid: AirspaceGrid,
                          paths_dict: Dict[str, List[Node]],
                          title: str = "Route Comparison",
                          save_path: Optional[str] = None,
                          show: bool = True):
    """
    Compare several routes over the same grid.

    Args:
        grid: Airspace grid
        paths_dict: Dictionary mapping a label (e.g. cost mode) to a route
        title: Plot title
        save_path: Optional save path
        show: Whether to display
    """
    fig = plt.figure(figsize=(12, 9))
    ax = fig.add_subplot(111, projection='3d')

    ax.scatter([n.longitude for n in grid.nodes()],
               [n.latitude for n in grid.nodes()],
               [n.altitude for n in grid.nodes()],
               color='lightgray', s=8, alpha=0.4)

    colors = ['blue', 'green', 'orange', 'purple', 'cyan']
    styles = ['-', '--', '-.', ':']

    for i, (name, path) in enumerate(paths_dict.items()):
        if path:
            ax.plot([n.longitude for n in path],
                    [n.latitude for n in path],
                    [n.altitude for n in path],
                    color=colors[i % len(colors)],
                    linestyle=styles[i % len(styles)],
                    linewidth=2, label=name)

    ax.set_xlabel('Longitude (deg)', fontsize=11)
    ax.set_ylabel('Latitude (deg)', fontsize=11)
    ax.set_zlabel('Altitude', fontsize=11)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='best')

    _finish(fig, save_path, show)


def plot_altitude_profile(path: List[Node],
                          title: str = "Conditions Along Route",
                          save_path: Optional[str] = None,
                          show: bool = True):
    """
    Plot altitude, temperature, pressure and cloud cover against route step.

    Nodes without weather show as gaps.

    Args:
        path: Planned route
        title: Plot title
        save_path: Optional save path
        show: Whether to display
    """
    steps = np.arange(len(path))

    def series(attr: str) -> np.ndarray:
        return np.array([getattr(n.weather, attr) if n.weather is not None else np.nan
                         for n in path], dtype=float)

    fig, axes = plt.subplots(4, 1, figsize=(10, 10), sharex=True)

    panels = [
        ([n.altitude for n in path], 'Altitude', 'k'),
        (series('temperature_c'), 'Temperature (C)', 'tab:red'),
        (series('pressure_hpa'), 'Pressure (hPa)', 'tab:blue'),
        (series('cloud_cover_pct'), 'Cloud Cover (%)', 'tab:gray'),
    ]
    for ax, (values, label, color) in zip(axes, panels):
        ax.plot(steps, values, marker='o', color=color, linewidth=2)
        ax.set_ylabel(label, fontsize=11)
        ax.grid(True, alpha=0.3)

    axes[0].set_title(title, fontsize=14, fontweight='bold')
    axes[-1].set_xlabel('Route Step', fontsize=12)

    _finish(fig, save_path, show)
