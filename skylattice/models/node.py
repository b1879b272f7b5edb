"""
Lattice node and edge types.

A node is one point of the airspace grid. The grid owns every node; edges
only reference their target. Shortest-path bookkeeping (distance and
predecessor) is kept by the planner, not on the node, so one grid can be
searched repeatedly without resetting anything.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .environment import EnvironmentalState


@dataclass(eq=False)
class Edge:
    """
    Directed, weighted connection to a neighbouring node.

    Attributes:
        target: Node the edge leads to
        weight: Non-negative traversal cost
    """
    target: "Node"
    weight: float

    def __post_init__(self):
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(f"Edge weight must be finite and >= 0, got {self.weight}")

    def __repr__(self) -> str:
        return f"Edge(-> {self.target.index}, weight={self.weight:.4f})"


@dataclass(eq=False)
class Node:
    """
    One lattice point in the 3-D airspace grid.

    Nodes compare and hash by identity.

    Attributes:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        altitude: Altitude in grid units (see AirspaceGrid.altitude_unit_m)
        index: (lat-step, lon-step, alt-step) position in the grid
        weather: Derived conditions at this altitude, None until fetched
        traffic: Raw traffic snapshot around this point, None until fetched
        edges: Outgoing connections in wiring order
    """
    latitude: float
    longitude: float
    altitude: float
    index: Tuple[int, int, int] = (0, 0, 0)
    weather: Optional[EnvironmentalState] = None
    traffic: Optional[Dict[str, Any]] = None
    edges: List[Edge] = field(default_factory=list, repr=False)

    def update_weather(self, weather: EnvironmentalState):
        """Attach derived weather. A node's weather is set at most once."""
        if self.weather is not None:
            raise RuntimeError(f"Weather already set on node {self.index}")
        self.weather = weather

    def update_traffic(self, traffic: Dict[str, Any]):
        """Attach a traffic snapshot. A node's traffic is set at most once."""
        if self.traffic is not None:
            raise RuntimeError(f"Traffic already set on node {self.index}")
        self.traffic = traffic

    def add_edge(self, neighbor: "Node", weight: float) -> Edge:
        edge = Edge(target=neighbor, weight=float(weight))
        self.edges.append(edge)
        return edge

    def edge_to(self, neighbor: "Node") -> Optional[Edge]:
        """Return the outgoing edge leading to ``neighbor``, if any."""
        for edge in self.edges:
            if edge.target is neighbor:
                return edge
        return None

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.latitude, self.longitude, self.altitude)

    @property
    def traffic_count(self) -> int:
        """
        Number of aircraft reported in the traffic snapshot.

        ADS-B Exchange style payloads list aircraft under ``ac`` (or ``aircraft``
        on older endpoints). Absent traffic counts as zero.
        """
        if not self.traffic:
            return 0
        for key in ('ac', 'aircraft'):
            aircraft = self.traffic.get(key)
            if isinstance(aircraft, list):
                return len(aircraft)
        total = self.traffic.get('total')
        if isinstance(total, (int, float)):
            return int(total)
        return 0

    def describe(self) -> str:
        """Human-readable multi-line summary of the node."""
        lines = [f"Node (Lat: {self.latitude}, Lon: {self.longitude}, Alt: {self.altitude})"]
        if self.weather is None:
            lines.append("  Weather: unavailable")
        else:
            w = self.weather
            lines.append(
                f"  Weather: {w.temperature_c:.1f} C, {w.pressure_hpa:.1f} hPa, "
                f"RH {w.humidity_pct:.0f}%, clouds {w.cloud_cover_pct:.0f}%, "
                f"wind {w.wind.speed_mps:.1f} m/s @ {w.wind.direction_deg:.0f} deg, "
                f"visibility {w.visibility_m:.0f} m"
            )
        if self.traffic is None:
            lines.append("  Air Traffic: unavailable")
        else:
            lines.append(f"  Air Traffic: {self.traffic_count} aircraft nearby")
        return "\n".join(lines)
