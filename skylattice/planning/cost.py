"""
Edge cost module for the airspace grid.

This module provides the functions that turn a pair of neighbouring nodes
into a non-negative edge weight. Two families are available:

- random weights, reproducing the reference behaviour where the weight is
  unrelated to the environment (optionally seeded for repeatable runs)
- environmental weights, a deterministic function of the destination node's
  derived weather and nearby air traffic
"""

import math
from typing import Callable, Optional, Tuple
import numpy as np

from ..models.node import Node

EARTH_RADIUS_KM = 6371.0088

CostFunction = Callable[[Node, Node], float]


def haversine_km(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    """
    Great-circle distance between two (lat, lon) points.

    Args:
        p1: First point (lat, lon) in degrees
        p2: Second point (lat, lon) in degrees

    Returns:
        Distance in kilometers
    """
    lat1, lon1, lat2, lon2 = map(np.radians, (p1[0], p1[1], p2[0], p2[1]))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return float(2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(a)))


def calculate_heading(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    """
    Initial great-circle bearing from p1 to p2.

    Args:
        p1: Start point (lat, lon) in degrees
        p2: End point (lat, lon) in degrees

    Returns:
        Heading in degrees (0 = North, 90 = East), normalized to [0, 360)
    """
    lat1, lon1, lat2, lon2 = map(np.radians, (p1[0], p1[1], p2[0], p2[1]))
    dlon = lon2 - lon1

    x = np.sin(dlon) * np.cos(lat2)
    y = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(dlon)

    heading_deg = np.degrees(np.arctan2(x, y))
    return float(heading_deg % 360)


class RandomCost:
    """
    Uniform random weight in [0, 1) per directed edge.

    The weight ignores the nodes entirely. Pass a seed to get the same
    weights on every build.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def __call__(self, src: Node, dst: Node) -> float:
        return float(self._rng.random())

    def __repr__(self) -> str:
        return f"RandomCost(seed={self.seed})"


class ConstantCost:
    """Same weight for every edge."""

    def __init__(self, value: float = 1.0):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Constant cost must be finite and >= 0, got {value}")
        self.value = float(value)

    def __call__(self, src: Node, dst: Node) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantCost(value={self.value})"


class EnvironmentalCost:
    """
    Deterministic weight derived from the destination node's conditions.

    weight = base
           + cloud_weight      * cloud cover fraction
           + wind_weight       * headwind along the edge / reference_wind_mps
           + visibility_weight * (1 - visibility / reference_visibility_m), floored at 0
           + traffic_weight    * aircraft nearby / reference_traffic
           + missing_weather_penalty if the destination has no weather
           + missing_traffic_penalty if the destination has no traffic

    Every term is non-negative, so the result is always >= base >= 0.
    Vertical edges have no horizontal track and take no wind term.

    Attributes:
        base: Cost of moving one cell in calm, clear, empty airspace
        cloud_weight: Weight for cloud cover
        wind_weight: Weight for headwind
        visibility_weight: Weight for reduced visibility
        traffic_weight: Weight for traffic density
        missing_weather_penalty: Added when weather is unknown
        missing_traffic_penalty: Added when traffic is unknown
    """

    def __init__(self, base: float = 1.0,
                 cloud_weight: float = 1.0,
                 wind_weight: float = 0.5,
                 visibility_weight: float = 0.5,
                 traffic_weight: float = 1.0,
                 missing_weather_penalty: float = 0.5,
                 missing_traffic_penalty: float = 0.25,
                 reference_wind_mps: float = 10.0,
                 reference_visibility_m: float = 10000.0,
                 reference_traffic: float = 10.0):
        weights = (base, cloud_weight, wind_weight, visibility_weight, traffic_weight,
                   missing_weather_penalty, missing_traffic_penalty)
        if any(w < 0 for w in weights):
            raise ValueError("Environmental cost weights must be >= 0")
        if min(reference_wind_mps, reference_visibility_m, reference_traffic) <= 0:
            raise ValueError("Reference values must be > 0")

        self.base = base
        self.cloud_weight = cloud_weight
        self.wind_weight = wind_weight
        self.visibility_weight = visibility_weight
        self.traffic_weight = traffic_weight
        self.missing_weather_penalty = missing_weather_penalty
        self.missing_traffic_penalty = missing_traffic_penalty
        self.reference_wind_mps = reference_wind_mps
        self.reference_visibility_m = reference_visibility_m
        self.reference_traffic = reference_traffic

    def weather_cost(self, src: Node, dst: Node) -> float:
        """Weather share of the edge cost."""
        weather = dst.weather
        if weather is None:
            return self.missing_weather_penalty

        cost = self.cloud_weight * weather.cloud_cover_pct / 100.0

        horizontal = (src.latitude, src.longitude) != (dst.latitude, dst.longitude)
        if horizontal and weather.wind.speed_mps > 0:
            heading = calculate_heading((src.latitude, src.longitude),
                                        (dst.latitude, dst.longitude))
            along, _ = weather.wind.get_component(heading)
            headwind = max(0.0, -along)
            cost += self.wind_weight * headwind / self.reference_wind_mps

        shortfall = max(0.0, 1.0 - weather.visibility_m / self.reference_visibility_m)
        cost += self.visibility_weight * shortfall
        return cost

    def traffic_cost(self, dst: Node) -> float:
        """Traffic share of the edge cost."""
        if dst.traffic is None:
            return self.missing_traffic_penalty
        return self.traffic_weight * dst.traffic_count / self.reference_traffic

    def __call__(self, src: Node, dst: Node) -> float:
        return float(self.base + self.weather_cost(src, dst) + self.traffic_cost(dst))

    def __repr__(self) -> str:
        return (f"EnvironmentalCost(base={self.base}, clouds={self.cloud_weight}, "
                f"wind={self.wind_weight}, visibility={self.visibility_weight}, "
                f"traffic={self.traffic_weight})")


class CostCalculator:
    """
    Configurable edge cost for grid wiring.

    Attributes:
        cost_type: 'random', 'environmental', or 'constant'
        cost_fn: The underlying cost callable
    """

    COST_TYPES = {
        'random': RandomCost,
        'environmental': EnvironmentalCost,
        'constant': ConstantCost,
    }

    def __init__(self, cost_type: str = 'random', **kwargs):
        """
        Initialize cost calculator.

        Args:
            cost_type: 'random', 'environmental', or 'constant'
            **kwargs: Forwarded to the selected cost class

        Raises:
            ValueError: If cost_type is unknown
        """
        if cost_type not in self.COST_TYPES:
            raise ValueError(f"Unknown cost type: {cost_type}")
        self.cost_type = cost_type
        self.cost_fn: CostFunction = self.COST_TYPES[cost_type](**kwargs)

    def calculate_cost(self, src: Node, dst: Node) -> float:
        """
        Calculate the weight of the directed edge src -> dst.

        Args:
            src: Node the edge leaves
            dst: Node the edge enters

        Returns:
            Non-negative weight
        """
        return self.cost_fn(src, dst)

    def __call__(self, src: Node, dst: Node) -> float:
        return self.calculate_cost(src, dst)

    def __repr__(self) -> str:
        return f"CostCalculator({self.cost_fn!r})"


if __name__ == "__main__":
    # Example usage
    from ..models.environment import EnvironmentalState, Wind

    clear = EnvironmentalState(288.0, 1013.0, 50.0, Wind(3.0, 180), 10.0, 10000.0)
    stormy = EnvironmentalState(283.0, 1005.0, 95.0, Wind(15.0, 0), 95.0, 2000.0)

    a = Node(0.0, 0.0, 1.0, weather=clear, traffic={'ac': []})
    b = Node(1.0, 0.0, 1.0, weather=stormy, traffic={'ac': [{}] * 6})

    env_cost = EnvironmentalCost()
    print("Cost Comparison for one northbound cell:")
    print("=" * 50)
    print(f"Into clear air:  {env_cost(b, a):.4f}")
    print(f"Into the storm:  {env_cost(a, b):.4f}")
    print(f"Random (seed 0): {RandomCost(seed=0)(a, b):.4f}")
