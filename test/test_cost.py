"""
Unit tests for edge cost functions.

Run with: pytest test/test_cost.py
"""

import pytest
from skylattice.models.environment import EnvironmentalState, Wind
from skylattice.models.node import Node
from skylattice.planning.cost import (
    haversine_km,
    calculate_heading,
    RandomCost,
    ConstantCost,
    EnvironmentalCost,
    CostCalculator
)


def make_state(clouds=0.0, wind=None, visibility=10000.0):
    return EnvironmentalState(
        temperature_k=280.0,
        pressure_hpa=900.0,
        humidity_pct=50.0,
        wind=wind or Wind(),
        cloud_cover_pct=clouds,
        visibility_m=visibility,
    )


class TestGeodesy:
    """Tests for distance and heading calculations."""

    def test_haversine_one_degree_latitude(self):
        """One degree of latitude is about 111 km."""
        assert haversine_km((0, 0), (1, 0)) == pytest.approx(111.2, abs=0.1)

    def test_haversine_same_point(self):
        """Distance between identical points is zero."""
        assert haversine_km((10, 20), (10, 20)) == 0.0

    def test_calculate_heading_north(self):
        """Increasing latitude is heading 0."""
        assert calculate_heading((0, 0), (1, 0)) == pytest.approx(0.0)

    def test_calculate_heading_east(self):
        """Increasing longitude on the equator is heading 90."""
        assert calculate_heading((0, 0), (0, 1)) == pytest.approx(90.0)

    def test_calculate_heading_south(self):
        assert calculate_heading((1, 0), (0, 0)) == pytest.approx(180.0)

    def test_calculate_heading_west(self):
        assert calculate_heading((0, 1), (0, 0)) == pytest.approx(270.0)


class TestRandomCost:
    """Tests for the random edge weight."""

    def test_range(self):
        """Weights lie in [0, 1)."""
        cost = RandomCost()
        a, b = Node(0, 0, 0), Node(1, 0, 0)
        weights = [cost(a, b) for _ in range(200)]
        assert all(0.0 <= w < 1.0 for w in weights)

    def test_seed_reproducible(self):
        """Same seed, same sequence."""
        a, b = Node(0, 0, 0), Node(1, 0, 0)
        first = RandomCost(seed=7)
        second = RandomCost(seed=7)
        assert [first(a, b) for _ in range(5)] == [second(a, b) for _ in range(5)]


class TestConstantCost:
    """Tests for the constant edge weight."""

    def test_value(self):
        assert ConstantCost(0.0)(Node(0, 0, 0), Node(1, 0, 0)) == 0.0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            ConstantCost(-1.0)


class TestEnvironmentalCost:
    """Tests for the weather and traffic driven edge weight."""

    def test_calm_clear_empty_airspace_costs_base(self):
        """No clouds, no wind, full visibility, no traffic: weight == base."""
        cost = EnvironmentalCost(base=1.0)
        a = Node(0, 0, 1, weather=make_state(), traffic={'ac': []})
        b = Node(1, 0, 1, weather=make_state(), traffic={'ac': []})
        assert cost(a, b) == pytest.approx(1.0)

    def test_clouds_increase_cost(self):
        cost = EnvironmentalCost()
        a = Node(0, 0, 1, weather=make_state(), traffic={'ac': []})
        clear = Node(1, 0, 1, weather=make_state(clouds=0.0), traffic={'ac': []})
        cloudy = Node(1, 0, 1, weather=make_state(clouds=90.0), traffic={'ac': []})
        assert cost(a, cloudy) > cost(a, clear)

    def test_headwind_costs_more_than_tailwind(self):
        """Flying north into a northerly wind costs more than flying south."""
        cost = EnvironmentalCost()
        northerly = make_state(wind=Wind(speed_mps=10.0, direction_deg=0.0))
        south = Node(0, 0, 1, weather=northerly, traffic={'ac': []})
        north = Node(1, 0, 1, weather=northerly, traffic={'ac': []})

        into_wind = cost(south, north)
        with_wind = cost(north, south)
        assert into_wind > with_wind
        assert with_wind == pytest.approx(cost.base)

    def test_vertical_edge_ignores_wind(self):
        cost = EnvironmentalCost()
        windy = make_state(wind=Wind(speed_mps=30.0, direction_deg=0.0))
        low = Node(0, 0, 0, weather=windy, traffic={'ac': []})
        high = Node(0, 0, 1, weather=windy, traffic={'ac': []})
        assert cost(low, high) == pytest.approx(cost.base)

    def test_traffic_increases_cost(self):
        cost = EnvironmentalCost()
        a = Node(0, 0, 1, weather=make_state(), traffic={'ac': []})
        busy = Node(1, 0, 1, weather=make_state(), traffic={'ac': [{}] * 5})
        quiet = Node(1, 0, 1, weather=make_state(), traffic={'ac': []})
        assert cost(a, busy) == pytest.approx(cost(a, quiet) + 0.5)

    def test_missing_data_penalized(self):
        """Unknown conditions are charged the fixed penalties."""
        cost = EnvironmentalCost(missing_weather_penalty=0.5, missing_traffic_penalty=0.25)
        a = Node(0, 0, 1)
        b = Node(1, 0, 1)
        assert cost(a, b) == pytest.approx(1.75)

    def test_deterministic(self):
        cost = EnvironmentalCost()
        a = Node(0, 0, 1, weather=make_state(clouds=30.0), traffic={'ac': [{}]})
        b = Node(0, 1, 1, weather=make_state(clouds=70.0, visibility=3000.0), traffic=None)
        assert cost(a, b) == cost(a, b)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            EnvironmentalCost(cloud_weight=-1.0)


class TestCostCalculator:
    """Tests for the cost calculator wrapper."""

    def test_selects_cost_type(self):
        assert isinstance(CostCalculator('random').cost_fn, RandomCost)
        assert isinstance(CostCalculator('environmental').cost_fn, EnvironmentalCost)
        assert isinstance(CostCalculator('constant', value=2.0).cost_fn, ConstantCost)

    def test_forwards_calls(self):
        calc = CostCalculator('constant', value=2.5)
        assert calc(Node(0, 0, 0), Node(1, 0, 0)) == 2.5
        assert calc.calculate_cost(Node(0, 0, 0), Node(1, 0, 0)) == 2.5

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            CostCalculator('fuel')
