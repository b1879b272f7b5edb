"""
Unit tests for grid nodes and edges.

Run with: pytest test/test_node.py
"""

import math

import pytest
from skylattice.models.environment import EnvironmentalState, Wind
from skylattice.models.node import Node, Edge


STATE = EnvironmentalState(281.65, 898.7, 55.0, Wind(7.0, 270.0), 30.0, 10000.0)


class TestEdge:
    """Tests for edge construction."""

    def test_valid_weight(self):
        edge = Edge(target=Node(0, 0, 0), weight=0.25)
        assert edge.weight == 0.25

    @pytest.mark.parametrize("weight", [-0.1, math.inf, math.nan])
    def test_invalid_weight(self, weight):
        with pytest.raises(ValueError):
            Edge(target=Node(0, 0, 0), weight=weight)


class TestNode:
    """Tests for node state and helpers."""

    def test_initial_state(self):
        node = Node(1.0, 2.0, 3.0)

        assert node.weather is None
        assert node.traffic is None
        assert node.edges == []
        assert node.position == (1.0, 2.0, 3.0)

    def test_identity_semantics(self):
        """Two nodes at the same coordinates are still distinct."""
        a, b = Node(0, 0, 0), Node(0, 0, 0)
        assert a != b
        assert len({a, b}) == 2

    def test_add_edge_preserves_order(self):
        node, first, second = Node(0, 0, 0), Node(1, 0, 0), Node(0, 1, 0)
        node.add_edge(first, 0.1)
        node.add_edge(second, 0.2)

        assert [e.target for e in node.edges] == [first, second]
        assert node.edge_to(second).weight == 0.2
        assert node.edge_to(Node(5, 5, 5)) is None

    def test_weather_set_once(self):
        node = Node(0, 0, 1)
        node.update_weather(STATE)

        assert node.weather is STATE
        with pytest.raises(RuntimeError):
            node.update_weather(STATE)

    def test_traffic_set_once(self):
        node = Node(0, 0, 1)
        node.update_traffic({'ac': []})
        with pytest.raises(RuntimeError):
            node.update_traffic({'ac': []})

    @pytest.mark.parametrize("traffic, expected", [
        (None, 0),
        ({}, 0),
        ({'ac': [{}, {}, {}]}, 3),
        ({'aircraft': [{}]}, 1),
        ({'total': 4}, 4),
        ({'msg': 'No error'}, 0),
    ])
    def test_traffic_count(self, traffic, expected):
        assert Node(0, 0, 0, traffic=traffic).traffic_count == expected

    def test_describe_with_data(self):
        node = Node(10.0, 20.0, 1.0, weather=STATE, traffic={'ac': [{}]})
        text = node.describe()

        assert text.startswith("Node (Lat: 10.0, Lon: 20.0, Alt: 1.0)")
        assert "8.5 C" in text
        assert "1 aircraft nearby" in text

    def test_describe_without_data(self):
        text = Node(0, 0, 0).describe()

        assert "Weather: unavailable" in text
        assert "Air Traffic: unavailable" in text
