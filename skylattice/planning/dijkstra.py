"""
Dijkstra's algorithm implementation

@Description: This module implements Dijkstra's shortest path algorithm over the
airspace grid. Distances and predecessors are kept in maps scoped to a single
search, so the same grid can be searched any number of times without
resetting node state. A planner instance records the last search in
visited_nodes, so concurrent searches need one planner each.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models.node import Node
from .graph import AirspaceGrid

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Outcome of a single shortest-path search.

    Attributes:
        path: Nodes from source to destination inclusive; empty if unreachable
        cost: Total edge weight along the path; inf if unreachable
        nodes_visited: Number of nodes finalized before the search stopped
    """
    path: List[Node] = field(default_factory=list)
    cost: float = float('inf')
    nodes_visited: int = 0

    @property
    def found(self) -> bool:
        return bool(self.path)


class DijkstraPlanner:
    """
    Single-source shortest path over an AirspaceGrid.

    Uses a binary heap keyed on tentative distance. Stale heap entries are
    skipped when popped, and the search stops as soon as the destination is
    finalized.

    Attributes:
        grid: Wired airspace grid
        visited_nodes: Number of nodes finalized in the last search
    """

    def __init__(self, grid: AirspaceGrid):
        """
        Initialize Dijkstra planner.

        Args:
            grid: Airspace grid with edges wired
        """
        self.grid = grid
        self.visited_nodes = 0

    def find_path(self, source: Node, destination: Node) -> SearchResult:
        """
        Find the least-cost path from source to destination.

        Args:
            source: Start node, must belong to the grid
            destination: Goal node, must belong to the grid

        Returns:
            SearchResult; ``found`` is False when destination is unreachable

        Raises:
            ValueError: If either node is not part of the grid
        """
        if source not in self.grid:
            raise ValueError(f"Source node {source.index} does not belong to the grid")
        if destination not in self.grid:
            raise ValueError(f"Destination node {destination.index} does not belong to the grid")

        # Search-scoped state; absent from distance means +inf
        distance: Dict[Node, float] = {source: 0.0}
        predecessor: Dict[Node, Optional[Node]] = {source: None}
        finalized = set()

        # Priority queue: (distance, insertion order, node)
        counter = itertools.count()
        pq = [(0.0, next(counter), source)]

        self.visited_nodes = 0

        while pq:
            current_distance, _, current = heapq.heappop(pq)

            # Skip stale entries
            if current in finalized or current_distance > distance[current]:
                continue

            finalized.add(current)
            self.visited_nodes += 1

            # Goal reached; valid because weights are non-negative
            if current is destination:
                path = self._reconstruct_path(predecessor, destination)
                logger.debug("Path found: %d nodes, cost %.6f, %d nodes visited",
                             len(path), current_distance, self.visited_nodes)
                return SearchResult(path=path, cost=current_distance,
                                    nodes_visited=self.visited_nodes)

            for edge in current.edges:
                neighbor = edge.target
                if neighbor in finalized:
                    continue

                candidate = current_distance + edge.weight
                if candidate < distance.get(neighbor, float('inf')):
                    distance[neighbor] = candidate
                    predecessor[neighbor] = current
                    heapq.heappush(pq, (candidate, next(counter), neighbor))

        logger.info("Destination %s unreachable from %s", destination.index, source.index)
        return SearchResult(path=[], cost=float('inf'), nodes_visited=self.visited_nodes)

    def _reconstruct_path(self, predecessor: Dict[Node, Optional[Node]],
                          destination: Node) -> List[Node]:
        """
        Walk predecessor links back from destination, then reverse.

        Args:
            predecessor: Map from node to the node that reached it
            destination: Goal node

        Returns:
            List of nodes from source to destination
        """
        path = []
        current: Optional[Node] = destination

        while current is not None:
            path.append(current)
            current = predecessor[current]

        path.reverse()
        return path

    def get_performance_metrics(self) -> dict:
        """
        Get performance metrics from the last search.

        Returns:
            Dictionary with search statistics
        """
        total_nodes = len(self.grid)
        return {
            'algorithm': 'Dijkstra',
            'nodes_visited': self.visited_nodes,
            'total_nodes': total_nodes,
            'exploration_ratio': self.visited_nodes / total_nodes if total_nodes else 0
        }


def shortest_path(grid: AirspaceGrid, source: Node,
                  destination: Node) -> Optional[List[Node]]:
    """
    Convenience wrapper around DijkstraPlanner.

    Returns:
        Nodes from source to destination inclusive, [source] when source is
        destination, or None when destination is unreachable
    """
    result = DijkstraPlanner(grid).find_path(source, destination)
    return result.path if result.found else None


def path_cost(path: List[Node]) -> float:
    """
    Sum of edge weights along a path.

    Raises:
        ValueError: If two consecutive nodes are not connected by an edge
    """
    total = 0.0
    for src, dst in zip(path, path[1:]):
        edge = src.edge_to(dst)
        if edge is None:
            raise ValueError(f"No edge from {src.index} to {dst.index}")
        total += edge.weight
    return total
