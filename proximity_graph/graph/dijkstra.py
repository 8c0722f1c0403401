"""Shortest-path computation using Dijkstra's algorithm.

The search runs over an adjacency mapping (location id -> neighbor id ->
weight). Heap entries carry the rank of each location in the mapping's
iteration order, so when several unvisited locations share the smallest
tentative distance the earliest-inserted one is expanded first. This is
the same choice a linear scan over unvisited locations in insertion
order would make.
"""

import heapq
from typing import Dict, List, Tuple

from ..ports.graph import Adjacency


def dijkstra(adjacency: Adjacency, start: str, end: str) -> Tuple[List[str], float]:
    """Compute the shortest path between two locations using Dijkstra.

    Parameters
    ----------
    adjacency:
        Undirected graph as stored by ``ProximityGraph``.
    start:
        Identifier of the origin.
    end:
        Identifier of the destination.

    Returns
    -------
    list[str], float
        The sequence of identifiers from ``start`` to ``end`` (inclusive)
        and the unrounded total weight. If no path exists, returns
        ``([], float("inf"))``.
    """
    if start not in adjacency or end not in adjacency:
        return [], float("inf")
    if start == end:
        return [start], 0.0

    rank: Dict[str, int] = {node: index for index, node in enumerate(adjacency)}
    distances: Dict[str, float] = {node: float("inf") for node in adjacency}
    previous: Dict[str, str] = {}
    distances[start] = 0.0

    heap: List[Tuple[float, int, str]] = [(0.0, rank[start], start)]
    visited = set()

    while heap:
        current_distance, _, u = heapq.heappop(heap)

        if u in visited:
            continue

        if u == end:
            break

        visited.add(u)

        for v, weight in adjacency[u].items():
            if v in visited:
                continue
            new_distance = current_distance + weight
            if new_distance < distances[v]:
                distances[v] = new_distance
                previous[v] = u
                heapq.heappush(heap, (new_distance, rank[v], v))

    if distances[end] == float("inf"):
        return [], float("inf")

    path: List[str] = [end]
    while path[-1] != start:
        path.append(previous[path[-1]])

    path.reverse()
    return path, distances[end]
