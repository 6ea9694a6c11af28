"""Static graph of predefined cities and the curated distances between them."""

from __future__ import annotations

from typing import Iterable, Iterator

import networkx as nx

from ..models.city import City

# Used for any pair of known cities missing from the curated distance table,
# so a journey can be created between any two predefined cities.
FALLBACK_DISTANCE_MILES = 250.0


class UnknownCityError(KeyError):
    """Raised when a city id is not part of the graph."""


class CityGraph:
    """Sparse undirected graph of cities weighted by distance in miles.

    Distances are direct edge lookups, never path sums: the curated table is
    intentionally incomplete and gaps resolve to ``FALLBACK_DISTANCE_MILES``.
    """

    def __init__(self, graph: nx.Graph) -> None:
        self._graph = graph

    @classmethod
    def from_records(
        cls,
        cities: Iterable[City],
        distances: Iterable[tuple[str, str, float]],
    ) -> "CityGraph":
        graph = nx.Graph()
        for city in cities:
            if city.id in graph:
                raise ValueError(f"Duplicate city id: {city.id!r}")
            graph.add_node(city.id, city=city)

        for start, dest, miles in distances:
            for city_id in (start, dest):
                if city_id not in graph:
                    raise ValueError(f"Distance references unknown city: {city_id!r}")
            if start == dest:
                raise ValueError(f"Distance from {start!r} to itself is not allowed")
            if miles <= 0:
                raise ValueError(f"Distance {start!r} - {dest!r} must be positive")
            graph.add_edge(start, dest, miles=float(miles))
        return cls(graph)

    def __contains__(self, city_id: object) -> bool:
        return city_id in self._graph

    def __iter__(self) -> Iterator[City]:
        return iter(self.cities())

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def get(self, city_id: str) -> City:
        if city_id not in self._graph:
            raise UnknownCityError(city_id)
        return self._graph.nodes[city_id]["city"]

    def cities(self) -> list[City]:
        """Return every city ordered by name."""

        return sorted(
            (data["city"] for _, data in self._graph.nodes(data=True)),
            key=lambda city: (city.name, city.state),
        )

    def has_curated_distance(self, a: str, b: str) -> bool:
        return self._graph.has_edge(a, b)

    def distance(self, a: str, b: str) -> float:
        """Return the distance in miles between two known cities."""

        self.get(a)
        self.get(b)
        if a == b:
            return 0.0
        edge = self._graph.get_edge_data(a, b)
        if edge is None:
            return FALLBACK_DISTANCE_MILES
        return edge["miles"]
