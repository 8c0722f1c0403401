import logging
import math

import pytest

from proximity_graph.domain.errors import (
    DuplicateError,
    NoConnectionError,
    NotFoundError,
    SelfLoopError,
    ValidationError,
)
from proximity_graph.domain.models import Location
from proximity_graph.graph import ProximityGraph


# ---------------------------------------------------------------------------
# insert_location
# ---------------------------------------------------------------------------


def test_insert_location(cdmx):
    graph = ProximityGraph()
    graph.insert_location(cdmx)

    assert graph.location_count() == 1
    assert graph.get_location("cdmx") is cdmx
    assert "cdmx" in graph
    assert len(graph) == 1


def test_insert_several_locations(graph):
    assert graph.location_count() == 4
    assert [location.id for location in graph.locations()] == ["cdmx", "mty", "gdl", "pue"]


def test_storage_is_not_a_constructor_argument(cdmx):
    with pytest.raises(TypeError):
        ProximityGraph(_locations={"cdmx": cdmx})
    with pytest.raises(TypeError):
        ProximityGraph(_adjacency={"cdmx": {}})


def test_graphs_do_not_share_storage(cdmx):
    first = ProximityGraph()
    first.insert_location(cdmx)

    assert ProximityGraph().location_count() == 0


def test_insert_non_location_raises():
    graph = ProximityGraph()
    with pytest.raises(TypeError):
        graph.insert_location({"id": "cdmx"})


def test_insert_duplicate_id_raises(graph):
    duplicate = Location("cdmx", "Another Mexico City", 0.0, 0.0)

    with pytest.raises(DuplicateError) as excinfo:
        graph.insert_location(duplicate)

    assert excinfo.value.location_id == "cdmx"
    assert graph.get_location("cdmx").name == "Mexico City"
    assert graph.location_count() == 4


def test_new_location_has_no_connections(graph):
    assert graph.neighbors("cdmx") == []
    assert graph.connection_count() == 0


# ---------------------------------------------------------------------------
# connect
# ---------------------------------------------------------------------------


def test_connect_is_bidirectional(graph):
    graph.connect("cdmx", "pue", 130)

    assert graph.has_connection("cdmx", "pue")
    assert graph.has_connection("pue", "cdmx")
    assert graph.distance_between("cdmx", "pue") == 130
    assert graph.distance_between("pue", "cdmx") == 130


def test_connect_computes_distance_when_omitted(graph, cdmx, monterrey):
    graph.connect("cdmx", "mty")

    assert graph.distance_between("cdmx", "mty") == cdmx.distance_to(monterrey)
    assert graph.distance_between("mty", "cdmx") == monterrey.distance_to(cdmx)


def test_connect_uses_provided_distance(graph):
    graph.connect("cdmx", "mty", 999.5)
    assert graph.distance_between("cdmx", "mty") == 999.5


@pytest.mark.parametrize("first, second", [("nope", "pue"), ("cdmx", "nope")])
def test_connect_unknown_location_raises(graph, first, second):
    with pytest.raises(NotFoundError) as excinfo:
        graph.connect(first, second, 10)

    assert excinfo.value.location_id == "nope"
    assert graph.connection_count() == 0


def test_connect_to_itself_raises(graph):
    with pytest.raises(SelfLoopError):
        graph.connect("cdmx", "cdmx", 10)


@pytest.mark.parametrize(
    "weight", [0, -10, -0.5, math.nan, math.inf, True, "130", 10**400, -(10**400)]
)
def test_connect_rejects_invalid_weight(graph, weight):
    with pytest.raises(ValidationError):
        graph.connect("cdmx", "pue", weight)

    assert not graph.has_connection("cdmx", "pue")
    assert not graph.has_connection("pue", "cdmx")


def test_connect_coincident_locations_without_weight_raises():
    graph = ProximityGraph()
    graph.insert_location(Location("a", "A", 20.0, -100.0))
    graph.insert_location(Location("b", "B", 20.0, -100.0))

    with pytest.raises(ValidationError):
        graph.connect("a", "b")

    assert graph.connection_count() == 0


def test_connect_overwrites_existing_edge(graph):
    graph.connect("cdmx", "pue", 130)
    graph.connect("pue", "cdmx", 150)

    assert graph.distance_between("cdmx", "pue") == 150
    assert graph.distance_between("pue", "cdmx") == 150
    assert graph.connection_count() == 1


def test_connect_logs_edge(graph, caplog):
    caplog.set_level(logging.DEBUG, logger="proximity_graph")

    graph.connect("cdmx", "pue", 130)

    assert "Locations connected" in caplog.messages


# ---------------------------------------------------------------------------
# neighbors / neighbors_within_radius
# ---------------------------------------------------------------------------


def test_neighbors_returns_connected_locations(connected_graph, puebla):
    neighbors = connected_graph.neighbors("cdmx")

    assert [n.location.id for n in neighbors] == ["pue", "gdl"]
    assert neighbors[0].location is connected_graph.get_location("pue")
    assert neighbors[0].location == puebla
    assert neighbors[0].distance == 130


def test_neighbor_unpacks_as_pair(connected_graph):
    location, distance = connected_graph.neighbors("cdmx")[0]

    assert location.id == "pue"
    assert distance == 130


def test_neighbors_sorted_by_distance(graph):
    graph.connect("cdmx", "gdl", 540)
    graph.connect("cdmx", "mty", 900)
    graph.connect("cdmx", "pue", 130)

    distances = [n.distance for n in graph.neighbors("cdmx")]

    assert distances == [130, 540, 900]
    assert distances == sorted(distances)


def test_neighbors_ties_keep_edge_insertion_order(graph):
    graph.connect("cdmx", "mty", 100)
    graph.connect("cdmx", "gdl", 50)
    graph.connect("cdmx", "pue", 100)

    assert [n.location.id for n in graph.neighbors("cdmx")] == ["gdl", "mty", "pue"]


@pytest.mark.parametrize("location_id", ["", None, 12, "nope"])
def test_neighbors_invalid_id_raises(graph, location_id):
    with pytest.raises(NotFoundError):
        graph.neighbors(location_id)


def test_neighbors_within_radius(connected_graph):
    nearby = connected_graph.neighbors_within_radius("cdmx", 200)

    assert [n.location.id for n in nearby] == ["pue"]
    assert nearby[0].distance == 130


def test_neighbors_within_radius_includes_boundary(connected_graph):
    nearby = connected_graph.neighbors_within_radius("cdmx", 540)
    assert [n.location.id for n in nearby] == ["pue", "gdl"]


def test_neighbors_within_radius_can_be_empty(connected_graph):
    assert connected_graph.neighbors_within_radius("cdmx", 50) == []


@pytest.mark.parametrize("radius", [0, -5, "200", None, True, math.nan, 10**400])
def test_neighbors_within_radius_invalid_radius_raises(connected_graph, radius):
    with pytest.raises(ValidationError):
        connected_graph.neighbors_within_radius("cdmx", radius)


def test_neighbors_within_radius_unknown_location_raises(connected_graph):
    with pytest.raises(NotFoundError):
        connected_graph.neighbors_within_radius("nope", 100)


# ---------------------------------------------------------------------------
# shortest_path
# ---------------------------------------------------------------------------


def test_shortest_path_direct_route(connected_graph):
    result = connected_graph.shortest_path("cdmx", "pue")

    assert result is not None
    assert result.location_ids == ("cdmx", "pue")
    assert result.distance == 130


def test_shortest_path_indirect_route(connected_graph):
    result = connected_graph.shortest_path("cdmx", "mty")

    assert result.location_ids == ("cdmx", "pue", "mty")
    assert result.distance == 980
    assert result.stops == 1
    assert result.origin.id == "cdmx"
    assert result.destination.id == "mty"


def test_shortest_path_prefers_cheaper_multi_hop(connected_graph):
    result = connected_graph.shortest_path("gdl", "pue")

    assert result.location_ids == ("gdl", "cdmx", "pue")
    assert result.distance == 670


def test_shortest_path_consecutive_locations_are_connected(connected_graph):
    result = connected_graph.shortest_path("gdl", "pue")

    for current, following in zip(result.path, result.path[1:]):
        assert connected_graph.has_connection(current.id, following.id)


def test_shortest_path_to_itself(connected_graph, cdmx):
    result = connected_graph.shortest_path("cdmx", "cdmx")

    assert result.path == (cdmx,)
    assert result.distance == 0
    assert result.stops == 0


def test_shortest_path_to_itself_when_isolated(graph, isolated):
    graph.insert_location(isolated)

    result = graph.shortest_path("qro", "qro")

    assert result.location_ids == ("qro",)
    assert result.distance == 0


def test_shortest_path_to_isolated_location_is_none(connected_graph, isolated):
    connected_graph.insert_location(isolated)

    assert connected_graph.shortest_path("cdmx", "qro") is None
    assert connected_graph.shortest_path("qro", "cdmx") is None


@pytest.mark.parametrize("first, second", [("nope", "cdmx"), ("cdmx", "nope")])
def test_shortest_path_unknown_location_raises(connected_graph, first, second):
    with pytest.raises(NotFoundError):
        connected_graph.shortest_path(first, second)


def test_shortest_path_distance_is_rounded():
    graph = ProximityGraph()
    for index, location_id in enumerate("abc"):
        graph.insert_location(Location(location_id, location_id.upper(), index, index))
    graph.connect("a", "b", 10.111)
    graph.connect("b", "c", 20.222)

    assert graph.shortest_path("a", "c").distance == 30.33


def test_shortest_path_tie_uses_insertion_order():
    graph = ProximityGraph()
    for location_id in ("a", "c", "b", "d"):
        graph.insert_location(Location(location_id, location_id.upper(), 0.0, 0.0))
    graph.connect("a", "b", 1)
    graph.connect("a", "c", 1)
    graph.connect("b", "d", 1)
    graph.connect("c", "d", 1)

    assert graph.shortest_path("a", "d").location_ids == ("a", "c", "d")


# ---------------------------------------------------------------------------
# utility methods
# ---------------------------------------------------------------------------


def test_get_location_unknown_raises(graph):
    with pytest.raises(NotFoundError) as excinfo:
        graph.get_location("nope")
    assert excinfo.value.location_id == "nope"


def test_has_connection_false_for_unconnected(connected_graph):
    assert not connected_graph.has_connection("cdmx", "mty")
    assert not connected_graph.has_connection("mty", "cdmx")


@pytest.mark.parametrize("first, second", [("nope", "cdmx"), ("cdmx", "nope"), (None, [])])
def test_has_connection_never_raises(connected_graph, first, second):
    assert connected_graph.has_connection(first, second) is False


def test_distance_between_without_edge_raises(connected_graph):
    with pytest.raises(NoConnectionError) as excinfo:
        connected_graph.distance_between("cdmx", "mty")

    error = excinfo.value
    assert isinstance(error, NotFoundError)
    assert (error.from_id, error.to_id) == ("cdmx", "mty")
    assert "cdmx" in str(error) and "mty" in str(error)


def test_connection_count(connected_graph):
    assert connected_graph.location_count() == 4
    assert connected_graph.connection_count() == 4


def test_clear_resets_graph(connected_graph):
    connected_graph.clear()

    assert connected_graph.location_count() == 0
    assert connected_graph.connection_count() == 0
    assert connected_graph.locations() == []
    assert "cdmx" not in connected_graph


def test_clear_allows_reinsertion(connected_graph, cdmx):
    connected_graph.clear()
    connected_graph.insert_location(cdmx)

    assert connected_graph.neighbors("cdmx") == []


def test_symmetry_holds_for_every_edge(connected_graph):
    for location in connected_graph.locations():
        for neighbor in connected_graph.neighbors(location.id):
            other = neighbor.location.id
            assert connected_graph.has_connection(other, location.id)
            assert connected_graph.distance_between(other, location.id) == neighbor.distance


def test_large_and_decimal_distances(graph):
    graph.connect("cdmx", "mty", 20000)
    graph.connect("cdmx", "pue", 130.75)

    assert graph.distance_between("mty", "cdmx") == 20000
    assert graph.distance_between("pue", "cdmx") == 130.75
