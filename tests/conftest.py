"""Shared fixtures: four Mexican cities and the graph built from them."""

import pytest

from proximity_graph.domain.models import Location
from proximity_graph.graph import ProximityGraph


@pytest.fixture
def cdmx():
    return Location("cdmx", "Mexico City", 19.4326, -99.1332, "CDMX")


@pytest.fixture
def monterrey():
    return Location("mty", "Monterrey", 25.6866, -100.3161, "Nuevo León")


@pytest.fixture
def guadalajara():
    return Location("gdl", "Guadalajara", 20.6597, -103.3496, "Jalisco")


@pytest.fixture
def puebla():
    return Location("pue", "Puebla", 19.0414, -98.2063, "Puebla")


@pytest.fixture
def graph(cdmx, monterrey, guadalajara, puebla):
    """The four cities, no connections."""
    graph = ProximityGraph()
    for city in (cdmx, monterrey, guadalajara, puebla):
        graph.insert_location(city)
    return graph


@pytest.fixture
def connected_graph(graph):
    """cdmx-pue 130, cdmx-gdl 540, pue-mty 850, gdl-mty 740."""
    graph.connect("cdmx", "pue", 130)
    graph.connect("cdmx", "gdl", 540)
    graph.connect("pue", "mty", 850)
    graph.connect("gdl", "mty", 740)
    return graph


@pytest.fixture
def isolated():
    return Location("qro", "Querétaro", 20.5888, -100.3899, "Querétaro")
