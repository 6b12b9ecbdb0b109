import random
from pathlib import Path

import pytest

from transit_rank.config import reset_config
from transit_rank.domain.models import Edge, EdgeType, GeoLocation, Stop
from transit_rank.graph.transit_graph import Graph

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def make_stop(i, routes=("1",)):
    return Stop(
        stop_id=f"S{i}",
        name=f"Stop {i}",
        location=GeoLocation(latitude=40.0 + i / 100, longitude=-73.0 - i / 100),
        routes=tuple(routes),
    )


def make_graph(num_nodes, edges):
    """Build a graph from ``(u, v, weight)`` or ``(u, v, weight, type)`` tuples."""
    built = []
    for spec in edges:
        u, v, weight = spec[:3]
        edge_type = spec[3] if len(spec) > 3 else EdgeType.ROUTE
        built.append(Edge(origin=u, destination=v, type=edge_type, weight=weight))
    return Graph([make_stop(i) for i in range(num_nodes)], built)


def random_graph(rng, num_nodes, density=0.5, connected=False, max_weight=9):
    """Random route graph; a random spanning tree is added if ``connected``."""
    pairs = {}
    if connected:
        for v in range(1, num_nodes):
            pairs[(rng.randrange(v), v)] = rng.randint(0, max_weight)
    for u in range(num_nodes):
        for v in range(u + 1, num_nodes):
            if (u, v) not in pairs and rng.random() < density:
                pairs[(u, v)] = rng.randint(0, max_weight)
    return make_graph(num_nodes, [(u, v, w) for (u, v), w in pairs.items()])


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def diamond():
    #   0 - 1
    #   |   |
    #   2 - 3 - 4
    return make_graph(5, [(0, 1, 1), (0, 2, 4), (1, 3, 2), (2, 3, 1), (3, 4, 7)])


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in ("TRANSIT_RANK_DAMPING", "TRANSIT_RANK_ITERATIONS", "TRANSIT_GRAPH_DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
