import random

import pytest

from conftest import make_graph, random_graph
from transit_rank.adapters.traversal import BasicTraverser
from transit_rank.domain.errors import NodeNotFoundError
from transit_rank.domain.models import Edge, EdgeType
from transit_rank.graph.dfs import dfs


def test_dfs_event_sequence(diamond):
    traverser = BasicTraverser()

    order = dfs(diamond, 0, traverser)

    assert order == [0, 1, 3, 2, 4]
    assert traverser.visited_nodes == [0, 1, 3, 2, 4]
    kinds = [
        (kind, (payload.origin, payload.destination) if isinstance(payload, Edge) else payload)
        for kind, payload in traverser.events
    ]
    assert kinds == [
        ("visit_node", 0),
        ("visit", (0, 1)),
        ("visit_node", 1),
        ("visit", (1, 3)),
        ("visit_node", 3),
        ("visit", (3, 2)),
        ("visit_node", 2),
        ("leave", (2, 3)),
        ("visit", (3, 4)),
        ("visit_node", 4),
        ("leave", (4, 3)),
        ("leave", (3, 1)),
        ("leave", (1, 0)),
        ("summary", {"stations_visited": 5}),
    ]


def test_dfs_reports_edges_from_node_zero():
    graph = make_graph(2, [(0, 1, 3.0)])
    traverser = BasicTraverser()

    dfs(graph, 0, traverser)

    assert traverser.visited_edges == [Edge(0, 1, EdgeType.ROUTE, 3.0)]
    assert traverser.left_edges == [Edge(1, 0, EdgeType.ROUTE, 3.0)]


@pytest.mark.parametrize("seed", range(10))
def test_dfs_tree_properties_on_connected_graphs(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 12)
    graph = random_graph(rng, n, density=0.3, connected=True)
    start = rng.randrange(n)
    traverser = BasicTraverser()

    dfs(graph, start, traverser)

    assert sorted(traverser.visited_nodes) == list(range(n))
    assert len(traverser.visited_edges) == n - 1
    assert len(traverser.left_edges) == n - 1

    positions = {}
    for position, (kind, payload) in enumerate(traverser.events):
        if kind in ("visit", "leave"):
            positions[(kind, frozenset((payload.origin, payload.destination)))] = position
    for edge in traverser.visited_edges:
        pair = frozenset((edge.origin, edge.destination))
        assert positions[("leave", pair)] > positions[("visit", pair)]


def test_dfs_stays_in_component():
    graph = make_graph(5, [(0, 1, 1.0), (3, 4, 1.0)])
    traverser = BasicTraverser()

    dfs(graph, 3, traverser)

    assert traverser.visited_nodes == [3, 4]
    assert traverser.last_summary == {"stations_visited": 2}


def test_dfs_handles_long_chains_without_recursion():
    n = 5000
    graph = make_graph(n, [(i, i + 1, 1.0) for i in range(n - 1)])

    order = dfs(graph, 0)

    assert order == list(range(n))


def test_dfs_without_traverser_returns_order(diamond):
    assert dfs(diamond, 4) == [4, 3, 1, 0, 2]


def test_dfs_rejects_unknown_start(diamond):
    with pytest.raises(NodeNotFoundError):
        dfs(diamond, 5)
