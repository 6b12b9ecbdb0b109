import itertools
import random

import pytest

from conftest import make_graph
from transit_rank.domain.errors import GraphError, MergeInvariantError
from transit_rank.domain.models import MERGED_WEIGHT, EdgeType
from transit_rank.graph import merge as merge_module
from transit_rank.graph.merge import (
    find_transfer_clusters,
    merge_edges,
    merge_pair,
    merge_transfer_nodes,
)

T = EdgeType.TRANSFER


def test_nothing_to_merge_returns_none(diamond):
    assert merge_transfer_nodes(diamond) is None


def test_three_stop_scenario():
    graph = make_graph(3, [(0, 1, 5.0), (1, 2, 1.0, T)])

    merged = merge_transfer_nodes(graph)

    assert merged.num_nodes == 2
    assert merged.get_transfer_edges() == []
    assert merged.edge_exists(1, 0)
    assert merged.get_type(1, 0) is EdgeType.ROUTE
    assert merged.get_weight(1, 0) == -1
    assert merged.stops[0] == graph.stops[0]
    assert merged.stops[1] == graph.stops[1].merge_with(graph.stops[2])


def test_single_transfer_moves_route_edges_to_merged_node():
    #  2 - 0 = 3 - 4      (= is a transfer)
    #      |   |
    #      1   5
    graph = make_graph(
        6,
        [(0, 2, 2.0), (0, 1, 3.0), (0, 3, 0.0, T), (3, 4, 4.0), (3, 5, 1.0), (4, 5, 6.0)],
    )

    merged = merge_transfer_nodes(graph)

    # survivors 1, 2, 4, 5 become 0, 1, 2, 3; the merged node is 4
    assert merged.num_nodes == 5
    assert merged.get_transfer_edges() == []
    assert merged.neighbors(4) == (0, 1, 2, 3)
    for node in range(4):
        assert merged.create_edge(4, node).type is EdgeType.ROUTE
        assert merged.get_weight(4, node) == MERGED_WEIGHT
    assert merged.get_weight(2, 3) == 6.0
    assert merged.stops[:4] == tuple(graph.stops[i] for i in (1, 2, 4, 5))


def test_input_graph_is_left_untouched():
    graph = make_graph(3, [(0, 1, 5.0), (1, 2, 1.0, T)])
    edges_before = list(graph.edges())
    stops_before = graph.stops

    merge_transfer_nodes(graph)

    assert list(graph.edges()) == edges_before
    assert graph.stops == stops_before


def test_cluster_of_three_collapses_into_one_node():
    graph = make_graph(
        5,
        [(0, 1, 0.0, T), (1, 2, 0.0, T), (0, 3, 2.0), (2, 4, 3.0)],
    )

    merged = merge_transfer_nodes(graph)

    assert merged.num_nodes == 3
    assert merged.neighbors(2) == (0, 1)
    assert merged.stops[2].stop_id == "S2+S0+S1"


def test_each_cluster_is_collapsed():
    graph = make_graph(
        6,
        [(0, 1, 0.0, T), (4, 5, 0.0, T), (1, 2, 1.0), (2, 3, 1.0), (3, 4, 1.0)],
    )

    merged = merge_transfer_nodes(graph)

    assert merged.num_nodes == 4
    assert merged.get_transfer_edges() == []
    assert {stop.stop_id for stop in merged.stops} == {"S2", "S3", "S0+S1", "S4+S5"}


def test_find_transfer_clusters():
    graph = make_graph(
        6,
        [(0, 4, 0.0, T), (4, 2, 0.0, T), (1, 3, 1.0), (3, 5, 0.0, T)],
    )

    assert find_transfer_clusters(graph) == [[0, 4, 2], [1], [3, 5]]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (None, None, None),
        ("route", None, EdgeType.ROUTE),
        (None, "route", EdgeType.ROUTE),
        ("route", "route", EdgeType.ROUTE),
        ("transfer", None, EdgeType.TRANSFER),
        ("route", "transfer", EdgeType.TRANSFER),
    ],
)
def test_merge_edges(a, b, expected):
    graph = make_graph(
        4,
        [(0, 1, 1.0), (0, 2, 1.0, T)],
    )
    edges = {None: None, "route": graph.create_edge(0, 1), "transfer": graph.create_edge(0, 2)}

    assert merge_edges(edges[a], edges[b]) is expected


@pytest.mark.parametrize("seed", range(6))
def test_merge_pair_in_every_position(seed):
    rng = random.Random(seed)
    n = 6
    specs = []
    for u, v in itertools.combinations(range(n), 2):
        if rng.random() < 0.5:
            specs.append((u, v, float(rng.randint(1, 9)), rng.choice([EdgeType.ROUTE, T])))
    graph = make_graph(n, specs)

    for a, b in itertools.permutations(range(n), 2):
        merged = merge_pair(graph, a, b)
        survivors = [node for node in range(n) if node not in (a, b)]
        union = n - 2

        assert merged.num_nodes == n - 1
        assert merged.stops[union] == graph.stops[min(a, b)].merge_with(graph.stops[max(a, b)])

        for i, j in itertools.combinations(range(len(survivors)), 2):
            old_i, old_j = survivors[i], survivors[j]
            assert merged.edge_exists(i, j) == graph.edge_exists(old_i, old_j)
            if merged.edge_exists(i, j):
                assert merged.get_weight(i, j) == graph.get_weight(old_i, old_j)
                assert merged.get_type(i, j) is graph.get_type(old_i, old_j)

        for i, old in enumerate(survivors):
            relations = [graph.get_edge(a, old), graph.get_edge(b, old)]
            present = [edge for edge in relations if edge is not None]
            if not present:
                assert not merged.edge_exists(union, i)
                continue
            expected = T if any(edge.is_transfer for edge in present) else EdgeType.ROUTE
            assert merged.get_type(union, i) is expected
            assert merged.get_weight(union, i) == MERGED_WEIGHT

        internal = sum(1 for _ in graph.edges()) - sum(
            1 for e in graph.edges() if {e.origin, e.destination} & {a, b}
        )
        assert merged.num_edges == internal + len(merged.neighbors(union))


def test_merge_pair_rejects_same_node(diamond):
    with pytest.raises(GraphError):
        merge_pair(diamond, 2, 2)


def test_missing_cluster_is_a_defect(monkeypatch):
    graph = make_graph(2, [(0, 1, 0.0, T)])
    monkeypatch.setattr(
        merge_module,
        "find_transfer_clusters",
        lambda graph, transfer_edges=None: [[0], [1]],
    )

    with pytest.raises(MergeInvariantError) as excinfo:
        merge_transfer_nodes(graph)

    assert excinfo.value.transfer_edges == 1
