import pytest

from conftest import make_graph, make_stop
from transit_rank.adapters.traversal import BasicTraverser
from transit_rank.domain.errors import ConfigurationError
from transit_rank.graph.page_rank import (
    format_rank,
    format_rank_report,
    page_rank,
    rank_stops,
)
from transit_rank.graph.transit_graph import Graph


class MemoryWriter:
    def __init__(self):
        self.contents = []

    def write(self, content):
        self.contents.append(content)
        return "memory"


def test_symmetric_cycle_ranks_are_equal():
    cycle = make_graph(4, [(0, 1, 1.0), (1, 2, 1.0), (2, 3, 1.0), (3, 0, 1.0)])

    ranks = page_rank(cycle)

    assert ranks == [1.0, 1.0, 1.0, 1.0]


def test_ranking_is_deterministic(diamond):
    assert page_rank(diamond) == page_rank(diamond)


def test_sweeps_are_synchronous():
    path = make_graph(3, [(0, 1, 1.0), (1, 2, 1.0)])

    # An in-place update would give [0.5, 1.5, 0.75]
    assert page_rank(path, iterations=1) == [0.5, 2.0, 0.5]


def test_damping_adds_base_rank():
    path = make_graph(3, [(0, 1, 1.0), (1, 2, 1.0)])

    ranks = page_rank(path, iterations=1, damping=0.5)

    assert ranks == pytest.approx([1 / 6 + 0.25, 1 / 6 + 1.0, 1 / 6 + 0.25])


def test_zero_iterations_keep_initial_rank(diamond):
    assert page_rank(diamond, iterations=0, initial_rank=0.2) == [0.2] * 5


def test_isolated_nodes_lose_their_rank():
    graph = make_graph(3, [(0, 1, 1.0)])

    assert page_rank(graph) == [1.0, 1.0, 0.0]


def test_total_rank_is_preserved_without_restart(diamond):
    assert sum(page_rank(diamond)) == pytest.approx(5.0)


def test_traverser_receives_ranks(diamond):
    traverser = BasicTraverser()

    ranks = page_rank(diamond, traverser)

    assert traverser.ranks == ranks
    assert traverser.ranks is not ranks
    assert traverser.summaries == [{"ranks": ranks}]
    assert [kind for kind, _ in traverser.events] == ["record_ranks", "summary"]


def test_writer_receives_report():
    graph = make_graph(2, [(0, 1, 1.0)])
    writer = MemoryWriter()

    page_rank(graph, writer=writer)

    assert writer.contents == ["sep=;\n0;S0;Stop 0;1;1\n1;S1;Stop 1;1;1\n"]


def test_empty_graph_has_no_ranks():
    assert page_rank(Graph([])) == []


@pytest.mark.parametrize("kwargs", [{"damping": 1.5}, {"damping": -0.1}, {"iterations": -1}])
def test_invalid_parameters(diamond, kwargs):
    with pytest.raises(ConfigurationError):
        page_rank(diamond, **kwargs)


@pytest.mark.parametrize(
    "rank, expected",
    [
        (1.0, "1"),
        (0.0, "0"),
        (0.25, "0.25"),
        (120.0, "120"),
        (1e-07, "0.0000001"),
        (1.859375, "1.859375"),
    ],
)
def test_format_rank(rank, expected):
    assert format_rank(rank) == expected


def test_report_format():
    stops = [make_stop(0, routes=("A", "C")), make_stop(1, routes=())]

    report = format_rank_report(stops, [0.5, 1.5])

    assert report.splitlines() == [
        "sep=;",
        "0;S0;Stop 0;A,C;0.5",
        "1;S1;Stop 1;;1.5",
    ]
    assert report.endswith("\n")


def test_rank_stops_orders_by_descending_rank():
    stops = [make_stop(i) for i in range(4)]

    ranked = rank_stops(stops, [0.5, 1.2345678, 0.5000001, 2.0])

    assert [r.node for r in ranked] == [3, 1, 0, 2]
    assert [r.position for r in ranked] == [1, 2, 3, 4]
    assert ranked[1].rank == 1.23457
    assert ranked[1].stop.rank == 1.23457
    assert ranked[1].stop == stops[1]
