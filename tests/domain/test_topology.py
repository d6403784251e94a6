# tests/domain/test_topology.py
import pytest

from gridroute.domain.graph import list_nodes
from gridroute.domain.mechanics.mechanics_topology import GridTopologyBuilder, build_graph
from gridroute.sim.rng import RNGRegistry

N, W = 80, 9


@pytest.fixture
def axial():
    return build_graph(N, W, 60.0, 0.0)


@pytest.fixture
def full_diagonals():
    return build_graph(N, W, 60.0, 1.0, RNGRegistry(1).stream("topology"))


def _directional(graph, delta):
    return sum(1 for u, v in graph.edges() if v - u == delta)


def test_ids_are_unique_and_dense(axial):
    nodes = list_nodes(axial)
    assert len(nodes) == N
    assert [n.id for n in nodes] == list(range(N))


def test_reference_coordinates(axial):
    assert (axial.nodes[0].x, axial.nodes[0].y) == (100.0, 100.0)
    assert (axial.nodes[1].x, axial.nodes[1].y) == (160.0, 100.0)
    assert (axial.nodes[9].x, axial.nodes[9].y) == (100.0, 160.0)
    # last node: row 8, column 7
    assert (axial.nodes[79].x, axial.nodes[79].y) == (520.0, 580.0)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
def test_neighbor_ids_always_in_range(seed):
    g = build_graph(N, W, 60.0, 0.3, RNGRegistry(seed).stream("topology"))
    for node in g.nodes:
        assert all(0 <= nb < N for nb in node.neighbors)
        assert node.id not in node.neighbors


def test_axial_emission_order(axial):
    assert axial.nodes[0].neighbors == [1, 9]
    assert axial.nodes[40].neighbors == [41, 49, 39, 31]
    assert axial.nodes[8].neighbors == [17, 7]  # row end: no right, no up
    assert axial.nodes[71].neighbors == [70, 62]  # row end, nothing below
    assert axial.nodes[79].neighbors == [78, 70]  # last node of the short row


def test_axial_edge_counts(axial):
    # 8 full rows x 8 right edges + 7 in the short last row
    assert _directional(axial, +1) == 71
    assert _directional(axial, -1) == 71
    assert _directional(axial, +W) == 71
    assert _directional(axial, -W) == 71
    assert axial.edge_count == 284


def test_row_end_nodes_have_no_right_edge(axial):
    row_ends = [i for i in range(N) if i % W == W - 1]
    assert row_ends == [8, 17, 26, 35, 44, 53, 62, 71]
    for i in row_ends:
        assert i + 1 not in axial.nodes[i].neighbors


def test_axial_adjacency_is_symmetric(axial):
    for u, v in axial.edges():
        assert u in axial.nodes[v].neighbors


def test_diagonals_follow_axial_edges(full_diagonals):
    assert full_diagonals.nodes[10].neighbors == [11, 19, 9, 1, 0, 2]
    assert full_diagonals.nodes[0].neighbors == [1, 9]  # top row draws nothing


def test_diagonal_counts_with_probability_one(full_diagonals):
    assert _directional(full_diagonals, -W - 1) == 63  # rows 1..8 minus column 0
    assert _directional(full_diagonals, -W + 1) == 64  # rows 1..8 minus column 8
    assert full_diagonals.edge_count == 284 + 127


def test_diagonals_are_one_way(full_diagonals):
    # only the lower endpoint ever emits a diagonal, so none is mirrored
    for u, v in full_diagonals.edges():
        if abs(v - u) in (W - 1, W + 1):
            assert u not in full_diagonals.nodes[v].neighbors


def test_seeded_topology_is_reproducible():
    a = build_graph(N, W, 60.0, 0.3, RNGRegistry(99).stream("topology"))
    b = build_graph(N, W, 60.0, 0.3, RNGRegistry(99).stream("topology"))
    assert [n.neighbors for n in a.nodes] == [n.neighbors for n in b.nodes]


def test_seed_changes_diagonals_not_axial_edges():
    a = build_graph(N, W, 60.0, 0.3, RNGRegistry(1).stream("topology"))
    b = build_graph(N, W, 60.0, 0.3, RNGRegistry(2).stream("topology"))
    assert [n.neighbors for n in a.nodes] != [n.neighbors for n in b.nodes]
    for na, nb in zip(a.nodes, b.nodes):
        assert [x for x in na.neighbors if abs(x - na.id) in (1, W)] == [
            x for x in nb.neighbors if abs(x - nb.id) in (1, W)
        ]


def test_custom_origin_and_spacing():
    g = build_graph(6, 3, 10.0, 0.0, origin=(0.0, 0.0))
    assert [(n.x, n.y) for n in g.nodes] == [
        (0.0, 0.0),
        (10.0, 0.0),
        (20.0, 0.0),
        (0.0, 10.0),
        (10.0, 10.0),
        (20.0, 10.0),
    ]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"node_count": 0},
        {"grid_width": 0},
        {"spacing": -1.0},
        {"diagonal_probability": 1.5},
        {"diagonal_probability": -0.1},
    ],
)
def test_bad_builder_parameters_raise(kwargs):
    with pytest.raises(ValueError):
        GridTopologyBuilder(**kwargs)


def test_random_diagonals_need_an_rng():
    with pytest.raises(ValueError):
        GridTopologyBuilder(diagonal_probability=0.3).build(None)


def test_edge_length_is_euclidean_between_node_points():
    g = build_graph(80, 9, 60.0, 0.0)
    assert g.edge_length(0, 1) == pytest.approx(60.0)
    assert g.edge_length(10, 0) == pytest.approx(60.0 * 2**0.5)
    assert g.edge_length(3, 3) == 0.0
