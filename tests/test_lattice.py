import pytest

from lattice import HORIZONTAL, VERTICAL, Graph, HexLattice


@pytest.mark.parametrize("n", [1, 2, 3, 4, 7, 11])
def test_adjacency_is_symmetric_with_at_most_six_neighbours(n):
    lat = HexLattice(n)
    for a in range(lat.num_nodes):
        nbrs = lat.neighbors(a)
        assert len(nbrs) <= 6
        assert a not in nbrs
        for b in nbrs:
            assert a in lat.neighbors(b)
            assert lat.has_edge(a, b) and lat.has_edge(b, a)


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_edge_count(n):
    # horizontal + vertical + down-left diagonal
    lat = HexLattice(n)
    assert len(list(lat.graph.edges())) == 2 * n * (n - 1) + (n - 1) ** 2


def test_three_by_three_neighbours(lattice3):
    assert lattice3.neighbors(4) == (1, 2, 3, 5, 6, 7)
    assert lattice3.neighbors(0) == (1, 3)
    assert lattice3.neighbors(2) == (1, 4, 5)
    assert lattice3.neighbors(6) == (3, 4, 7)
    assert lattice3.neighbors(8) == (5, 7)


def test_main_diagonal_cells_are_not_adjacent(lattice3):
    assert not lattice3.has_edge(0, 4)
    assert not lattice3.has_edge(4, 8)
    assert lattice3.has_edge(2, 4) and lattice3.has_edge(4, 6)


def test_single_cell_board_has_no_edges():
    lat = HexLattice(1)
    assert lat.neighbors(0) == ()


def test_index_and_coords_round_trip(lattice3):
    assert lattice3.index(2, 1) == 7
    assert lattice3.coords(7) == (2, 1)


def test_edge_cells(lattice3):
    assert lattice3.edge_cells(HORIZONTAL) == ([0, 3, 6], [2, 5, 8])
    assert lattice3.edge_cells(VERTICAL) == ([0, 1, 2], [6, 7, 8])
    with pytest.raises(ValueError):
        lattice3.edge_cells("diagonal")


def test_non_positive_size_is_rejected():
    with pytest.raises(AssertionError):
        HexLattice(0)


def test_lattice_graph_is_frozen(lattice3):
    assert lattice3.graph.frozen
    with pytest.raises(RuntimeError):
        lattice3.graph.add_edge(0, 8)


def test_graph_basics():
    g = Graph(4)
    g.add_edge(0, 1)
    g.add_edge(1, 2)
    g.add_edge(1, 0)
    assert g.neighbors(1) == (0, 2)
    assert g.degree(1) == 2
    assert g.degree(3) == 0
    assert list(g.edges()) == [(0, 1), (1, 2)]
    with pytest.raises(ValueError):
        g.add_edge(2, 2)
