import pytest

from game import BLUE, RED, empty_board
from lattice import HexLattice
from search import FRONTIER, NO_PREDECESSOR, UNVISITED, VISITED, Frontier, ReachabilitySearch


def test_frontier_orders_by_distance_then_index():
    f = Frontier()
    f.insert(5, 1)
    f.insert(2, 1)
    f.insert(3, 0)
    assert len(f) == 3 and 5 in f
    assert [f.pop_min() for _ in range(3)] == [(0, 3), (1, 2), (1, 5)]
    assert len(f) == 0


def test_frontier_decrease_moves_node_forward():
    f = Frontier()
    f.insert(1, 4)
    f.insert(2, 3)
    f.decrease(1, 1)
    f.decrease(2, 7)  # larger distance is ignored
    assert f.pop_min() == (1, 1)
    assert f.pop_min() == (3, 2)
    with pytest.raises(IndexError):
        f.pop_min()


def test_frontier_rejects_double_insert():
    f = Frontier()
    f.insert(0, 0)
    with pytest.raises(AssertionError):
        f.insert(0, 2)


def test_visits_whole_same_colour_row(lattice3, make_board):
    board = make_board(["BBB", "...", "..."])
    s = ReachabilitySearch(lattice3)
    assert s.run(board, 0, BLUE) == {0, 1, 2}
    assert s.visit_order == [0, 1, 2]
    assert [s.distance(i) for i in (0, 1, 2)] == [0, 1, 2]
    assert s.predecessor(0) == NO_PREDECESSOR
    assert s.predecessor(2) == 1
    assert s.path_to(2) == [0, 1, 2]
    assert s.path_to(4) == []


def test_does_not_cross_opponent_stones(lattice3, make_board):
    board = make_board(["BRB", "RBR", "BRB"])
    s = ReachabilitySearch(lattice3)
    # 4 touches 2 and 6 along the anti-diagonal but not 0 or 8
    assert s.run(board, 4, BLUE) == {2, 4, 6}
    assert s.run(board, 0, BLUE) == {0}
    assert s.run(board, 1, RED) == {1, 3}


def test_visit_order_breaks_ties_by_index(lattice3, make_board):
    board = make_board(["BBB", "BBB", "BBB"])
    s = ReachabilitySearch(lattice3)
    s.run(board, 4, BLUE)
    assert s.visit_order == [4, 1, 2, 3, 5, 6, 7, 0, 8]
    assert s.distance(0) == 2 and s.distance(8) == 2


def test_state_is_reset_between_passes(lattice3, make_board):
    board = make_board(["BBB", "RRR", "..."])
    s = ReachabilitySearch(lattice3)
    s.run(board, 0, BLUE)
    assert s.run(board, 3, RED) == {3, 4, 5}
    assert not s.visited(0)
    assert s.tag[0] == UNVISITED
    assert s.tag[8] == UNVISITED
    assert all(t in (UNVISITED, VISITED) for t in s.tag)
    assert FRONTIER not in s.tag
    assert len(s.frontier) == 0


def test_path_follows_adjacent_cells(make_board):
    lat = HexLattice(4)
    board = make_board(["B...", "BB..", ".B..", ".BBB"])
    s = ReachabilitySearch(lat)
    s.run(board, 0, BLUE)
    path = s.path_to(15)
    assert path[0] == 0 and path[-1] == 15
    assert len(path) == s.distance(15) + 1
    for a, b in zip(path, path[1:]):
        assert lat.has_edge(a, b)
        assert board[b // 4][b % 4] == BLUE


def test_large_board_runs_without_recursion():
    n = 40
    lat = HexLattice(n)
    board = empty_board(n)
    for r in range(n):
        for c in range(n):
            board[r][c] = BLUE
    s = ReachabilitySearch(lat)
    assert len(s.run(board, 0, BLUE)) == n * n
    # the far corner is n-1 steps right and n-1 steps down
    assert s.distance(n * n - 1) == 2 * (n - 1)
