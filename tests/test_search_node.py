import random

import pytest

from four_cube_ai.backend.game_logic import InvalidBoardError, InvalidMoveError
from four_cube_ai.backend.search_node import SearchNode


def _random_states(seed, fill=0.4):
    rng = random.Random(seed)
    return [rng.choice((1, 2)) if rng.random() < fill else 0 for _ in range(64)]


def test_rejects_wrong_size():
    with pytest.raises(InvalidBoardError):
        SearchNode([0] * 63)


def test_copies_caller_states():
    states = [0] * 64
    node = SearchNode(states)
    node.make_move(5, 1)
    assert states[5] == 0


@pytest.mark.parametrize("seed", range(5))
def test_make_then_undo_restores_board(seed):
    node = SearchNode(_random_states(seed))
    before = list(node.cells)
    for index in node.legal_moves():
        for side in (1, 2):
            node.make_move(index, side)
            assert node.cells[index] == side
            assert node.last_move == index
            node.undo_move(index)
            assert node.cells == before
            assert node.last_move is None


def test_make_on_occupied_cell_fails():
    node = SearchNode([0] * 64)
    node.make_move(10, 2)
    with pytest.raises(InvalidMoveError):
        node.make_move(10, 1)


def test_applied_restores_on_exception():
    node = SearchNode([0] * 64)
    with pytest.raises(RuntimeError):
        with node.applied(7, 1):
            assert node.cells[7] == 1
            raise RuntimeError("boom")
    assert node.cells == [0] * 64
    assert node.last_move is None


def test_applied_restores_on_break():
    node = SearchNode([0] * 64)
    for index in node.legal_moves():
        with node.applied(index, 2):
            if index == 3:
                break
    assert node.cells == [0] * 64


def test_legal_moves_are_fresh_and_ordered():
    states = [0] * 64
    states[0] = states[17] = 1
    node = SearchNode(states)
    moves = node.legal_moves()
    assert moves == sorted(moves)
    assert 0 not in moves and 17 not in moves
    assert len(moves) == 62
    node.make_move(1, 2)
    assert 1 not in node.legal_moves()
    node.undo_move(1)
    assert node.legal_moves() == moves
