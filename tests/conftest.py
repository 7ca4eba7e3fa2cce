import pytest

from four_cube_ai.alg import AlphaBetaAI
from four_cube_ai.backend.game_logic import board_index, create_board
from four_cube_ai.config import EngineSettings


def mark(board, cells, player):
    """(x, y, z) の一覧に player の印を付ける"""
    for x, y, z in cells:
        board[board_index(x, y, z)].state = player
    return board


@pytest.fixture
def empty_board():
    return create_board()


@pytest.fixture
def ai():
    return AlphaBetaAI(EngineSettings(seed=1234))
