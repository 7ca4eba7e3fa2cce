from abc import ABC, abstractmethod
from typing import List, Union

from .backend.models import BoardSnapshot, Position

# 64 マス（インデックス順の Position）か、ゲームサーバ形式 board[z][y][x]（0=空, 1=黒, 2=白）
Board = Union[BoardSnapshot, List[Position], List[List[List[int]]]]


class Alg3D(ABC):
    @abstractmethod
    def get_move(self, board: Board, player: int) -> Position:
        """player (1 or 2) が次に打つ空きマスを返す"""
        ...
