from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from .game_logic import CELLS, InvalidBoardError, InvalidMoveError
from .models import EMPTY


class SearchNode:
    """
    探索 1 回分の作業用盤面。
    呼び出し元の盤面をコピーした 64 要素の int 配列を持ち、
    make_move / undo_move で書き換えては戻す。
    """

    def __init__(self, states: Sequence[int]):
        if len(states) != CELLS:
            raise InvalidBoardError(f"セル数が不正です: {len(states)}")
        self.cells: List[int] = list(states)
        self.last_move: Optional[int] = None

    def make_move(self, index: int, side: int) -> None:
        if self.cells[index] != EMPTY:
            raise InvalidMoveError(f"index {index} は空いていません (state={self.cells[index]})")
        self.cells[index] = side
        self.last_move = index

    def undo_move(self, index: int) -> None:
        self.cells[index] = EMPTY
        self.last_move = None

    @contextmanager
    def applied(self, index: int, side: int) -> Iterator["SearchNode"]:
        """with を抜けるとき（枝刈りの break や例外を含む）必ず undo する"""
        self.make_move(index, side)
        try:
            yield self
        finally:
            self.undo_move(index)

    def legal_moves(self) -> List[int]:
        """空きマスの盤面インデックス（昇順）。呼ぶたびに現在の盤面から作り直す"""
        return [i for i, s in enumerate(self.cells) if s == EMPTY]
