from pydantic import BaseModel, Field, model_validator
from typing import List, Optional

EMPTY = 0
_DIM = 4


class Position(BaseModel):
    """1 マス分。state は 0=空, 1=黒, 2=白"""

    x: int = Field(ge=0, lt=_DIM)
    y: int = Field(ge=0, lt=_DIM)
    z: int = Field(ge=0, lt=_DIM)
    state: int = Field(default=EMPTY, ge=0, le=2)

    @property
    def index(self) -> int:
        return self.x * _DIM * _DIM + self.y * _DIM + self.z

    @property
    def coords(self) -> tuple[int, int, int]:
        return self.x, self.y, self.z


class BoardSnapshot(BaseModel):
    """64 マスを盤面インデックス順に並べたもの"""

    cells: List[Position]

    @model_validator(mode="after")
    def _check_layout(self) -> "BoardSnapshot":
        if len(self.cells) != _DIM**3:
            raise ValueError(f"セル数が不正です: {len(self.cells)} (期待値 {_DIM**3})")
        for i, p in enumerate(self.cells):
            if p.index != i:
                raise ValueError(f"インデックス {i} に座標 {p.coords} が入っています")
        return self

    @classmethod
    def from_nested(cls, board: List[List[List[int]]]) -> "BoardSnapshot":
        """ゲームサーバ形式 board[z][y][x] から変換"""
        if len(board) != _DIM or any(
            len(layer) != _DIM or any(len(row) != _DIM for row in layer) for layer in board
        ):
            raise ValueError("board[z][y][x] は 4x4x4 である必要があります")
        cells = []
        for x in range(_DIM):
            for y in range(_DIM):
                for z in range(_DIM):
                    cells.append(Position(x=x, y=y, z=z, state=board[z][y][x]))
        return cls(cells=cells)

    def to_nested(self) -> List[List[List[int]]]:
        grid = [[[EMPTY for x in range(_DIM)] for y in range(_DIM)] for z in range(_DIM)]
        for p in self.cells:
            grid[p.z][p.y][p.x] = p.state
        return grid

    def states(self) -> List[int]:
        return [p.state for p in self.cells]


class MoveResponse(BaseModel):
    x: int
    y: int
    z: int
    player: int
    score: int | None = None
    nodes: int = 0
    message: Optional[str] = None
