from typing import List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .models import EMPTY, BoardSnapshot, Position

DIM = 4  # 立方体の一辺
CELLS = DIM * DIM * DIM
MARKS = (EMPTY, 1, 2)

Coord3 = Tuple[int, int, int]
Line = Tuple[Coord3, ...]
Cells = List[Position]


# ==== エラー ====
class InvalidBoardError(ValueError):
    """盤面の形式不正（セル数・座標・インデックスの不整合など）"""

    pass


class InvalidMoveError(ValueError):
    """空でないセルへの着手"""

    pass


class BoardFullError(RuntimeError):
    """空きセルが無い盤面で手を要求された"""

    pass


def board_index(x: int, y: int, z: int) -> int:
    """(x, y, z) → 盤面インデックス (x*16 + y*4 + z)"""
    return x * DIM * DIM + y * DIM + z


def position_of(index: int) -> Coord3:
    x, rest = divmod(index, DIM * DIM)
    y, z = divmod(rest, DIM)
    return x, y, z


def create_board() -> Cells:
    """64 マスの空盤面をインデックス順に作成"""
    return [Position(x=x, y=y, z=z) for x, y, z in map(position_of, range(CELLS))]


# ========== 勝ちライン（76本、順序固定） ==========
def generate_lines() -> List[Line]:
    """
    順序: z 軸 16 → y 軸 16 → x 軸 16 → 正の対角（xz, yz, xy 面 各4）
    → 負の対角（xz, yz, xy 面 各4）→ 空間対角 4。
    インデックスは他で参照されるので順序を変えないこと。
    """
    r = range(DIM)
    last = DIM - 1
    lines: List[Line] = []

    # 軸方向 48 本
    for i in r:
        for j in r:
            lines.append(tuple((i, j, k) for k in r))
    for i in r:
        for j in r:
            lines.append(tuple((i, k, j) for k in r))
    for i in r:
        for j in r:
            lines.append(tuple((k, i, j) for k in r))

    # 面の対角 24 本
    for i in r:
        lines.append(tuple((k, i, k) for k in r))
    for i in r:
        lines.append(tuple((i, k, k) for k in r))
    for i in r:
        lines.append(tuple((k, k, i) for k in r))
    for i in r:
        lines.append(tuple((k, i, last - k) for k in r))
    for i in r:
        lines.append(tuple((i, k, last - k) for k in r))
    for i in r:
        lines.append(tuple((k, last - k, i) for k in r))

    # 空間対角 4 本
    lines.append(tuple((k, k, k) for k in r))
    lines.append(tuple((k, k, last - k) for k in r))
    lines.append(tuple((last - k, k, k) for k in r))
    lines.append(tuple((k, last - k, k) for k in r))
    return lines


class LineIndex:
    """
    セル → そのセルを通るライン番号の一覧。
    盤面インデックスで引く固定長配列（64 要素）。
    """

    def __init__(self, lines: Sequence[Line]):
        self.lines = tuple(lines)
        through: List[List[int]] = [[] for _ in range(CELLS)]
        for li, line in enumerate(self.lines):
            for x, y, z in line:
                through[board_index(x, y, z)].append(li)
        # 以降は読み取り専用
        self._through = tuple(tuple(v) for v in through)

    def lookup(self, pos: Union[Position, Coord3, int]) -> Tuple[int, ...]:
        if isinstance(pos, int):
            return self._through[pos]
        if isinstance(pos, Position):
            return self._through[pos.index]
        return self._through[board_index(*pos)]


LINES: List[Line] = generate_lines()
LINE_INDEX = LineIndex(LINES)

# 評価用: ライン番号 → 4 つの盤面インデックス
LINE_CELLS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(board_index(*c) for c in line) for line in LINES
)


# ========== 盤面ユーティリティ ==========
def load_board(board) -> BoardSnapshot:
    """
    BoardSnapshot / Position の 64 要素リスト / board[z][y][x] のいずれかを受け取り、
    検証済みの BoardSnapshot を返す。不正なら InvalidBoardError。
    """
    if isinstance(board, BoardSnapshot):
        snapshot = board
    else:
        try:
            if board and not isinstance(board[0], (Position, dict)):
                snapshot = BoardSnapshot.from_nested(board)
            else:
                snapshot = BoardSnapshot(cells=list(board))
        except (ValidationError, ValueError, TypeError) as e:
            raise InvalidBoardError(str(e)) from e

    # 生成後に state を代入された Position は再検証されないのでここで見る
    for p in snapshot.cells:
        if p.state not in MARKS:
            raise InvalidBoardError(f"{p.coords} の state が不正です: {p.state}")
    return snapshot


def empty_positions(board: Sequence[Position]) -> List[Position]:
    return [p for p in board if p.state == EMPTY]


def is_full(board: Sequence[Position]) -> bool:
    """盤面がすべて埋まっているかを確認"""
    return all(p.state != EMPTY for p in board)


def check_win_with_positions(board: Sequence[Position], player: int) -> Optional[Line]:
    """
    全ライン走査の勝ち判定（対戦進行用。探索では使わない）。
    勝っていればその 4 座標、いなければ None。
    """
    for line in LINES:
        if all(board[board_index(*c)].state == player for c in line):
            return line
    return None


def check_win(board: Sequence[Position], player: int) -> bool:
    """勝っているかどうかの真偽だけ返す"""
    return check_win_with_positions(board, player) is not None
