from typing import Optional, Sequence, Tuple

from .game_logic import DIM, LINE_CELLS, LINE_INDEX

LINE_WEIGHT = 10
THREAT_BONUS = 10  # 残り 1 手のラインへの追加点


def line_counts(cells: Sequence[int], line_no: int, player: int, opponent: int) -> Tuple[int, int]:
    """ライン上の (player の数, opponent の数)"""
    mine = theirs = 0
    for i in LINE_CELLS[line_no]:
        s = cells[i]
        if s == player:
            mine += 1
        elif s == opponent:
            theirs += 1
    return mine, theirs


def evaluate_terminal(cells: Sequence[int], last_move: Optional[int]) -> int:
    """
    直前の手を通るラインだけを見て勝者の印 (1/2) を返す。勝者なしは 0。
    勝ちラインは必ず最後に置いたマスを含むので、それ以外は見なくてよい。
    """
    if last_move is None:
        return 0
    mark = cells[last_move]
    if mark == 0:
        return 0
    for line_no in LINE_INDEX.lookup(last_move):
        if all(cells[i] == mark for i in LINE_CELLS[line_no]):
            return mark
    return 0


def evaluate_heuristic(
    cells: Sequence[int], last_move: Optional[int], player: int, opponent: int
) -> int:
    """
    直前の手を通るラインだけの局所評価（盤面全体は見ない）。
    両者が置いたラインは 0、片方だけのラインは -10 * 個数、3 個なら さらに -10。
    値が小さいほど player 側に好ましい、という符号の向きはそのまま。
    """
    if last_move is None:
        return 0
    score = 0
    for line_no in LINE_INDEX.lookup(last_move):
        mine, theirs = line_counts(cells, line_no, player, opponent)
        if mine > 0 and theirs > 0:
            continue
        count = mine if theirs == 0 else theirs
        if count == DIM - 1:
            score -= THREAT_BONUS
        score -= count * LINE_WEIGHT
    return score
