# run_match.py
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .alg import AlphaBetaAI
from .backend.game_logic import (
    InvalidMoveError,
    Line,
    check_win_with_positions,
    create_board,
    is_full,
)
from .backend.models import EMPTY, BoardSnapshot, MoveResponse
from .config import EngineSettings
from .framework import Alg3D

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    winner: int  # 0 = 引き分け
    moves: List[MoveResponse] = field(default_factory=list)
    winning_line: Optional[Line] = None


def run_match(players: Dict[int, Alg3D], max_moves: int = 64) -> MatchResult:
    """
    players[1], players[2] を交互に打たせる（先手は 1）。
    勝ち判定は毎手、全ライン走査で行う。
    """
    board = create_board()
    result = MatchResult(winner=0)
    current = 1

    for _ in range(max_moves):
        if is_full(board):
            break

        move = players[current].get_move(BoardSnapshot(cells=board), current)
        cell = board[move.index]
        if cell.state != EMPTY:
            raise InvalidMoveError(f"player {current} が埋まっているマス {move.coords} を返しました")
        cell.state = current
        result.moves.append(MoveResponse(x=move.x, y=move.y, z=move.z, player=current))
        logger.info("🧠 Player %s → x=%s, y=%s, z=%s", current, move.x, move.y, move.z)

        line = check_win_with_positions(board, current)
        if line is not None:
            result.winner = current
            result.winning_line = line
            logger.info("🎉 Player %s wins! coords=%s", current, line)
            return result

        current = 2 if current == 1 else 1

    logger.info("✅ Game Over: draw after %d moves", len(result.moves))
    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ai = AlphaBetaAI(EngineSettings.from_env())
    run_match({1: ai, 2: ai})
