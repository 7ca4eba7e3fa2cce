import logging
import random
from typing import Optional, Sequence, Tuple, Union

from .backend.evaluation import evaluate_heuristic, evaluate_terminal
from .backend.game_logic import BoardFullError, load_board, position_of
from .backend.models import EMPTY, MoveResponse, Position
from .backend.search_node import SearchNode
from .config import EngineSettings
from .framework import Alg3D, Board

logger = logging.getLogger(__name__)


def opponent_of(player: int) -> int:
    return 2 if player == 1 else 1


class AlphaBetaSearch:
    """
    αβ 付きミニマックス 1 回分。
    最善手の記録と評価ノード数はこのオブジェクトだけが持つので、
    リクエストごとに作り直すこと。
    """

    def __init__(self, player: int, settings: EngineSettings):
        self.player = player
        self.opponent = opponent_of(player)
        self.settings = settings
        self.root_depth = settings.search_depth
        self.best: Optional[int] = None
        self.best_score: Optional[int] = None
        self.nodes = 0

    def run(self, node: SearchNode) -> Tuple[Optional[int], Union[int, float]]:
        score = self.search(node, self.root_depth, float("-inf"), float("inf"), True)
        return self.best, score

    def _terminal_score(self, winner: int) -> Optional[int]:
        # 相手の印で埋まったラインは「player の勝ち」扱いで MIN、
        # 自分の印で埋まったラインは「opponent の勝ち」扱いで MAX（この対応は変えないこと）。
        if winner == self.opponent:
            return self.settings.min_score
        if winner == self.player:
            return self.settings.max_score
        return None

    def search(
        self, node: SearchNode, depth: int, alpha: float, beta: float, maximizing: bool
    ) -> Union[int, float]:
        self.nodes += 1

        terminal = self._terminal_score(evaluate_terminal(node.cells, node.last_move))
        if terminal is not None:
            return terminal

        if depth == 0:
            return evaluate_heuristic(node.cells, node.last_move, self.player, self.opponent)

        moves = node.legal_moves()
        if not moves:
            return 0  # 引き分け

        if maximizing:
            value = float("-inf")
            for index in moves:
                with node.applied(index, self.player):
                    value = max(value, self.search(node, depth - 1, alpha, beta, False))
                    # 更新前の alpha を厳密に超えたときだけ記録（同点は先に見た手）
                    if depth == self.root_depth and value > alpha:
                        self.best = index
                        self.best_score = value
                    alpha = max(alpha, value)
                if alpha > beta:
                    break
            return value

        value = float("inf")
        for index in moves:
            with node.applied(index, self.opponent):
                value = min(value, self.search(node, depth - 1, alpha, beta, True))
                beta = min(beta, value)
            if alpha > beta:
                break
        return value


class AlphaBetaAI(Alg3D):
    """
    4x4x4 立体三目並べの手選択。
    settings.random_role の手番はランダム、それ以外は αβ 探索で選ぶ。
    勝ちライン表と索引はモジュール共有（読み取り専用）で、探索用の盤面は毎回コピーする。
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self._rng = random.Random(self.settings.seed)

    def get_move(self, board: Board, player: int) -> Position:
        res = self.analyze(board, player)
        return Position(x=res.x, y=res.y, z=res.z, state=EMPTY)

    def analyze(self, board: Board, player: int) -> MoveResponse:
        if player not in (1, 2):
            raise ValueError(f"player は 1 か 2 です: {player}")

        states = load_board(board).states()
        if EMPTY not in states:
            raise BoardFullError("空きマスがありません")

        if player == self.settings.random_role:
            index = self._random_move(states)
            x, y, z = position_of(index)
            logger.debug("player %s random move -> (%s, %s, %s)", player, x, y, z)
            return MoveResponse(x=x, y=y, z=z, player=player, message="random")

        search = AlphaBetaSearch(player, self.settings)
        index, score = search.run(SearchNode(states))
        x, y, z = position_of(index)
        logger.debug(
            "player %s evaluated %d nodes. best=(%s, %s, %s) score=%s",
            player, search.nodes, x, y, z, score,
        )
        return MoveResponse(x=x, y=y, z=z, player=player, score=search.best_score, nodes=search.nodes)

    def _random_move(self, states: Sequence[int]) -> int:
        # 空きが見つかるまで 64 マスから引き直す
        while True:
            index = self._rng.randrange(len(states))
            if states[index] == EMPTY:
                return index


_default_ai: Optional[AlphaBetaAI] = None


def choose_move(board: Board, role: int) -> Position:
    """
    環境変数 (FOUR_CUBE_*) の設定で 1 手選ぶ。
    設定が変わったときだけエンジンを作り直す（乱数の状態は設定が同じ間は引き継ぐ）。
    """
    global _default_ai
    settings = EngineSettings.from_env()
    if _default_ai is None or _default_ai.settings != settings:
        _default_ai = AlphaBetaAI(settings)
    return _default_ai.get_move(board, role)
