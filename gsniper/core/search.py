import logging
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gsniper.config import CONFIG

from .attacks import in_check
from .board import Color, Move, Position
from .evaluator import Evaluator
from .executor import apply_move
from .movegen import has_legal_move, legal_moves
from .utils import format_search_info, move_to_algebraic

logger = logging.getLogger(__name__)

INF = float("inf")
MATE_SCORE = CONFIG.search.mate_score


@dataclass
class SearchResult:
    move: Optional[Move] = None
    score: float = 0
    pv: List[Move] = field(default_factory=list)
    depth: int = 0
    nodes: int = 0
    pruned: int = 0
    elapsed_ms: float = 0.0
    root_scores: List[Tuple[Move, float]] = field(default_factory=list)
    mate_shortcut: bool = False
    random_fallback: bool = False


class SearchEngine:
    """Depth-limited minimax with alpha-beta pruning.

    Scores are always from White's point of view: White maximizes, Black
    minimizes. A mated side scores ``-mate_score`` (White) or ``+mate_score``
    (Black); the same bounded constant is used by the evaluator.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = depth if depth is not None else CONFIG.search.depth
        self.mate_score = CONFIG.search.mate_score
        self.nodes = 0
        self.pruned = 0

    def minimax(
        self, position: Position, depth: int, alpha: float, beta: float, maximizing: bool
    ) -> Tuple[float, List[Move]]:
        """Return (score, principal variation) for ``position``."""
        self.nodes += 1
        if depth == 0:
            return self.evaluator.evaluate(position), []

        moves = legal_moves(position)
        if not moves:
            if in_check(position):
                return self._mated(position.turn), []
            return 0, []  # stalemate

        best_pv: List[Move] = []
        if maximizing:
            best_score = -INF
            for move in moves:
                child = position.copy()
                apply_move(child, move)
                score, pv = self.minimax(child, depth - 1, alpha, beta, False)
                if score > best_score:
                    best_score = score
                    best_pv = [move] + pv
                alpha = max(alpha, score)
                if alpha >= beta:
                    self.pruned += 1
                    break
        else:
            best_score = INF
            for move in moves:
                child = position.copy()
                apply_move(child, move)
                score, pv = self.minimax(child, depth - 1, alpha, beta, True)
                if score < best_score:
                    best_score = score
                    best_pv = [move] + pv
                beta = min(beta, score)
                if alpha >= beta:
                    self.pruned += 1
                    break
        return best_score, best_pv

    def find_best_move(self, position: Position, depth: Optional[int] = None) -> SearchResult:
        """Pick a move for the side to move in ``position`` (which is not modified)."""
        depth = self.max_depth if depth is None else depth
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ValueError(f"search depth must be a positive integer, got {depth!r}")

        self.nodes = 0
        self.pruned = 0
        start = time.perf_counter()
        root = position.copy()
        result = SearchResult(depth=depth)
        legal = legal_moves(root)
        if not legal:
            return result

        # quick mate check
        for move in legal:
            child = root.copy()
            apply_move(child, move)
            if not has_legal_move(child) and in_check(child):
                logger.info("Found checkmate: %s", move_to_algebraic(move))
                result.move = move
                result.pv = [move]
                result.score = self._mated(child.turn)
                result.mate_shortcut = True
                return self._finish(result, start)

        white_to_move = root.turn is Color.WHITE
        best_eval = -INF if white_to_move else INF
        for move in legal:
            child = root.copy()
            apply_move(child, move)
            score, pv = self.minimax(child, depth - 1, -INF, INF, child.turn is Color.WHITE)
            result.root_scores.append((move, score))
            logger.debug("%s: %s pv %s", move_to_algebraic(move), score, " ".join(m.uci() for m in pv))

            if (white_to_move and score > best_eval) or (not white_to_move and score < best_eval):
                best_eval = score
                result.move = move
                result.score = score
                result.pv = [move] + pv

        if result.move is None:
            result.move = random.choice(legal)
            result.pv = [result.move]
            result.random_fallback = True
            logger.warning("No best move found, selecting random: %s", move_to_algebraic(result.move))

        return self._finish(result, start)

    def _finish(self, result: SearchResult, start: float) -> SearchResult:
        result.nodes = self.nodes
        result.pruned = self.pruned
        result.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            format_search_info(
                result.depth, result.score, result.nodes, result.pruned,
                result.elapsed_ms, result.pv, self.mate_score,
            )
        )
        return result

    def _mated(self, color: Color) -> int:
        return -self.mate_score if color is Color.WHITE else self.mate_score
