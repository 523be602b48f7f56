"""Game session: one live position, its history, and the engine operations on it."""

import logging
from typing import List, Mapping, Optional

from gsniper.config import CONFIG
from gsniper.core import draw
from gsniper.core.attacks import in_check
from gsniper.core.board import Move, Position
from gsniper.core.evaluator import EvalBreakdown, Evaluator
from gsniper.core.exceptions import IllegalMoveError
from gsniper.core.executor import apply_move
from gsniper.core.fen import STARTING_FEN, parse_fen, position_key, serialize_fen
from gsniper.core.movegen import has_legal_move, legal_moves
from gsniper.core.search import SearchEngine, SearchResult

logger = logging.getLogger(__name__)


class Engine:
    """A single game. Not thread-safe; create one instance per game."""

    def __init__(
        self,
        fen: str = STARTING_FEN,
        genome: Optional[Mapping[str, float]] = None,
        depth: Optional[int] = None,
    ):
        self.evaluator = Evaluator(genome)
        self.search = SearchEngine(self.evaluator, depth=depth or CONFIG.search.depth)
        self.last_search: Optional[SearchResult] = None
        self._load(fen)

    def _load(self, fen: str):
        self._position = parse_fen(fen)
        self.move_history: List[Move] = []
        self.position_history: List[str] = [position_key(self._position)]
        self._undo_stack: List[Position] = []

    @property
    def position(self) -> Position:
        """A copy of the live position."""
        return self._position.copy()

    @property
    def genome(self):
        return self.evaluator.genome

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    def fen(self) -> str:
        return serialize_fen(self._position)

    def reset(self, fen: Optional[str] = None):
        """Reset to ``fen`` (default: the standard starting position)."""
        self._load(fen or STARTING_FEN)
        self.last_search = None

    def legal_moves(self) -> List[Move]:
        return legal_moves(self._position)

    def make_move(self, move: Move) -> Move:
        """Commit ``move``, which must be one of ``legal_moves()``."""
        if move not in self.legal_moves():
            raise IllegalMoveError(f"Illegal move: {move}")
        self._undo_stack.append(self._position.copy())
        apply_move(self._position, move)
        self.move_history.append(move)
        self.position_history.append(position_key(self._position))
        logger.debug("Played %s -> %s", move.uci(), self.fen())
        return move

    def push_uci(self, uci: str) -> Move:
        """Commit a move given in coordinate notation (e.g. 'e2e4', 'e7e8q')."""
        for move in self.legal_moves():
            if move.uci() == uci:
                return self.make_move(move)
        raise IllegalMoveError(f"Illegal move: {uci}")

    def undo_move(self) -> Optional[Move]:
        """Take back the last committed move. Returns it, or None if there is none."""
        if not self.move_history:
            return None
        self._position = self._undo_stack.pop()
        self.position_history.pop()
        return self.move_history.pop()

    def find_best_move(self, depth: Optional[int] = None) -> Optional[Move]:
        """Search the live position; it is not modified. None when no move exists."""
        self.last_search = self.search.find_best_move(self._position, depth)
        return self.last_search.move

    def evaluate(self) -> EvalBreakdown:
        return self.evaluator.breakdown(self._position)

    def is_check(self) -> bool:
        return in_check(self._position)

    def is_checkmate(self) -> bool:
        return self.is_check() and not has_legal_move(self._position)

    def is_stalemate(self) -> bool:
        return not self.is_check() and not has_legal_move(self._position)

    def is_fifty_move_draw(self) -> bool:
        return draw.is_fifty_move_draw(self._position)

    def is_threefold_repetition(self) -> bool:
        return draw.is_threefold_repetition(self.position_history, position_key(self._position))

    def is_insufficient_material(self) -> bool:
        return draw.is_insufficient_material(self._position)

    def status(self) -> draw.GameStatus:
        return draw.game_status(self._position, self.position_history)

    def is_game_over(self) -> bool:
        return self.status().is_over

    def result(self) -> str:
        return self.status().describe()

    def print_board(self):
        """Print ASCII representation."""
        print(self._position)
