"""Loop-based static evaluator weighted by a named coefficient set (genome)."""

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional

from gsniper.config import CONFIG, DEFAULT_GENOME, EvalConfig

from .attacks import find_king, in_check
from .board import Color, PieceType, Position, square_file, square_rank
from .movegen import generate_pseudo_legal_moves, has_legal_move


@dataclass
class EvalBreakdown:
    """Result of a static evaluation. Scores are from White's point of view."""

    material: int = 0
    positional: int = 0
    total: float = 0.0
    features: Dict[str, float] = field(default_factory=dict)  # weighted contributions
    terminal: Optional[str] = None

    def describe(self) -> str:
        if self.terminal:
            return f"{self.terminal}: {self.total}"
        lines = [f"{name}: {value}" for name, value in self.features.items()]
        lines.append(f"Total: {self.total}")
        return "\n".join(lines)


def random_genome(rng: Optional[random.Random] = None) -> Dict[str, float]:
    """Random weights in [0.1, 2.0] for every default genome key."""
    rng = rng or random.Random()
    return {name: round(rng.uniform(0.1, 2.0), 2) for name in DEFAULT_GENOME}


class Evaluator:
    def __init__(self, genome: Optional[Mapping[str, float]] = None, config: Optional[EvalConfig] = None):
        self.cfg = config or CONFIG.eval
        self.genome = dict(genome if genome is not None else self.cfg.genome)
        self.mate_score = CONFIG.search.mate_score
        # Fixed feature table; genome names outside it are never looked up.
        self.features: Dict[str, Callable[[Position], int]] = {
            "material": self.material,
            "positional": self.positional,
            "king_safety": self.king_safety,
            "mobility": self.mobility,
        }

    def evaluate(self, position: Position) -> float:
        """Return static eval in centipawns, positive favors White."""
        return self.breakdown(position).total

    def breakdown(self, position: Position) -> EvalBreakdown:
        terminal = self._terminal(position)
        if terminal is not None:
            return terminal

        result = EvalBreakdown(material=self.material(position), positional=self.positional(position))
        raw = {"material": result.material, "positional": result.positional}
        total = 0.0
        for name, feature in self.features.items():
            weight = self.genome.get(name, 0.0)
            if not weight:
                continue
            value = raw[name] if name in raw else feature(position)
            result.features[name] = value * weight
            total += value * weight
        result.total = total
        return result

    def _terminal(self, position: Position) -> Optional[EvalBreakdown]:
        """Missing king, checkmate and stalemate short-circuit the evaluation."""
        for color in (position.turn, position.turn.other):
            if find_king(position, color) is None:
                return EvalBreakdown(total=self._lost(color), terminal="King missing")
        if has_legal_move(position):
            return None
        if in_check(position):
            return EvalBreakdown(total=self._lost(position.turn), terminal="Checkmate")
        return EvalBreakdown(total=0, terminal="Stalemate")

    def _lost(self, color: Color) -> int:
        return -self.mate_score if color is Color.WHITE else self.mate_score

    # ── Features (White minus Black) ───────────────────────────────────────

    def material(self, position: Position) -> int:
        values = self.cfg.piece_values
        score = 0
        for piece in position.board:
            if piece is None:
                continue
            value = values.get(piece.piece_type.name, 0)
            score += value if piece.color is Color.WHITE else -value
        return score

    def positional(self, position: Position) -> int:
        """Tempo bonus per rank each pawn has advanced from its start."""
        bonus = self.cfg.pawn_advance_bonus
        score = 0
        for sq, piece in enumerate(position.board):
            if piece is None or piece.piece_type is not PieceType.PAWN:
                continue
            if piece.color is Color.WHITE:
                score += abs(square_rank(sq) - 1) * bonus
            else:
                score -= abs(square_rank(sq) - 6) * bonus
        return score

    def king_safety(self, position: Position) -> int:
        table = self.cfg.king_table
        score = 0
        for color in (Color.WHITE, Color.BLACK):
            sq = find_king(position, color)
            if sq is None:
                continue
            # table rows run from rank 8 down, as seen by the king's owner
            rank = square_rank(sq) if color is Color.BLACK else 7 - square_rank(sq)
            value = table[rank][square_file(sq)]
            score += value if color is Color.WHITE else -value
        return score

    def mobility(self, position: Position) -> int:
        own = sum(1 for _ in generate_pseudo_legal_moves(position))
        flipped = position.copy()
        flipped.turn = position.turn.other
        flipped.ep_square = None
        other = sum(1 for _ in generate_pseudo_legal_moves(flipped))
        diff = own - other
        return diff if position.turn is Color.WHITE else -diff
