"""Draw and game-termination detection."""

from enum import Enum
from typing import Optional, Sequence

from .attacks import find_king, in_check
from .board import Color, PieceType, Position, is_light_square
from .movegen import has_legal_move


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    CHECKMATE_WHITE_WINS = "checkmate_white_wins"
    CHECKMATE_BLACK_WINS = "checkmate_black_wins"
    STALEMATE = "stalemate"
    THREEFOLD_REPETITION = "threefold_repetition"
    FIFTY_MOVE = "fifty_move"
    INSUFFICIENT_MATERIAL = "insufficient_material"
    INVALID = "invalid"

    @property
    def is_over(self) -> bool:
        return self is not GameStatus.IN_PROGRESS

    def describe(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    GameStatus.IN_PROGRESS: "Game in progress",
    GameStatus.CHECKMATE_WHITE_WINS: "Checkmate - White wins",
    GameStatus.CHECKMATE_BLACK_WINS: "Checkmate - Black wins",
    GameStatus.STALEMATE: "Stalemate",
    GameStatus.THREEFOLD_REPETITION: "Draw by repetition",
    GameStatus.FIFTY_MOVE: "Draw by 50-move rule",
    GameStatus.INSUFFICIENT_MATERIAL: "Draw by insufficient material",
    GameStatus.INVALID: "Invalid position",
}


def is_fifty_move_draw(position: Position) -> bool:
    return position.halfmove_clock >= 100


def is_threefold_repetition(history: Sequence[str], key: Optional[str] = None) -> bool:
    """True if ``key`` (default: the latest entry) occurs at least 3 times."""
    if not history:
        return False
    if key is None:
        key = history[-1]
    return sum(1 for k in history if k == key) >= 3


def is_insufficient_material(position: Position) -> bool:
    knights = 0
    bishop_colors = []
    for sq, piece in enumerate(position.board):
        if piece is None:
            continue
        pt = piece.piece_type
        if pt in (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN):
            return False
        if pt is PieceType.KNIGHT:
            knights += 1
        elif pt is PieceType.BISHOP:
            bishop_colors.append(is_light_square(sq))

    minors = knights + len(bishop_colors)
    if minors <= 1:
        return True
    if minors == 2:
        if knights == 2:
            return True
        if len(bishop_colors) == 2 and bishop_colors[0] == bishop_colors[1]:
            return True
    return False


def game_status(position: Position, history: Sequence[str] = ()) -> GameStatus:
    if has_legal_move(position):
        if is_threefold_repetition(history):
            return GameStatus.THREEFOLD_REPETITION
        if is_fifty_move_draw(position):
            return GameStatus.FIFTY_MOVE
        if is_insufficient_material(position):
            return GameStatus.INSUFFICIENT_MATERIAL
        return GameStatus.IN_PROGRESS

    if find_king(position, position.turn) is None:
        return GameStatus.INVALID
    if in_check(position):
        if position.turn is Color.WHITE:
            return GameStatus.CHECKMATE_BLACK_WINS
        return GameStatus.CHECKMATE_WHITE_WINS
    return GameStatus.STALEMATE
