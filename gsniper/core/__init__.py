"""Core engine components: board, FEN, move generation, evaluator, search and draw detection."""

from .board import CastleSide, CastlingRights, Color, Move, Piece, PieceType, Position
from .draw import GameStatus
from .evaluator import EvalBreakdown, Evaluator
from .exceptions import FormatError, GSniperError, IllegalMoveError
from .fen import STARTING_FEN, parse_fen, position_key, serialize_fen
from .movegen import legal_moves, pseudo_legal_moves
from .search import SearchEngine, SearchResult
