"""Board representation: squares, pieces, castling rights, positions and moves."""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import List, Optional

FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def other(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def fen_char(self) -> str:
        return "w" if self is Color.WHITE else "b"


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def symbol(self) -> str:
        return "pnbrqk"[self - 1]


class CastleSide(Enum):
    KING = "K"
    QUEEN = "Q"


PROMOTION_TYPES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


# Squares: a1 = 0 ... h8 = 63.
def square(file: int, rank: int) -> int:
    return rank * 8 + file


def square_file(sq: int) -> int:
    return sq & 7


def square_rank(sq: int) -> int:
    return sq >> 3


def square_name(sq: int) -> str:
    return FILE_NAMES[square_file(sq)] + RANK_NAMES[square_rank(sq)]


def parse_square(name: str) -> int:
    """Parse a square name such as 'e4'. Raises ValueError on bad input."""
    if len(name) != 2 or name[0] not in FILE_NAMES or name[1] not in RANK_NAMES:
        raise ValueError(f"invalid square name: {name!r}")
    return square(FILE_NAMES.index(name[0]), RANK_NAMES.index(name[1]))


def is_light_square(sq: int) -> bool:
    return (square_file(sq) + square_rank(sq)) % 2 == 1


A1, E1, H1 = 0, 4, 7
A8, E8, H8 = 56, 60, 63


@dataclass(frozen=True)
class Piece:
    piece_type: PieceType
    color: Color

    def symbol(self) -> str:
        s = self.piece_type.symbol
        return s.upper() if self.color is Color.WHITE else s

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        lower = symbol.lower()
        if len(symbol) != 1 or lower not in "pnbrqk":
            raise ValueError(f"invalid piece symbol: {symbol!r}")
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(PieceType("pnbrqk".index(lower) + 1), color)

    def __str__(self) -> str:
        return self.symbol()


@dataclass(frozen=True)
class CastlingRights:
    white_king: bool = False
    white_queen: bool = False
    black_king: bool = False
    black_queen: bool = False

    def has(self, color: Color, side: CastleSide) -> bool:
        if color is Color.WHITE:
            return self.white_king if side is CastleSide.KING else self.white_queen
        return self.black_king if side is CastleSide.KING else self.black_queen

    def without(self, color: Color, side: Optional[CastleSide] = None) -> "CastlingRights":
        """Return a copy with one right (or both rights of a color) removed."""
        if color is Color.WHITE:
            if side is None:
                return replace(self, white_king=False, white_queen=False)
            if side is CastleSide.KING:
                return replace(self, white_king=False)
            return replace(self, white_queen=False)
        if side is None:
            return replace(self, black_king=False, black_queen=False)
        if side is CastleSide.KING:
            return replace(self, black_king=False)
        return replace(self, black_queen=False)

    def fen(self) -> str:
        out = (
            ("K" if self.white_king else "")
            + ("Q" if self.white_queen else "")
            + ("k" if self.black_king else "")
            + ("q" if self.black_queen else "")
        )
        return out or "-"


@dataclass(frozen=True)
class Move:
    from_square: int
    to_square: int
    piece: Piece
    captured: Optional[Piece] = None
    promotion: Optional[PieceType] = None
    double_push: bool = False
    en_passant: bool = False
    castle: Optional[CastleSide] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def uci(self) -> str:
        """Coordinate notation, e.g. 'e2e4' or 'a7a8q'."""
        s = square_name(self.from_square) + square_name(self.to_square)
        if self.promotion is not None:
            s += self.promotion.symbol
        return s

    def __str__(self) -> str:
        return self.uci()


class Position:
    """Mutable chess position.

    ``board`` is a flat list of 64 entries (a1 first), each a ``Piece`` or None.
    Pieces and castling rights are immutable, so ``copy()`` only needs to copy
    the square list to produce an independent position.
    """

    __slots__ = ("board", "turn", "castling", "ep_square", "halfmove_clock", "fullmove_number")

    def __init__(
        self,
        board: Optional[List[Optional[Piece]]] = None,
        turn: Color = Color.WHITE,
        castling: Optional[CastlingRights] = None,
        ep_square: Optional[int] = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ):
        self.board = board if board is not None else [None] * 64
        self.turn = turn
        self.castling = castling if castling is not None else CastlingRights()
        self.ep_square = ep_square
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    def copy(self) -> "Position":
        return Position(
            self.board[:],
            self.turn,
            self.castling,
            self.ep_square,
            self.halfmove_clock,
            self.fullmove_number,
        )

    def piece_at(self, sq: int) -> Optional[Piece]:
        return self.board[sq]

    def set_piece_at(self, sq: int, piece: Optional[Piece]) -> None:
        self.board[sq] = piece

    def pieces(self, piece_type: PieceType, color: Color) -> List[int]:
        """Squares holding the given piece."""
        target = Piece(piece_type, color)
        return [sq for sq, p in enumerate(self.board) if p == target]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.turn == other.turn
            and self.castling == other.castling
            and self.ep_square == other.ep_square
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None

    def __str__(self) -> str:
        rows = []
        for rank in range(7, -1, -1):
            cells = []
            for file in range(8):
                p = self.board[square(file, rank)]
                cells.append(p.symbol() if p else ".")
            rows.append(" ".join(cells))
        return "\n".join(rows)

    def __repr__(self) -> str:
        from .fen import serialize_fen

        return f"Position({serialize_fen(self)!r})"
