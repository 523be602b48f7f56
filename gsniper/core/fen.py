"""FEN parsing/serialization and the canonical repetition key."""

import re

from .board import CastlingRights, Color, Piece, Position, parse_square, square, square_name
from .exceptions import FormatError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_EP_RE = re.compile(r"^[a-h][36]$")
_PIECE_CHARS = "pnbrqkPNBRQK"


def _parse_int(text: str, default: int) -> int:
    try:
        return int(text)
    except ValueError:
        return default


def parse_fen(text: str) -> Position:
    """Build a Position from FEN text. Raises FormatError when malformed."""
    fields = (text or "").split()
    if len(fields) != 6:
        raise FormatError("Invalid FEN: must have 6 fields.")
    placement, active, castling_field, ep_field, halfmove, fullmove = fields

    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FormatError("Invalid FEN: must have 8 ranks.")

    board = [None] * 64
    for i, rank_str in enumerate(ranks):
        rank = 7 - i
        file = 0
        for ch in rank_str:
            if ch in "12345678":
                file += int(ch)
            elif ch in _PIECE_CHARS:
                if file >= 8:
                    raise FormatError(f"Invalid FEN: too many squares on rank {rank + 1}.")
                board[square(file, rank)] = Piece.from_symbol(ch)
                file += 1
            else:
                raise FormatError(f"Invalid FEN: unexpected character {ch!r}.")
        if file != 8:
            raise FormatError(f"Invalid FEN: rank {rank + 1} does not fill 8 files.")

    if active not in ("w", "b"):
        raise FormatError("Invalid FEN: active color must be 'w' or 'b'.")

    castling = CastlingRights(
        white_king="K" in castling_field,
        white_queen="Q" in castling_field,
        black_king="k" in castling_field,
        black_queen="q" in castling_field,
    )

    ep_square = None
    if ep_field != "-":
        if not _EP_RE.match(ep_field):
            raise FormatError("Invalid FEN: bad en-passant square.")
        ep_square = parse_square(ep_field)

    return Position(
        board=board,
        turn=Color.WHITE if active == "w" else Color.BLACK,
        castling=castling,
        ep_square=ep_square,
        halfmove_clock=_parse_int(halfmove, 0),
        fullmove_number=_parse_int(fullmove, 1),
    )


def board_fen(position: Position) -> str:
    """Piece placement field only."""
    rows = []
    for rank in range(7, -1, -1):
        out = ""
        empty = 0
        for file in range(8):
            piece = position.board[square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                out += str(empty)
                empty = 0
            out += piece.symbol()
        if empty:
            out += str(empty)
        rows.append(out)
    return "/".join(rows)


def position_key(position: Position) -> str:
    """Canonical key for repetition counting: clocks are excluded."""
    ep = square_name(position.ep_square) if position.ep_square is not None else "-"
    return f"{board_fen(position)} {position.turn.fen_char} {position.castling.fen()} {ep}"


def serialize_fen(position: Position) -> str:
    return f"{position_key(position)} {position.halfmove_clock} {position.fullmove_number}"
