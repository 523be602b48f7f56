"""Attack detection: is a square attacked by a given side?"""

from typing import List, Optional

from .board import Color, Piece, PieceType, Position, square, square_file, square_rank

KNIGHT_DELTAS = [(2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2)]
KING_DELTAS = [(df, dr) for df in (-1, 0, 1) for dr in (-1, 0, 1) if df or dr]
DIAGONALS = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
STRAIGHTS = [(1, 0), (-1, 0), (0, 1), (0, -1)]


def _offset(sq: int, df: int, dr: int) -> Optional[int]:
    f = square_file(sq) + df
    r = square_rank(sq) + dr
    if 0 <= f < 8 and 0 <= r < 8:
        return square(f, r)
    return None


def _targets(deltas) -> List[List[int]]:
    table = []
    for sq in range(64):
        table.append([t for t in (_offset(sq, df, dr) for df, dr in deltas) if t is not None])
    return table


def _rays(directions) -> List[List[List[int]]]:
    table = []
    for sq in range(64):
        rays = []
        for df, dr in directions:
            ray = []
            t = _offset(sq, df, dr)
            while t is not None:
                ray.append(t)
                t = _offset(t, df, dr)
            rays.append(ray)
        table.append(rays)
    return table


# Precomputed per-square tables.
KNIGHT_TARGETS = _targets(KNIGHT_DELTAS)
KING_TARGETS = _targets(KING_DELTAS)
DIAGONAL_RAYS = _rays(DIAGONALS)
STRAIGHT_RAYS = _rays(STRAIGHTS)


def pawn_attack_squares(sq: int, color: Color) -> List[int]:
    """Squares a pawn of ``color`` standing on ``sq`` attacks."""
    dr = 1 if color is Color.WHITE else -1
    return [t for t in (_offset(sq, -1, dr), _offset(sq, 1, dr)) if t is not None]


def is_attacked(position: Position, sq: int, by_color: Color) -> bool:
    """True if any piece of ``by_color`` attacks ``sq``."""
    board = position.board

    # pawns: look one rank back from the attacker's point of view
    pawn = Piece(PieceType.PAWN, by_color)
    for origin in pawn_attack_squares(sq, by_color.other):
        if board[origin] == pawn:
            return True

    knight = Piece(PieceType.KNIGHT, by_color)
    for origin in KNIGHT_TARGETS[sq]:
        if board[origin] == knight:
            return True

    # bishops/queens on diagonals
    for ray in DIAGONAL_RAYS[sq]:
        for t in ray:
            p = board[t]
            if p is None:
                continue
            if p.color is by_color and p.piece_type in (PieceType.BISHOP, PieceType.QUEEN):
                return True
            break

    # rooks/queens on ranks and files
    for ray in STRAIGHT_RAYS[sq]:
        for t in ray:
            p = board[t]
            if p is None:
                continue
            if p.color is by_color and p.piece_type in (PieceType.ROOK, PieceType.QUEEN):
                return True
            break

    king = Piece(PieceType.KING, by_color)
    for origin in KING_TARGETS[sq]:
        if board[origin] == king:
            return True
    return False


def find_king(position: Position, color: Color) -> Optional[int]:
    king = Piece(PieceType.KING, color)
    for sq, p in enumerate(position.board):
        if p == king:
            return sq
    return None


def in_check(position: Position, color: Optional[Color] = None) -> bool:
    """Is ``color`` (default: side to move) in check? False if it has no king."""
    if color is None:
        color = position.turn
    king_sq = find_king(position, color)
    if king_sq is None:
        return False
    return is_attacked(position, king_sq, color.other)
