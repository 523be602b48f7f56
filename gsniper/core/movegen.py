"""Pseudo-legal and legal move generation."""

from typing import Callable, Dict, Iterator, List

from .attacks import (
    DIAGONAL_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    STRAIGHT_RAYS,
    find_king,
    is_attacked,
    pawn_attack_squares,
)
from .board import (
    A1,
    A8,
    E1,
    E8,
    H1,
    H8,
    PROMOTION_TYPES,
    CastleSide,
    Color,
    Move,
    Piece,
    PieceType,
    Position,
    square_rank,
)
from .executor import apply_move

# color -> (king home, [(side, rook home, squares that must be empty, squares that must be safe)])
CASTLING_PATHS = {
    Color.WHITE: (E1, [
        (CastleSide.KING, H1, (5, 6), (4, 5, 6)),
        (CastleSide.QUEEN, A1, (3, 2, 1), (4, 3, 2)),
    ]),
    Color.BLACK: (E8, [
        (CastleSide.KING, H8, (61, 62), (60, 61, 62)),
        (CastleSide.QUEEN, A8, (59, 58, 57), (60, 59, 58)),
    ]),
}


def _pawn_moves(position: Position, sq: int, piece: Piece) -> Iterator[Move]:
    board = position.board
    color = piece.color
    step = 8 if color is Color.WHITE else -8
    start_rank = 1 if color is Color.WHITE else 6
    last_rank = 7 if color is Color.WHITE else 0

    ahead = sq + step
    if 0 <= ahead < 64 and board[ahead] is None:
        if square_rank(ahead) == last_rank:
            for promo in PROMOTION_TYPES:
                yield Move(sq, ahead, piece, promotion=promo)
        else:
            yield Move(sq, ahead, piece)
        two = ahead + step
        if square_rank(sq) == start_rank and board[two] is None:
            yield Move(sq, two, piece, double_push=True)

    for target in pawn_attack_squares(sq, color):
        victim = board[target]
        if victim is not None and victim.color is not color:
            if square_rank(target) == last_rank:
                for promo in PROMOTION_TYPES:
                    yield Move(sq, target, piece, captured=victim, promotion=promo)
            else:
                yield Move(sq, target, piece, captured=victim)
        elif victim is None and target == position.ep_square:
            enemy_pawn = Piece(PieceType.PAWN, color.other)
            # the pawn that just double-pushed stands beside the capturer
            if board[target - step] == enemy_pawn:
                yield Move(sq, target, piece, captured=enemy_pawn, en_passant=True)


def _step_moves(position: Position, sq: int, piece: Piece, targets: List[int]) -> Iterator[Move]:
    board = position.board
    for target in targets:
        victim = board[target]
        if victim is None:
            yield Move(sq, target, piece)
        elif victim.color is not piece.color:
            yield Move(sq, target, piece, captured=victim)


def _slide_moves(position: Position, sq: int, piece: Piece, rays: List[List[int]]) -> Iterator[Move]:
    board = position.board
    for ray in rays:
        for target in ray:
            victim = board[target]
            if victim is None:
                yield Move(sq, target, piece)
                continue
            if victim.color is not piece.color:
                yield Move(sq, target, piece, captured=victim)
            break


def _knight_moves(position: Position, sq: int, piece: Piece) -> Iterator[Move]:
    return _step_moves(position, sq, piece, KNIGHT_TARGETS[sq])


def _bishop_moves(position: Position, sq: int, piece: Piece) -> Iterator[Move]:
    return _slide_moves(position, sq, piece, DIAGONAL_RAYS[sq])


def _rook_moves(position: Position, sq: int, piece: Piece) -> Iterator[Move]:
    return _slide_moves(position, sq, piece, STRAIGHT_RAYS[sq])


def _queen_moves(position: Position, sq: int, piece: Piece) -> Iterator[Move]:
    return _slide_moves(position, sq, piece, DIAGONAL_RAYS[sq] + STRAIGHT_RAYS[sq])


def _king_moves(position: Position, sq: int, piece: Piece) -> Iterator[Move]:
    yield from _step_moves(position, sq, piece, KING_TARGETS[sq])

    color = piece.color
    home, paths = CASTLING_PATHS[color]
    if sq != home:
        return
    board = position.board
    rook = Piece(PieceType.ROOK, color)
    enemy = color.other
    for side, rook_home, empty, safe in paths:
        if not position.castling.has(color, side) or board[rook_home] != rook:
            continue
        if any(board[s] is not None for s in empty):
            continue
        if any(is_attacked(position, s, enemy) for s in safe):
            continue
        yield Move(sq, safe[-1], piece, castle=side)


GENERATORS: Dict[PieceType, Callable[[Position, int, Piece], Iterator[Move]]] = {
    PieceType.PAWN: _pawn_moves,
    PieceType.KNIGHT: _knight_moves,
    PieceType.BISHOP: _bishop_moves,
    PieceType.ROOK: _rook_moves,
    PieceType.QUEEN: _queen_moves,
    PieceType.KING: _king_moves,
}


def generate_pseudo_legal_moves(position: Position) -> Iterator[Move]:
    """Moves obeying piece movement rules; may leave the own king attacked."""
    turn = position.turn
    for sq, piece in enumerate(position.board):
        if piece is None or piece.color is not turn:
            continue
        yield from GENERATORS[piece.piece_type](position, sq, piece)


def pseudo_legal_moves(position: Position) -> List[Move]:
    return list(generate_pseudo_legal_moves(position))


def is_legal_after(position: Position, move: Move) -> bool:
    """Apply ``move`` to a copy and check the mover's king is present and safe."""
    child = position.copy()
    apply_move(child, move)
    mover = position.turn
    king_sq = find_king(child, mover)
    if king_sq is None:
        return False
    return not is_attacked(child, king_sq, mover.other)


def generate_legal_moves(position: Position) -> Iterator[Move]:
    for move in generate_pseudo_legal_moves(position):
        if is_legal_after(position, move):
            yield move


def legal_moves(position: Position) -> List[Move]:
    return list(generate_legal_moves(position))


def has_legal_move(position: Position) -> bool:
    return any(True for _ in generate_legal_moves(position))


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes of the legal move tree to ``depth`` plies."""
    if depth <= 0:
        return 1
    moves = legal_moves(position)
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        child = position.copy()
        apply_move(child, move)
        nodes += perft(child, depth - 1)
    return nodes
