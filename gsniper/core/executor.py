"""Apply a generated move to a position in place."""

from .board import (
    A1,
    A8,
    H1,
    H8,
    CastleSide,
    Color,
    Move,
    Piece,
    PieceType,
    Position,
    square,
    square_file,
    square_rank,
)

# Home corner -> (color, side) whose right depends on the rook standing there.
ROOK_HOMES = {
    A1: (Color.WHITE, CastleSide.QUEEN),
    H1: (Color.WHITE, CastleSide.KING),
    A8: (Color.BLACK, CastleSide.QUEEN),
    H8: (Color.BLACK, CastleSide.KING),
}


def apply_move(position: Position, move: Move) -> None:
    """Mutate ``position`` by ``move``.

    The move must come from the generator for this exact position; no
    legality check is done here.
    """
    board = position.board
    piece = board[move.from_square]
    board[move.from_square] = None

    if move.en_passant:
        # captured pawn sits beside the mover, not on the target square
        captured_sq = square(square_file(move.to_square), square_rank(move.from_square))
        board[captured_sq] = None

    if move.castle is not None:
        rank = square_rank(move.to_square)
        if move.castle is CastleSide.KING:
            rook_from, rook_to = square(7, rank), square(5, rank)
        else:
            rook_from, rook_to = square(0, rank), square(3, rank)
        board[move.to_square] = piece
        board[rook_to] = board[rook_from]
        board[rook_from] = None
    elif move.promotion is not None:
        board[move.to_square] = Piece(move.promotion, piece.color)
    else:
        board[move.to_square] = piece

    # castling rights
    rights = position.castling
    if piece.piece_type is PieceType.KING:
        rights = rights.without(piece.color)
    if piece.piece_type is PieceType.ROOK and move.from_square in ROOK_HOMES:
        color, side = ROOK_HOMES[move.from_square]
        if color is piece.color:
            rights = rights.without(color, side)
    if move.captured is not None and move.captured.piece_type is PieceType.ROOK and move.to_square in ROOK_HOMES:
        color, side = ROOK_HOMES[move.to_square]
        if color is move.captured.color:
            rights = rights.without(color, side)
    position.castling = rights

    position.ep_square = None
    if move.double_push:
        position.ep_square = (move.from_square + move.to_square) // 2

    if piece.piece_type is PieceType.PAWN or move.captured is not None:
        position.halfmove_clock = 0
    else:
        position.halfmove_clock += 1
    if position.turn is Color.BLACK:
        position.fullmove_number += 1
    position.turn = position.turn.other
