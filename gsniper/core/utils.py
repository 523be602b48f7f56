from .board import CastleSide, Move, square_name


def move_to_algebraic(m: Move) -> str:
    """Readable coordinate notation: 'e2e4', 'exd5', 'O-O', 'e7e8=Q'."""
    frm = square_name(m.from_square)
    to = square_name(m.to_square)
    if m.castle is not None:
        return "O-O" if m.castle is CastleSide.KING else "O-O-O"
    s = frm[0] + "x" + to if m.captured is not None else frm + to
    if m.promotion is not None:
        s += "=" + m.promotion.symbol.upper()
    if m.en_passant:
        s += " e.p."
    return s


def format_search_info(depth, score, nodes, pruned, elapsed_ms, pv_moves, mate_score):
    pv_str = " ".join(m.uci() for m in pv_moves)
    nps = int(nodes * 1000 / elapsed_ms) if elapsed_ms > 0 else 0

    if abs(score) >= mate_score:
        score_str = "mate white" if score > 0 else "mate black"
    else:
        score_str = f"cp {score:g}"

    return (
        f"info depth {depth} score {score_str} nodes {nodes} pruned {pruned} "
        f"nps {nps} time {int(elapsed_ms)} pv {pv_str}"
    )
