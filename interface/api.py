"""FastAPI REST interface: one independent engine session per game id."""

import threading
import uuid
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from gsniper import __version__
from gsniper.config import CONFIG
from gsniper.core.board import Color
from gsniper.core.exceptions import FormatError, IllegalMoveError
from gsniper.core.fen import STARTING_FEN
from gsniper.core.utils import move_to_algebraic
from gsniper.main import Engine

app = FastAPI(title=CONFIG.ui.engine_name, version=__version__)


class _Game:
    def __init__(self, engine: Engine):
        self.engine = engine
        self.lock = threading.Lock()


# Registry of sessions; each session is only touched under its own lock.
_games: Dict[str, _Game] = {}
_registry_lock = threading.Lock()


class NewGameRequest(BaseModel):
    fen: str = STARTING_FEN
    genome: Optional[Dict[str, float]] = None
    depth: Optional[int] = Field(default=None, ge=1)


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1)


def _get_game(game_id: str) -> _Game:
    with _registry_lock:
        game = _games.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return game


def _board_state(game_id: str, engine: Engine) -> dict:
    status = engine.status()
    return {
        "id": game_id,
        "fen": engine.fen(),
        "turn": "white" if engine.position.turn is Color.WHITE else "black",
        "legal_moves": [m.uci() for m in engine.legal_moves()],
        "history": [m.uci() for m in engine.move_history],
        "is_check": engine.is_check(),
        "is_game_over": status.is_over,
        "result": status.describe() if status.is_over else None,
    }


@app.post("/games")
def create_game(req: NewGameRequest = NewGameRequest()):
    try:
        engine = Engine(req.fen, genome=req.genome, depth=req.depth)
    except FormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    game_id = uuid.uuid4().hex
    with _registry_lock:
        _games[game_id] = _Game(engine)
    return _board_state(game_id, engine)


@app.get("/games/{game_id}")
def get_board(game_id: str):
    game = _get_game(game_id)
    with game.lock:
        return _board_state(game_id, game.engine)


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    with _registry_lock:
        if _games.pop(game_id, None) is None:
            raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return {"deleted": game_id}


@app.post("/games/{game_id}/position")
def set_position(game_id: str, req: FenRequest):
    game = _get_game(game_id)
    with game.lock:
        try:
            game.engine.reset(req.fen)
        except FormatError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": game.engine.fen()}


@app.post("/games/{game_id}/move")
def make_move(game_id: str, req: MoveRequest):
    game = _get_game(game_id)
    with game.lock:
        try:
            move = game.engine.push_uci(req.move)
        except IllegalMoveError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"fen": game.engine.fen(), "move": move.uci(), "san": move_to_algebraic(move)}


@app.post("/games/{game_id}/search")
def search_move(game_id: str, req: SearchRequest = SearchRequest()):
    game = _get_game(game_id)
    with game.lock:
        engine = game.engine
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        engine.find_best_move(req.depth)
        result = engine.last_search
    return {
        "best_move": result.move.uci() if result.move else None,
        "score": result.score,
        "pv": [m.uci() for m in result.pv],
        "nodes": result.nodes,
        "pruned": result.pruned,
        "depth": result.depth,
    }


@app.get("/games/{game_id}/evaluate")
def evaluate(game_id: str):
    game = _get_game(game_id)
    with game.lock:
        ev = game.engine.evaluate()
    return {
        "material": ev.material,
        "positional": ev.positional,
        "total": ev.total,
        "features": ev.features,
        "terminal": ev.terminal,
    }


@app.post("/games/{game_id}/reset")
def reset_board(game_id: str):
    game = _get_game(game_id)
    with game.lock:
        game.engine.reset()
        return {"fen": game.engine.fen()}
