"""Play against the engine in a terminal."""

import argparse
import logging

from gsniper.config import CONFIG
from gsniper.core.board import Color
from gsniper.core.exceptions import IllegalMoveError
from gsniper.core.fen import STARTING_FEN
from gsniper.core.utils import move_to_algebraic
from gsniper.main import Engine


def play(engine: Engine, human: Color = Color.WHITE, input_fn=None) -> str:
    """Run a game loop until it ends or the player types 'quit'. Returns the result text."""
    input_fn = input_fn or input
    while not engine.is_game_over():
        engine.print_board()
        print("----------------------------")

        if engine.position.turn is human:
            user_move = input_fn("Enter your move (uci format, e2e4): ").strip()
            if user_move == "quit":
                return "Aborted"
            try:
                engine.push_uci(user_move)
            except IllegalMoveError:
                print("Illegal move, try again.")
                continue
        else:
            move = engine.find_best_move()
            score = engine.last_search.score
            print(f"Engine plays: {move_to_algebraic(move)} | Eval: {score:.2f}")
            engine.make_move(move)

    print("Game Over")
    print(f"Result: {engine.result()}")
    return engine.result()


def main(argv=None):
    parser = argparse.ArgumentParser(description=f"{CONFIG.ui.engine_name} terminal game")
    parser.add_argument("--fen", default=STARTING_FEN)
    parser.add_argument("--depth", type=int, default=CONFIG.search.depth)
    parser.add_argument("--black", action="store_true", help="play the black pieces")
    args = parser.parse_args(argv)

    logging.basicConfig(level=CONFIG.log_level)
    engine = Engine(args.fen, depth=args.depth)
    play(engine, Color.BLACK if args.black else Color.WHITE)


if __name__ == "__main__":
    main()
