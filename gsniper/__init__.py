"""GSniper: chess rules engine with minimax/alpha-beta search and a genome-weighted evaluator."""

__version__ = "1.0.0"
