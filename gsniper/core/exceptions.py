"""Error kinds raised by the rules core."""


class GSniperError(Exception):
    """Base class for engine errors."""


class FormatError(GSniperError, ValueError):
    """Malformed FEN text."""


class IllegalMoveError(GSniperError, ValueError):
    """A move that is not in the current legal move list."""
