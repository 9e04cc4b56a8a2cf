"""
Ludo rules engine.
Four-player turn sequencing, dice-driven movement, captures and win detection.
"""

from .config import Config, config
from .engine import LudoEngine, PieceMove
from .events import GameListener, LoggingListener
from .exceptions import IllegalActionError, InvariantViolation, LudoError
from .piece import Piece
from .state import GameState
from .types import MoveEvents, MoveResult, Player, PositionKind, TurnState

__all__ = [
    "Config",
    "config",
    "LudoEngine",
    "PieceMove",
    "GameListener",
    "LoggingListener",
    "GameState",
    "Piece",
    "Player",
    "PositionKind",
    "TurnState",
    "MoveEvents",
    "MoveResult",
    "LudoError",
    "IllegalActionError",
    "InvariantViolation",
]
