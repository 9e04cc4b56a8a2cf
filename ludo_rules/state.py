from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .config import config
from .piece import Piece
from .types import Player, TurnState


def _fresh_pieces() -> Dict[Player, List[Piece]]:
    return {
        player: [Piece(player=player, piece_id=i) for i in range(config.PIECES_PER_PLAYER)]
        for player in Player
    }


@dataclass(slots=True)
class GameState:
    """Mutable game state. Written by the engine only, read by adapters."""

    pieces: Dict[Player, List[Piece]] = field(default_factory=_fresh_pieces)
    turn: int = 0
    dice_value: Optional[int] = None
    state: TurnState = TurnState.AWAITING_ROLL
    eligible: List[int] = field(default_factory=list)
    winners: List[Player] = field(default_factory=list)
    move_in_progress: bool = False
    # Bumped on reset so that an in-flight move can detect it was aborted
    generation: int = 0

    @property
    def current_player(self) -> Player:
        return Player(self.turn)

    @property
    def current_positions(self) -> Dict[Player, List[int]]:
        return {
            player: [pc.position for pc in pieces]
            for player, pieces in self.pieces.items()
        }

    def piece(self, player: Player, piece_id: int) -> Piece:
        return self.pieces[Player(player)][piece_id]

    def position(self, player: Player, piece_id: int) -> int:
        return self.piece(player, piece_id).position

    def set_position(self, player: Player, piece_id: int, position: int) -> None:
        self.piece(player, piece_id).move_to(position)

    def reset(self) -> None:
        self.pieces = _fresh_pieces()
        self.turn = 0
        self.dice_value = None
        self.state = TurnState.AWAITING_ROLL
        self.eligible = []
        self.winners = []
        self.move_in_progress = False
        self.generation += 1

    def as_array(self) -> np.ndarray:
        """Return a (4, 4) int64 array of positions, rows in turn order."""
        return np.asarray(
            [[pc.position for pc in self.pieces[player]] for player in Player],
            dtype=np.int64,
        )
