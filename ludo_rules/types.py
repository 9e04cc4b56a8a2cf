from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List


class Player(IntEnum):
    P1 = 0
    P2 = 1
    P3 = 2
    P4 = 3

    @property
    def label(self) -> str:
        return self.name


class TurnState(Enum):
    AWAITING_ROLL = "awaiting_roll"  # dice enabled, nothing highlighted
    AWAITING_MOVE = "awaiting_move"  # dice disabled, eligible pieces highlighted


class PositionKind(Enum):
    BASE = "base"
    RING = "ring"
    LANE = "lane"
    HOME = "home"


@dataclass(slots=True)
class MoveEvents:
    exited_base: bool = False
    reached_home: bool = False
    won: bool = False
    knockouts: List[Dict[str, int]] = field(default_factory=list)


@dataclass(slots=True)
class MoveResult:
    player: Player
    piece_id: int
    dice_roll: int
    old_position: int
    new_position: int
    path: List[int]
    events: MoveEvents
    extra_turn: bool
