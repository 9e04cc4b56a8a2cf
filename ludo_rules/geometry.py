"""
Board geometry for the four-player board.
Pure lookup tables: base slots, start cells, turning points, home lanes and
the safe cells of the shared ring. No rule logic lives here.
"""

from typing import Dict, FrozenSet, Tuple

from .config import config
from .types import Player, PositionKind

LAST_RING_CELL = config.RING_SIZE - 1

BASE_POSITIONS: Dict[Player, Tuple[int, ...]] = {
    Player.P1: (500, 501, 502, 503),
    Player.P2: (600, 601, 602, 603),
    Player.P3: (700, 701, 702, 703),
    Player.P4: (800, 801, 802, 803),
}

START_POSITIONS: Dict[Player, int] = {
    Player.P1: 0,
    Player.P2: 13,
    Player.P3: 26,
    Player.P4: 39,
}

# Last ring cell before leaving the ring into the player's own lane
TURNING_POINTS: Dict[Player, int] = {
    Player.P1: 50,
    Player.P2: 11,
    Player.P3: 24,
    Player.P4: 37,
}

HOME_ENTRANCE: Dict[Player, Tuple[int, ...]] = {
    Player.P1: (100, 101, 102, 103, 104),
    Player.P2: (200, 201, 202, 203, 204),
    Player.P3: (300, 301, 302, 303, 304),
    Player.P4: (400, 401, 402, 403, 404),
}

HOME_POSITIONS: Dict[Player, int] = {
    Player.P1: 105,
    Player.P2: 205,
    Player.P3: 305,
    Player.P4: 405,
}

# Start cells plus the star cells
SAFE_POSITIONS: FrozenSet[int] = frozenset({0, 8, 13, 21, 26, 34, 39, 47})


def base_slots(player: Player) -> Tuple[int, ...]:
    return BASE_POSITIONS[Player(player)]


def base_slot(player: Player, piece_id: int) -> int:
    """Original base slot of a piece, where it returns when captured."""
    return BASE_POSITIONS[Player(player)][piece_id]


def start_cell(player: Player) -> int:
    return START_POSITIONS[Player(player)]


def turning_point(player: Player) -> int:
    return TURNING_POINTS[Player(player)]


def home_entrance(player: Player) -> Tuple[int, ...]:
    return HOME_ENTRANCE[Player(player)]


def home_lane(player: Player) -> Tuple[int, ...]:
    """Ordered private cells from the first lane cell up to and including home."""
    player = Player(player)
    return HOME_ENTRANCE[player] + (HOME_POSITIONS[player],)


def home_cell(player: Player) -> int:
    return HOME_POSITIONS[Player(player)]


def is_ring_cell(cell: int) -> bool:
    return 0 <= cell <= LAST_RING_CELL


def is_safe_cell(cell: int) -> bool:
    return cell in SAFE_POSITIONS


def position_kind(player: Player, position: int) -> PositionKind | None:
    """Classify a position from the point of view of its owner.

    Returns None when the position is not legal for ``player`` (for instance
    another player's lane cell).
    """
    player = Player(player)
    if position in BASE_POSITIONS[player]:
        return PositionKind.BASE
    if position == HOME_POSITIONS[player]:
        return PositionKind.HOME
    if position in HOME_ENTRANCE[player]:
        return PositionKind.LANE
    if is_ring_cell(position):
        return PositionKind.RING
    return None


def lane_distance(player: Player, position: int) -> int:
    """Cells left between a lane position and home (0 at home)."""
    return HOME_POSITIONS[Player(player)] - position


def owner_of(position: int) -> Player | None:
    """Owner of a private cell (base, lane or home); None for ring cells."""
    for player in Player:
        if (
            position in BASE_POSITIONS[player]
            or position in HOME_ENTRANCE[player]
            or position == HOME_POSITIONS[player]
        ):
            return player
    return None
