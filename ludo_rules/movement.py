"""
Movement algorithm: single-step successor of a position and the ordered
sequence of cells visited by a multi-step move. Pure functions, no state.
"""

from typing import Iterator, List

from .exceptions import InvariantViolation
from .geometry import (
    LAST_RING_CELL,
    home_cell,
    home_entrance,
    position_kind,
    turning_point,
)
from .types import Player, PositionKind


def next_ring_cell(cell: int) -> int:
    """Successor on the bare 52-cell ring (no lane entry)."""
    return 0 if cell == LAST_RING_CELL else cell + 1


def next_cell(player: Player, position: int) -> int:
    """Cell reached by moving a piece of ``player`` one step from ``position``."""
    kind = position_kind(player, position)
    if kind is PositionKind.RING:
        if position == turning_point(player):
            return home_entrance(player)[0]
        return next_ring_cell(position)
    if kind is PositionKind.LANE:
        # last lane cell + 1 is the home cell
        return position + 1
    raise InvariantViolation(
        f"Cannot step {Player(player).label} piece from position {position} ({kind})"
    )


def iter_path(player: Player, position: int, steps: int) -> Iterator[int]:
    """Yield every cell visited, in order, for a move of ``steps`` cells."""
    if steps < 0:
        raise ValueError("steps must be non-negative")
    current = position
    for _ in range(steps):
        if current == home_cell(player):
            raise InvariantViolation(
                f"{Player(player).label} move from {position} by {steps} overshoots home"
            )
        current = next_cell(player, current)
        yield current


def path(player: Player, position: int, steps: int) -> List[int]:
    return list(iter_path(player, position, steps))


def destination(player: Player, position: int, steps: int) -> int:
    """Final cell of a move; ``position`` itself when ``steps`` is 0."""
    final = position
    for final in iter_path(player, position, steps):
        pass
    return final
