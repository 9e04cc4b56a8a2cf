from dataclasses import dataclass

from .geometry import base_slot, home_cell
from .types import Player


@dataclass(slots=True)
class Piece:
    """Lightweight piece model. Holds state only.

    Rule logic (eligibility, stepping, captures) is handled by the engine,
    not the piece.
    """

    player: Player
    piece_id: int  # 0..3 per player
    position: int = -1  # replaced by the piece's own base slot

    def __post_init__(self) -> None:
        self.player = Player(self.player)
        if self.position == -1:
            self.position = base_slot(self.player, self.piece_id)

    def move_to(self, new_position: int) -> None:
        self.position = new_position

    def send_home(self) -> None:
        """Back to the base slot matching this piece's index."""
        self.position = base_slot(self.player, self.piece_id)

    def is_home(self) -> bool:
        return self.position == home_cell(self.player)
