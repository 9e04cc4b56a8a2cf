import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass(slots=True)
class Config:
    # --- Constants ---
    NUM_PLAYERS: int = 4
    PIECES_PER_PLAYER: int = 4
    RING_SIZE: int = 52  # shared cells 0..51
    DICE_FACES: int = 6
    EXIT_ROLL: int = 6  # only roll that leaves base, also grants another roll

    # --- Runtime (env) ---
    STEP_INTERVAL_MS: int = int(os.getenv("LUDO_STEP_INTERVAL_MS", 200))
    FREEZE_ON_WIN: bool = bool(int(os.getenv("LUDO_FREEZE_ON_WIN", 0)))
    SEED: int | None = _optional_int("LUDO_SEED")
    LOG_LEVEL: str = os.getenv("LUDO_LOG_LEVEL", "INFO")

    def __post_init__(self):
        if self.STEP_INTERVAL_MS < 0:
            raise ValueError("STEP_INTERVAL_MS must be non-negative")
        if self.NUM_PLAYERS != 4 or self.PIECES_PER_PLAYER != 4:
            raise ValueError("Board geometry is defined for 4 players with 4 pieces")


config = Config()
