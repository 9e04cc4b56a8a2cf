"""
Terminal adapter for hot-seat play.
Forwards typed commands to the engine and prints its notifications.
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Callable, Optional, Sequence, TextIO, Tuple

from loguru import logger

from .config import Config, config
from .engine import LudoEngine
from .events import GameListener, LoggingListener
from .geometry import position_kind
from .types import Player, PositionKind, TurnState

HELP_TEXT = "Commands: r = roll, 0-3 = move piece, reset, board, help, q = quit"


def parse_command(text: str) -> Tuple[str, Optional[int]]:
    """Map a typed line to (action, piece_id). Unknown input maps to ("unknown", None)."""
    cmd = text.strip().lower()
    if cmd in ("r", "roll"):
        return "roll", None
    if cmd in ("q", "quit", "exit"):
        return "quit", None
    if cmd in ("reset", "board", "help"):
        return cmd, None
    if cmd.isdigit() and 0 <= int(cmd) < config.PIECES_PER_PLAYER:
        return "select", int(cmd)
    return "unknown", None


def describe_position(player: Player, position: int) -> str:
    kind = position_kind(player, position)
    if kind is PositionKind.BASE:
        return "base"
    if kind is PositionKind.HOME:
        return "HOME"
    if kind is PositionKind.LANE:
        return f"lane {position}"
    return f"cell {position}"


class ConsoleListener(GameListener):
    def __init__(self, out: TextIO = sys.stdout, step_delay: float = 0.0) -> None:
        self.out = out
        self.step_delay = step_delay
        self.moving = False

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def dice_value_changed(self, value: int) -> None:
        self._print(f"Rolled a {value}")

    def turn_changed(self, player: Player) -> None:
        self._print(f"--- {player.label} to play ---")

    def eligible_pieces_changed(self, player: Player, pieces: Sequence[int]) -> None:
        if pieces:
            self._print(f"{player.label} can move: {', '.join(str(p) for p in pieces)}")

    def piece_position_changed(self, player: Player, piece_id: int, position: int) -> None:
        if not self.moving:
            return
        self._print(f"  {player.label}[{piece_id}] -> {describe_position(player, position)}")
        if self.step_delay:
            time.sleep(self.step_delay)

    def player_won(self, player: Player) -> None:
        self._print(f"*** {player.label} wins! ***")


def render_board(engine: LudoEngine) -> str:
    lines = []
    for player in Player:
        cells = [
            describe_position(player, pc.position) for pc in engine.state.pieces[player]
        ]
        marker = ">" if player == engine.current_player else " "
        lines.append(f"{marker} {player.label}: " + " | ".join(cells))
    return "\n".join(lines)


def run_session(
    engine: LudoEngine,
    read_line: Callable[[], str],
    listener: ConsoleListener,
) -> None:
    """Read commands until quit or end of input."""
    listener._print(HELP_TEXT)
    listener._print(render_board(engine))
    while True:
        try:
            line = read_line()
        except EOFError:
            break
        action, piece_id = parse_command(line)
        if action == "quit":
            break
        if action == "help":
            listener._print(HELP_TEXT)
        elif action == "board":
            listener._print(render_board(engine))
        elif action == "reset":
            engine.reset_game()
            listener._print(render_board(engine))
        elif action == "roll":
            if engine.request_roll() is None:
                listener._print("Cannot roll now")
        elif action == "select":
            listener.moving = True
            try:
                result = engine.request_piece_selection(engine.current_player, piece_id)
            finally:
                listener.moving = False
            if result is None:
                listener._print(f"Piece {piece_id} cannot move")
            else:
                if result.events.knockouts:
                    listener._print(f"Captured {len(result.events.knockouts)} piece(s)")
                if result.extra_turn and engine.state.state is TurnState.AWAITING_ROLL:
                    listener._print(f"{result.player.label} rolls again")
        else:
            listener._print(f"Unknown command: {line.strip()!r}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Hot-seat four player Ludo in the terminal",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=config.SEED, help="Dice random seed")
    parser.add_argument(
        "--step-delay",
        type=float,
        default=config.STEP_INTERVAL_MS / 1000.0,
        help="Seconds between rendered steps of a move",
    )
    parser.add_argument(
        "--freeze-on-win",
        action="store_true",
        default=config.FREEZE_ON_WIN,
        help="Ignore rolls and selections once a player has won",
    )
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL, help="Log level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    settings = Config(FREEZE_ON_WIN=args.freeze_on_win, SEED=args.seed)
    engine = LudoEngine(settings=settings)
    listener = ConsoleListener(step_delay=args.step_delay)
    engine.subscribe(LoggingListener())
    engine.subscribe(listener)

    run_session(engine, lambda: input("> "), listener)


if __name__ == "__main__":
    main()
