from __future__ import annotations

from typing import Sequence

from loguru import logger

from .types import Player, TurnState


class GameListener:
    """Engine -> adapter notifications.

    Every hook is a no-op; adapters override the ones they render. Hooks are
    called after the whole transition has been committed, so a hook may call
    back into the engine.
    """

    def dice_value_changed(self, value: int) -> None:
        pass

    def turn_changed(self, player: Player) -> None:
        pass

    def state_changed(self, state: TurnState) -> None:
        pass

    def eligible_pieces_changed(self, player: Player, pieces: Sequence[int]) -> None:
        pass

    def piece_position_changed(self, player: Player, piece_id: int, position: int) -> None:
        pass

    def player_won(self, player: Player) -> None:
        pass


class LoggingListener(GameListener):
    def dice_value_changed(self, value: int) -> None:
        logger.debug(f"Dice rolled: {value}")

    def turn_changed(self, player: Player) -> None:
        logger.debug(f"Turn: {player.label}")

    def state_changed(self, state: TurnState) -> None:
        logger.debug(f"State: {state.value}")

    def eligible_pieces_changed(self, player: Player, pieces: Sequence[int]) -> None:
        logger.debug(f"Eligible pieces for {player.label}: {list(pieces)}")

    def piece_position_changed(self, player: Player, piece_id: int, position: int) -> None:
        logger.debug(f"{player.label} piece {piece_id} -> {position}")

    def player_won(self, player: Player) -> None:
        logger.info(f"{player.label} has won")


class ListenerGroup:
    """Fan-out of notifications to subscribed listeners, in subscription order."""

    def __init__(self) -> None:
        self._listeners: list[GameListener] = []

    def add(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, hook: str, *args) -> None:
        for listener in list(self._listeners):
            getattr(listener, hook)(*args)
