from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from loguru import logger

from .config import Config, config
from .events import GameListener, ListenerGroup
from .exceptions import IllegalActionError, InvariantViolation
from .geometry import (
    home_cell,
    is_ring_cell,
    is_safe_cell,
    lane_distance,
    position_kind,
    start_cell,
)
from .movement import destination, iter_path
from .state import GameState
from .types import MoveEvents, MoveResult, Player, PositionKind, TurnState


class PieceMove:
    """A selected move, consumed one cell at a time.

    Each ``next()`` commits one step to the game state and returns the cell
    reached, so an adapter can pace rendering itself. Once exhausted the
    engine resolves the move (win, captures, turn) and ``result`` is set. A
    reset while the move is in flight aborts it: iteration stops and
    ``result`` stays None.
    """

    def __init__(
        self, engine: "LudoEngine", player: Player, piece_id: int, dice_roll: int
    ) -> None:
        self.player = player
        self.piece_id = piece_id
        self.dice_roll = dice_roll
        self.old_position = engine.state.position(player, piece_id)
        self.path: List[int] = []
        self.result: Optional[MoveResult] = None
        self.aborted = False
        self._resolved = False
        self._engine = engine
        self._generation = engine.state.generation
        if position_kind(player, self.old_position) is PositionKind.BASE:
            self.target = start_cell(player)
            self._steps = engine._exit_base(player, piece_id)
        else:
            self.target = destination(player, self.old_position, dice_roll)
            self._steps = engine.advance(player, piece_id, dice_roll)

    def __iter__(self) -> "PieceMove":
        return self

    def __next__(self) -> int:
        if self._resolved or self.aborted:
            raise StopIteration
        if self._engine.state.generation != self._generation:
            self.aborted = True
            self._steps.close()
            raise StopIteration
        try:
            position = next(self._steps)
        except StopIteration:
            # resolve once, even if a listener raises during resolution
            self._resolved = True
            self.result = self._engine._complete_move(self)
            if self.result is None:
                self.aborted = True
            raise
        self.path.append(position)
        return position

    @property
    def done(self) -> bool:
        return self._resolved or self.aborted

    def run(self) -> Optional[MoveResult]:
        for _ in self:
            pass
        return self.result


Notification = Tuple  # (hook, *args)


@dataclass(slots=True)
class LudoEngine:
    """Rules engine: turn sequencing, eligibility, movement, captures and wins.

    Every transition commits its whole state change first and only then
    notifies listeners, so a listener may act on the engine (roll, select,
    reset) from inside a hook. Once a listener has moved the game on, the
    remaining notifications of the outer transition are stale and dropped.
    """

    state: GameState = field(default_factory=GameState)
    settings: Config = field(default_factory=lambda: config)
    rng: random.Random | None = None
    listeners: ListenerGroup = field(default_factory=ListenerGroup, init=False, repr=False)
    _revision: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.settings.SEED)

    # --- Listeners ---
    def subscribe(self, listener: GameListener) -> None:
        self.listeners.add(listener)

    def unsubscribe(self, listener: GameListener) -> None:
        self.listeners.remove(listener)

    def _emit(self, hook: str, *args) -> None:
        self.listeners.emit(hook, *args)

    def _commit(self) -> int:
        """Mark a committed transition; returns its revision."""
        self._revision += 1
        return self._revision

    def _publish(self, revision: int, notifications: List[Notification]) -> bool:
        """Send the notifications of the transition committed at ``revision``.

        Stops as soon as a listener commits a newer transition. Returns True
        when every notification was delivered.
        """
        for hook, *args in notifications:
            if self._revision != revision:
                return False
            self._emit(hook, *args)
        return self._revision == revision

    # --- Queries ---
    @property
    def current_player(self) -> Player:
        return self.state.current_player

    @property
    def frozen(self) -> bool:
        """True once somebody has won and the config asks to lock input."""
        return self.settings.FREEZE_ON_WIN and bool(self.state.winners)

    def get_eligible_pieces(self, player: Player) -> List[int]:
        player = Player(player)
        dice = self.state.dice_value
        if dice is None:
            return []
        eligible: List[int] = []
        for pc in self.state.pieces[player]:
            kind = position_kind(player, pc.position)
            if kind is None:
                raise InvariantViolation(
                    f"{player.label} piece {pc.piece_id} at illegal position {pc.position}"
                )
            if kind is PositionKind.HOME:
                continue
            if kind is PositionKind.BASE and dice != self.settings.EXIT_ROLL:
                continue
            # no overshoot past home
            if kind is PositionKind.LANE and dice > lane_distance(player, pc.position):
                continue
            eligible.append(pc.piece_id)
        return eligible

    def has_player_won(self, player: Player) -> bool:
        return all(pc.is_home() for pc in self.state.pieces[Player(player)])

    # --- Transitions ---
    def roll_dice(self, dice: int | None = None) -> int:
        """Roll for the active player, or use ``dice`` when given.

        Raises IllegalActionError outside AWAITING_ROLL.
        """
        self._ensure_can_act(TurnState.AWAITING_ROLL)
        value = dice if dice is not None else self.rng.randint(1, self.settings.DICE_FACES)
        if not 1 <= value <= self.settings.DICE_FACES:
            raise ValueError(f"Dice value must be in 1..{self.settings.DICE_FACES}, got {value}")

        player = self.current_player
        self.state.dice_value = value
        eligible = self.get_eligible_pieces(player)
        logger.debug(f"{player.label} rolled {value}, eligible pieces: {eligible}")
        notifications: List[Notification] = [("dice_value_changed", value)]
        if eligible:
            self.state.eligible = eligible
            self.state.state = TurnState.AWAITING_MOVE
            notifications += [
                ("state_changed", TurnState.AWAITING_MOVE),
                ("eligible_pieces_changed", player, list(eligible)),
            ]
        else:
            notifications += self._pass_turn()

        self._publish(self._commit(), notifications)
        return value

    def begin_move(self, player: Player, piece_id: int) -> PieceMove:
        """Start moving an eligible piece; the caller drives the returned steps."""
        self._ensure_can_act(TurnState.AWAITING_MOVE)
        try:
            player = Player(player)
        except ValueError as e:
            raise IllegalActionError(f"Unknown player: {player}") from e
        if player != self.current_player:
            raise IllegalActionError(
                f"It is {self.current_player.label}'s turn, not {player.label}'s"
            )
        if piece_id not in self.state.eligible:
            raise IllegalActionError(
                f"{player.label} piece {piece_id} is not eligible (eligible: {self.state.eligible})"
            )

        move = PieceMove(self, player, piece_id, self.state.dice_value)
        self.state.move_in_progress = True
        self.state.eligible = []
        # a reset from this notification leaves ``move`` stale, so it aborts
        self._publish(self._commit(), [("eligible_pieces_changed", player, [])])
        return move

    def select_piece(self, player: Player, piece_id: int) -> Optional[MoveResult]:
        """Move an eligible piece to completion and resolve the turn."""
        return self.begin_move(player, piece_id).run()

    def advance(self, player: Player, piece_id: int, steps: int) -> Iterator[int]:
        """Advance a piece one cell at a time, committing every cell visited."""
        player = Player(player)
        for position in iter_path(player, self.state.position(player, piece_id), steps):
            self._set_piece_position(player, piece_id, position)
            yield position

    def check_for_kill(self, player: Player, piece_id: int) -> List[Dict[str, int]]:
        """Send every opponent piece sharing the mover's unsafe ring cell back to base."""
        knockouts = self._capture(player, piece_id)
        self._publish(self._commit(), self._capture_notifications(knockouts))
        return knockouts

    def reset_game(self) -> None:
        """Put every piece back in base; aborts any move in flight."""
        self.state.reset()
        logger.info("Game reset")
        notifications: List[Notification] = [
            ("piece_position_changed", player, pc.piece_id, pc.position)
            for player, pieces in self.state.pieces.items()
            for pc in pieces
        ]
        notifications += [
            ("turn_changed", self.current_player),
            ("state_changed", TurnState.AWAITING_ROLL),
        ]
        self._publish(self._commit(), notifications)

    # --- Adapter requests: invalid requests are ignored ---
    def request_roll(self, dice: int | None = None) -> int | None:
        try:
            return self.roll_dice(dice)
        except IllegalActionError as e:
            logger.debug(f"Roll request ignored: {e}")
            return None

    def request_piece_selection(self, player: Player, piece_id: int) -> Optional[MoveResult]:
        try:
            move = self.begin_move(player, piece_id)
        except IllegalActionError as e:
            logger.debug(f"Selection request ignored: {e}")
            return None
        return move.run()

    # --- Internals ---
    def _ensure_can_act(self, expected: TurnState) -> None:
        if self.frozen:
            raise IllegalActionError("Game is over")
        if self.state.move_in_progress:
            raise IllegalActionError("A move is in progress")
        if self.state.state is not expected:
            raise IllegalActionError(
                f"Expected state {expected.value}, current state is {self.state.state.value}"
            )

    def _set_piece_position(self, player: Player, piece_id: int, position: int) -> None:
        self.state.set_position(player, piece_id, position)
        self._emit("piece_position_changed", player, piece_id, position)

    def _pass_turn(self) -> List[Notification]:
        self.state.turn = (self.state.turn + 1) % self.settings.NUM_PLAYERS
        self.state.eligible = []
        self.state.state = TurnState.AWAITING_ROLL
        return [
            ("turn_changed", self.current_player),
            ("state_changed", TurnState.AWAITING_ROLL),
        ]

    def _capture(self, player: Player, piece_id: int) -> List[Dict[str, int]]:
        player = Player(player)
        position = self.state.position(player, piece_id)
        if not is_ring_cell(position) or is_safe_cell(position):
            return []

        knockouts: List[Dict[str, int]] = []
        for opponent in Player:
            if opponent == player:
                continue
            for pc in self.state.pieces[opponent]:
                if pc.position != position:
                    continue
                pc.send_home()
                knockouts.append(
                    {"player": int(opponent), "piece_id": pc.piece_id, "cell": position}
                )
                logger.info(
                    f"{player.label} piece {piece_id} captured {opponent.label} piece {pc.piece_id} at {position}"
                )
        return knockouts

    def _capture_notifications(self, knockouts: List[Dict[str, int]]) -> List[Notification]:
        notifications: List[Notification] = []
        for ko in knockouts:
            opponent = Player(ko["player"])
            position = self.state.position(opponent, ko["piece_id"])
            notifications.append(("piece_position_changed", opponent, ko["piece_id"], position))
        return notifications

    def _exit_base(self, player: Player, piece_id: int) -> Iterator[int]:
        position = start_cell(player)
        self._set_piece_position(player, piece_id, position)
        yield position

    def _complete_move(self, move: PieceMove) -> Optional[MoveResult]:
        state = self.state
        player, piece_id = move.player, move.piece_id
        new_position = state.position(player, piece_id)
        events = MoveEvents()
        notifications: List[Notification] = []
        state.move_in_progress = False

        if position_kind(player, move.old_position) is PositionKind.BASE:
            # leaving base grants another roll, like the six it took
            events.exited_base = True
            extra = True
        else:
            if new_position == home_cell(player):
                events.reached_home = True
                logger.info(f"{player.label} piece {piece_id} reached home")
            if self.has_player_won(player) and player not in state.winners:
                events.won = True
                state.winners.append(player)
                logger.info(f"{player.label} has all pieces home")
                notifications.append(("player_won", player))
            events.knockouts = self._capture(player, piece_id)
            notifications += self._capture_notifications(events.knockouts)
            extra = bool(events.knockouts) or move.dice_roll == self.settings.EXIT_ROLL

        if extra:
            state.state = TurnState.AWAITING_ROLL
            notifications.append(("state_changed", TurnState.AWAITING_ROLL))
        else:
            notifications += self._pass_turn()

        self._publish(self._commit(), notifications)
        if state.generation != move._generation:
            return None

        return MoveResult(
            player=player,
            piece_id=piece_id,
            dice_roll=move.dice_roll,
            old_position=move.old_position,
            new_position=new_position,
            path=list(move.path),
            events=events,
            extra_turn=extra,
        )
