import random
import unittest

import numpy as np

from ludo_rules.engine import LudoEngine
from ludo_rules.exceptions import IllegalActionError, InvariantViolation
from ludo_rules.types import Player, TurnState


class TestGameCore(unittest.TestCase):
    def setUp(self):
        self.engine = LudoEngine(rng=random.Random(7))

    def test_initial_state(self):
        state = self.engine.state
        self.assertEqual(state.turn, 0)
        self.assertIs(state.state, TurnState.AWAITING_ROLL)
        self.assertIsNone(state.dice_value)
        self.assertEqual(state.current_positions[Player.P1], [500, 501, 502, 503])
        self.assertEqual(state.current_positions[Player.P4], [800, 801, 802, 803])
        for player in Player:
            self.assertFalse(self.engine.has_player_won(player))

    def test_as_array_snapshot(self):
        arr = self.engine.state.as_array()
        self.assertEqual(arr.shape, (4, 4))
        self.assertEqual(arr.dtype, np.int64)
        np.testing.assert_array_equal(arr[2], [700, 701, 702, 703])

    def test_roll_dice_range(self):
        for _ in range(50):
            self.engine.reset_game()
            value = self.engine.roll_dice()
            self.assertTrue(1 <= value <= 6)
            self.assertEqual(self.engine.state.dice_value, value)

    def test_seeded_engines_roll_the_same(self):
        a = LudoEngine(rng=random.Random(3))
        b = LudoEngine(rng=random.Random(3))
        rolls_a, rolls_b = [], []
        for _ in range(20):
            a.reset_game()
            b.reset_game()
            rolls_a.append(a.roll_dice())
            rolls_b.append(b.roll_dice())
        self.assertEqual(rolls_a, rolls_b)

    def test_injected_dice_out_of_range(self):
        with self.assertRaises(ValueError):
            self.engine.roll_dice(7)

    def test_no_eligible_piece_passes_turn(self):
        self.engine.roll_dice(3)
        self.assertEqual(self.engine.state.turn, 1)
        self.assertIs(self.engine.state.state, TurnState.AWAITING_ROLL)
        self.assertEqual(self.engine.state.eligible, [])
        self.assertEqual(self.engine.state.dice_value, 3)

    def test_turn_wraps_after_last_player(self):
        for _ in range(4):
            self.engine.roll_dice(2)
        self.assertEqual(self.engine.state.turn, 0)

    def test_roll_rejected_while_awaiting_move(self):
        self.engine.roll_dice(6)
        with self.assertRaises(IllegalActionError):
            self.engine.roll_dice(6)
        self.assertIsNone(self.engine.request_roll(4))
        self.assertEqual(self.engine.state.dice_value, 6)
        self.assertIs(self.engine.state.state, TurnState.AWAITING_MOVE)

    def test_selection_rejected_while_awaiting_roll(self):
        with self.assertRaises(IllegalActionError):
            self.engine.select_piece(Player.P1, 0)
        self.assertIsNone(self.engine.request_piece_selection(Player.P1, 0))

    def test_out_of_turn_or_ineligible_selection_is_ignored(self):
        self.engine.roll_dice(6)
        before = self.engine.state.current_positions
        self.assertIsNone(self.engine.request_piece_selection(Player.P2, 0))
        self.assertIsNone(self.engine.request_piece_selection(Player.P1, 9))
        self.assertIsNone(self.engine.request_piece_selection(7, 0))
        self.assertEqual(self.engine.state.current_positions, before)
        self.assertIs(self.engine.state.state, TurnState.AWAITING_MOVE)
        self.assertEqual(self.engine.state.eligible, [0, 1, 2, 3])

    def test_invalid_position_is_fatal(self):
        self.engine.state.set_position(Player.P1, 0, 203)
        with self.assertRaises(InvariantViolation):
            self.engine.roll_dice(4)

    def test_reset_game(self):
        self.engine.roll_dice(6)
        self.engine.select_piece(Player.P1, 2)
        self.engine.roll_dice(5)
        self.engine.reset_game()
        state = self.engine.state
        self.assertEqual(state.turn, 0)
        self.assertIs(state.state, TurnState.AWAITING_ROLL)
        self.assertIsNone(state.dice_value)
        self.assertEqual(state.current_positions[Player.P1], [500, 501, 502, 503])
        self.assertFalse(state.move_in_progress)


if __name__ == "__main__":
    unittest.main()
