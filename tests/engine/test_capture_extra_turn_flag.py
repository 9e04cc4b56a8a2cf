import unittest

from ludo_rules.engine import LudoEngine
from ludo_rules.types import Player, TurnState


class TestCaptureExtraTurnFlag(unittest.TestCase):
    def test_capture_sets_extra_turn(self):
        engine = LudoEngine()
        engine.state.set_position(Player.P1, 0, 5)
        engine.state.set_position(Player.P2, 0, 2)
        engine.state.turn = int(Player.P2)
        engine.roll_dice(3)
        self.assertEqual(engine.state.eligible, [0])
        res = engine.select_piece(Player.P2, 0)
        self.assertTrue(res.events.knockouts)
        self.assertTrue(res.extra_turn)
        self.assertEqual(engine.state.turn, int(Player.P2))
        self.assertIs(engine.state.state, TurnState.AWAITING_ROLL)

    def test_capture_with_six_grants_a_single_extra_turn(self):
        engine = LudoEngine()
        engine.state.set_position(Player.P3, 1, 20)
        engine.state.set_position(Player.P4, 0, 14)
        engine.state.turn = int(Player.P4)
        engine.roll_dice(6)
        res = engine.select_piece(Player.P4, 0)
        self.assertTrue(res.extra_turn)
        self.assertEqual(engine.state.position(Player.P3, 1), 701)
        # next roll without a six or capture moves on
        engine.roll_dice(1)
        engine.select_piece(Player.P4, 0)
        self.assertEqual(engine.state.turn, int(Player.P1))


if __name__ == "__main__":
    unittest.main()
