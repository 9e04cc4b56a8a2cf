import unittest

from ludo_rules.geometry import (
    SAFE_POSITIONS,
    base_slot,
    base_slots,
    home_cell,
    home_entrance,
    home_lane,
    is_ring_cell,
    is_safe_cell,
    lane_distance,
    owner_of,
    position_kind,
    start_cell,
    turning_point,
)
from ludo_rules.piece import Piece
from ludo_rules.types import Player, PositionKind


class TestBoardGeometry(unittest.TestCase):
    def test_base_slots_are_private_and_four(self):
        seen = set()
        for player in Player:
            slots = base_slots(player)
            self.assertEqual(len(slots), 4)
            self.assertTrue(seen.isdisjoint(slots))
            seen.update(slots)
            for slot in slots:
                self.assertFalse(is_ring_cell(slot))

    def test_start_and_turning_points_on_ring(self):
        self.assertEqual([start_cell(p) for p in Player], [0, 13, 26, 39])
        self.assertEqual([turning_point(p) for p in Player], [50, 11, 24, 37])
        for player in Player:
            self.assertTrue(is_ring_cell(start_cell(player)))
            self.assertTrue(is_ring_cell(turning_point(player)))

    def test_home_lane_ends_at_home(self):
        for player in Player:
            lane = home_lane(player)
            self.assertEqual(lane[-1], home_cell(player))
            self.assertEqual(lane[:-1], home_entrance(player))
            self.assertEqual(len(home_entrance(player)), 5)
        self.assertEqual(home_lane(Player.P1), (100, 101, 102, 103, 104, 105))

    def test_start_cells_are_safe(self):
        for player in Player:
            self.assertTrue(is_safe_cell(start_cell(player)))
        self.assertEqual(SAFE_POSITIONS, {0, 8, 13, 21, 26, 34, 39, 47})
        self.assertFalse(is_safe_cell(5))

    def test_position_kind(self):
        self.assertIs(position_kind(Player.P1, 500), PositionKind.BASE)
        self.assertIs(position_kind(Player.P1, 17), PositionKind.RING)
        self.assertIs(position_kind(Player.P1, 102), PositionKind.LANE)
        self.assertIs(position_kind(Player.P1, 105), PositionKind.HOME)
        # another player's private cells are not legal for P1
        self.assertIsNone(position_kind(Player.P1, 202))
        self.assertIsNone(position_kind(Player.P1, 600))
        self.assertIsNone(position_kind(Player.P1, 52))

    def test_lane_distance_and_owner(self):
        self.assertEqual(lane_distance(Player.P3, 301), 4)
        self.assertEqual(lane_distance(Player.P3, 305), 0)
        self.assertIs(owner_of(803), Player.P4)
        self.assertIs(owner_of(205), Player.P2)
        self.assertIsNone(owner_of(30))


class TestPiece(unittest.TestCase):
    def test_piece_starts_in_own_base_slot(self):
        piece = Piece(player=Player.P2, piece_id=3)
        self.assertEqual(piece.position, 603)
        self.assertEqual(base_slot(Player.P2, 3), 603)

    def test_send_home_returns_to_matching_slot(self):
        piece = Piece(player=Player.P4, piece_id=1)
        piece.move_to(20)
        piece.send_home()
        self.assertEqual(piece.position, 801)

    def test_is_home(self):
        piece = Piece(player=Player.P1, piece_id=0, position=105)
        self.assertTrue(piece.is_home())


if __name__ == "__main__":
    unittest.main()
