"""
Unit tests for nearest-target selection.

Boards built with Board.from_columns use column-major layout: columns[x][y].
"""
import pytest

from autobattler.core.data import Side, Vector2
from autobattler.game.board import Board, Occupant
from autobattler.game.combat.targeting import get_nearest_target, get_targets_in_order
from tests.test_utils import PLAYER as P, ENEMY as E, BoardTestBuilder, board_from_diagram


class TestNearestTarget:
    """Board layouts taken from the combat helper scenarios."""

    def test_enemy_right_next_to_player(self):
        board = Board.from_columns([[], [None, P], [None, E]], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) == Vector2(2, 1)

    def test_enemy_right_above_player(self):
        board = Board.from_columns([[], [E, P, None], []], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) == Vector2(1, 0)

    def test_no_enemy_returns_none(self):
        board = Board.from_columns([[], [None, P, None], []], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) is None

    def test_empty_origin_returns_none(self):
        board = Board.from_columns([[], [], []], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) is None

    def test_empty_origin_with_units_elsewhere_returns_none(self):
        board = Board.from_columns([[E], [], [None, None, P]], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) is None

    def test_equidistant_enemies_resolve_clockwise(self):
        board = Board.from_columns([[], [None, P, E], [None, E]], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) == Vector2(2, 1)

    def test_ignores_allies(self):
        board = Board.from_columns([[], [None, P, E], [None, P]], 3, 3)
        assert get_nearest_target(board, Vector2(1, 1)) == Vector2(1, 2)

    def test_longer_distance(self):
        board = Board.from_columns([[None, P], [], [None, E]], 3, 3)
        assert get_nearest_target(board, Vector2(0, 1)) == Vector2(2, 1)

    def test_prefers_closer_units(self):
        board = Board.from_columns([[None, P, E], [], [None, E]], 3, 3)
        assert get_nearest_target(board, Vector2(0, 1)) == Vector2(0, 2)

    @pytest.mark.parametrize("columns,origin,expected", [
        ([[None, None, P], [], [E]], (0, 2), (2, 0)),              # top-right
        ([[P], [], [None, None, E]], (0, 0), (2, 2)),              # bottom-right
        ([[None, None, E], [], [P]], (2, 0), (0, 2)),              # bottom-left
        ([[E], [], [None, None, P]], (2, 2), (0, 0)),              # top-left
    ])
    def test_every_quadrant(self, columns, origin, expected):
        board = Board.from_columns(columns, 3, 3)
        assert get_nearest_target(board, Vector2(*origin)) == Vector2(*expected)

    def test_distant_equidistant_enemies_resolve_clockwise(self):
        board = Board.from_columns([[None, P], [E, None, E], []], 3, 3)
        assert get_nearest_target(board, Vector2(0, 1)) == Vector2(1, 2)

    def test_bigger_board(self):
        board = Board.from_columns([[], [None, P], [], [None, None, E]], 4, 4)
        assert get_nearest_target(board, Vector2(1, 1)) == Vector2(3, 2)


class TestTieBreakOrder:
    """Clockwise sweep from due east: east, south, west, north."""

    def test_full_sweep_order_around_origin(self):
        board = board_from_diagram("""
            .b.
            bAb
            .b.
        """)
        assert get_targets_in_order(board, Vector2(1, 1)) == [
            Vector2(2, 1),  # east
            Vector2(1, 2),  # south
            Vector2(0, 1),  # west
            Vector2(1, 0),  # north
        ]

    def test_diagonal_sweep_order(self):
        board = board_from_diagram("""
            b.b
            .A.
            b.b
        """)
        assert get_targets_in_order(board, Vector2(1, 1)) == [
            Vector2(2, 2),  # south-east
            Vector2(0, 2),  # south-west
            Vector2(0, 0),  # north-west
            Vector2(2, 0),  # north-east
        ]

    def test_distance_outranks_angle(self):
        board = board_from_diagram("""
            .....
            .....
            .bA..
            .....
            ....b
        """)
        assert get_nearest_target(board, Vector2(2, 2)) == Vector2(1, 2)


class TestTargetingProperties:
    """Properties that must hold for any board."""

    def test_never_selects_same_side(self):
        board = (BoardTestBuilder(6, 4)
                 .with_player(0, 0)
                 .with_player(1, 0)
                 .with_player(0, 1)
                 .with_enemy(5, 3)
                 .build())
        target = get_nearest_target(board, Vector2(0, 0))
        assert target == Vector2(5, 3)
        assert board.get_occupant(target).side != Side.PLAYER

    def test_enemy_origin_targets_players(self):
        board = BoardTestBuilder(4, 4).with_enemy(0, 0).with_enemy(1, 0).with_player(3, 3).build()
        assert get_nearest_target(board, Vector2(0, 0)) == Vector2(3, 3)

    def test_wide_board(self):
        board = BoardTestBuilder(12, 2).with_player(0, 0).with_enemy(11, 1).build()
        assert get_nearest_target(board, Vector2(0, 0)) == Vector2(11, 1)

    def test_tall_board(self):
        board = BoardTestBuilder(2, 12).with_player(1, 11).with_enemy(0, 0).build()
        assert get_nearest_target(board, Vector2(1, 11)) == Vector2(0, 0)

    def test_out_of_bounds_origin_returns_none(self):
        board = BoardTestBuilder(3, 3).with_player(0, 0).with_enemy(2, 2).build()
        assert get_nearest_target(board, Vector2(7, 7)) is None

    def test_repeated_queries_are_identical(self):
        board = board_from_diagram("""
            b...b
            .....
            ..A..
            .....
            b...b
        """)
        first = get_nearest_target(board, Vector2(2, 2))
        assert all(get_nearest_target(board, Vector2(2, 2)) == first for _ in range(5))
        assert first == Vector2(4, 4)

    def test_does_not_modify_board(self):
        board = BoardTestBuilder(3, 3).with_player(1, 1).with_enemy(2, 2).build()
        before = board.occupancy.copy()
        get_nearest_target(board, Vector2(1, 1))
        assert (board.occupancy == before).all()

    def test_any_object_with_side_is_an_occupant(self):
        class Marker:
            def __init__(self, side):
                self.side = side

        board = Board.from_columns([[Marker(Side.ENEMY)], [None, Occupant(Side.PLAYER)]], 2, 2)
        assert get_nearest_target(board, Vector2(1, 1)) == Vector2(0, 0)
