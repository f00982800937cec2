import itertools

import pytest

from tesserax.core.history import MoveHistory
from tesserax.core.moves import Gyro, GyroMiddle, GyroOuter, Rotate, RotateDirection, Turn
from tesserax.core.pieces import CellLocation, MiddleSliceDir, solved_state
from tesserax.core.puzzle import Puzzle
from tesserax.scheduler.intent import IntentDecoder
from tesserax.scheduler.sequencer import MoveScheduler, build_gyro_sequence
from tesserax.utils.util import states_equal

L_X = Turn(CellLocation.LEFT, RotateDirection.YZ)
R_Y = Turn(CellLocation.RIGHT, RotateDirection.ZX)


@pytest.fixture
def scheduler(puzzle):
    return MoveScheduler(puzzle, MoveHistory())


class TestGyroSequence:
    def test_side_gyro_is_single(self):
        assert build_gyro_sequence(1, 0, MiddleSliceDir.FRONT, CellLocation.LEFT) == [
            Gyro(CellLocation.LEFT)
        ]

    def test_end_cells_build_nothing(self):
        assert build_gyro_sequence(1, 0, MiddleSliceDir.FRONT, CellLocation.IN) == []
        assert build_gyro_sequence(-1, 1, MiddleSliceDir.UP, CellLocation.OUT) == []

    @pytest.mark.parametrize(
        "outer, middle, direction, cell, expected",
        [
            (1, 0, MiddleSliceDir.FRONT, CellLocation.UP,
             [GyroMiddle(0), GyroMiddle(1), Gyro(CellLocation.UP)]),
            (1, 2, MiddleSliceDir.UP, CellLocation.DOWN,
             [GyroMiddle(-1), Gyro(CellLocation.DOWN)]),
            (1, -1, MiddleSliceDir.FRONT, CellLocation.FRONT,
             [GyroOuter(), Gyro(CellLocation.FRONT)]),
            (-1, -1, MiddleSliceDir.UP, CellLocation.BACK,
             [GyroMiddle(0), Gyro(CellLocation.BACK)]),
            (-1, -2, MiddleSliceDir.FRONT, CellLocation.FRONT,
             [GyroMiddle(1), Gyro(CellLocation.FRONT)]),
        ],
    )
    def test_polar_gyro_sequences(self, outer, middle, direction, cell, expected):
        assert build_gyro_sequence(outer, middle, direction, cell) == expected

    def test_every_sequence_replays_legally(self):
        polar = (CellLocation.UP, CellLocation.DOWN, CellLocation.FRONT, CellLocation.BACK)
        for outer, middle, direction in itertools.product((-1, 1), range(-2, 3), MiddleSliceDir):
            if middle == -2 * outer:
                continue
            state = solved_state().replace(
                outer_slice_pos=outer, middle_slice_pos=middle, middle_slice_dir=int(direction)
            )
            for cell in polar:
                puzzle = Puzzle(state)
                sequence = build_gyro_sequence(outer, middle, direction, cell)
                assert sequence[-1] == Gyro(cell)
                for move in sequence:
                    assert puzzle.can_apply(move), f"{move} illegal in {outer, middle, direction}"
                    puzzle.apply_move(move)
                assert puzzle.middle_slice_pos == puzzle.outer_slice_pos


class TestIntentDecoder:
    def test_resolve_priorities(self):
        decoder = IntentDecoder()
        assert decoder.resolve(frozenset({"M", "W", "I"})) == GyroMiddle(-1)
        assert decoder.resolve(frozenset({"COMMA"})) == GyroMiddle(0)
        assert decoder.resolve(frozenset({"W", "SPACE"})) == Gyro(CellLocation.LEFT)
        assert decoder.resolve(frozenset({"W", "I"})) == L_X
        assert decoder.resolve(frozenset({"K"})) == Rotate(RotateDirection.ZY)
        assert decoder.resolve(frozenset({"SPACE"})) == GyroOuter()
        assert decoder.resolve(frozenset({"W"})) is None
        assert decoder.resolve(frozenset()) is None

    def test_edge_triggered(self):
        decoder = IntentDecoder()
        assert decoder.decode({"W", "I"}) == L_X
        assert decoder.decode({"W", "I"}) is None
        assert decoder.decode({"W"}) is None
        assert decoder.decode({"W", "I"}) == L_X

    def test_adding_a_key_fires_the_new_combination(self):
        decoder = IntentDecoder()
        assert decoder.decode({"W"}) is None
        assert decoder.decode({"W", "SPACE"}) == Gyro(CellLocation.LEFT)

    def test_unbound_key_does_not_refire(self):
        decoder = IntentDecoder()
        assert decoder.decode({"W", "I"}) == L_X
        assert decoder.decode({"W", "I", "Q"}) is None
        assert decoder.decode({"W", "I", "Q", "SHIFT"}) is None

    def test_last_cell_and_direction_win(self):
        decoder = IntentDecoder()
        # LEFT follows RIGHT and FRONT follows LEFT in cell order
        assert decoder.resolve(frozenset({"W", "F", "I"})) == L_X
        assert decoder.resolve(frozenset({"D", "W", "SPACE"})) == Gyro(CellLocation.LEFT)
        assert decoder.resolve(frozenset({"W", "S", "SPACE"})) == Gyro(CellLocation.FRONT)
        assert decoder.resolve(frozenset({"I", "K"})) == Rotate(RotateDirection.ZY)
        assert decoder.resolve(frozenset({"I", "U"})) == Rotate(RotateDirection.YX)

    def test_minus_shift_wins_over_plus_shift(self):
        assert IntentDecoder().resolve(frozenset({"M", "PERIOD"})) == GyroMiddle(-1)

    def test_blocked_shift_falls_through(self, puzzle):
        decoder = IntentDecoder()
        puzzle.gyro_middle_slice(-1)
        assert not puzzle.can_gyro_middle(-1)
        assert decoder.resolve(frozenset({"M", "W", "I"}), puzzle) == L_X
        assert decoder.resolve(frozenset({"M", "COMMA"}), puzzle) == GyroMiddle(0)
        assert decoder.resolve(frozenset({"M", "PERIOD"}), puzzle) is None
        assert decoder.resolve(frozenset({"M"}), puzzle) is None
        assert decoder.resolve(frozenset({"PERIOD"}), puzzle) == GyroMiddle(1)


class TestScheduler:
    def test_rejects_non_positive_speed(self, puzzle):
        with pytest.raises(ValueError):
            MoveScheduler(puzzle, MoveHistory(), animation_speed=0)

    def test_commit_happens_at_animation_end(self, scheduler, puzzle):
        assert scheduler.tick(0.016, {"W", "I"}) is None
        assert scheduler.animating
        assert scheduler.front_entry == L_X
        assert scheduler.animation_progress == 0.0
        assert puzzle.is_solved()

        assert scheduler.tick(0.1) is None
        assert scheduler.progress_fraction == pytest.approx(0.4)
        assert puzzle.is_solved()

        assert scheduler.tick(0.2) == L_X
        assert not scheduler.animating
        assert scheduler.front_entry is None
        assert scheduler.animation_progress == 0.0
        assert not puzzle.is_solved()
        assert scheduler.history.get_turn_count() == 1

    def test_unbound_key_does_not_requeue_held_move(self, scheduler):
        scheduler.tick(0.0, {"W", "I"})
        assert scheduler.tick(1.0, {"W", "I"}) == L_X
        assert scheduler.tick(0.0, {"W", "I", "Q"}) is None
        assert not scheduler.animating
        assert scheduler.pending == ()
        assert scheduler.history.get_turn_count() == 1

    def test_blocked_middle_shift_turns_selected_cell(self, scheduler, puzzle):
        puzzle.gyro_middle_slice(-1)
        scheduler.tick(0.0, {"M", "F", "J"})
        assert scheduler.front_entry == R_Y

    def test_one_commit_per_tick_for_large_delta(self, scheduler):
        scheduler.push([L_X, R_Y])
        assert scheduler.tick(100.0) == L_X
        assert scheduler.animating
        assert scheduler.animation_progress == 0.0
        assert scheduler.pending == (R_Y,)
        assert scheduler.tick(100.0) == R_Y
        assert not scheduler.animating

    def test_commits_in_push_order(self, scheduler):
        moves = [GyroMiddle(0), Rotate(RotateDirection.YZ), GyroOuter()]
        scheduler.push(moves)
        committed = []
        while scheduler.animating:
            move = scheduler.tick(0.3)
            if move is not None:
                committed.append(move)
        assert committed == moves
        assert [e[0] for e in scheduler.history.entries] == moves

    def test_input_ignored_while_animating(self, scheduler):
        scheduler.tick(0.0, {"W", "I"})
        scheduler.tick(0.01, {"F", "J"})
        scheduler.tick(0.01, {"SPACE"})
        assert scheduler.pending == (L_X,)
        assert not scheduler.request(R_Y)

    def test_held_keys_do_not_refire(self, scheduler):
        scheduler.tick(0.0, {"W", "I"})
        scheduler.tick(1.0, {"W", "I"})
        assert not scheduler.animating
        scheduler.tick(0.0, {"W", "I"})
        assert not scheduler.animating
        scheduler.tick(0.0, set())
        scheduler.tick(0.0, {"W", "I"})
        assert scheduler.animating

    def test_illegal_request_is_ignored(self, scheduler, puzzle):
        scheduler.tick(0.0, {"E", "I"})
        assert not scheduler.animating
        assert not scheduler.request(Turn(CellLocation.IN, RotateDirection.XY))
        assert scheduler.pending == ()
        assert states_equal(puzzle.state, solved_state())

    def test_gyro_request_expands(self, scheduler, puzzle):
        scheduler.tick(0.0, {"E", "SPACE"})
        assert scheduler.pending == (GyroMiddle(0), GyroMiddle(1), Gyro(CellLocation.UP))
        while scheduler.animating:
            scheduler.tick(1.0)
        assert puzzle.is_solved()
        assert puzzle.outer_slice_pos == -1
        assert scheduler.history.get_turn_count() == 3

    def test_clear_discards_pending(self, scheduler, puzzle):
        scheduler.push([L_X])
        scheduler.tick(0.1)
        scheduler.clear()
        assert not scheduler.animating
        assert scheduler.pending == ()
        assert scheduler.progress_fraction == 0.0
        assert puzzle.is_solved()
