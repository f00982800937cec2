import pytest

from tesserax.core.history import MoveHistory
from tesserax.core.moves import Gyro, GyroMiddle, GyroOuter, Turn, RotateDirection
from tesserax.core.pieces import CellLocation

L_X = Turn(CellLocation.LEFT, RotateDirection.YZ)
R_Y = Turn(CellLocation.RIGHT, RotateDirection.ZX)


def test_empty_history():
    history = MoveHistory()
    assert not history.can_undo()
    assert not history.can_redo()
    assert history.get_turn_count() == 0
    with pytest.raises(IndexError):
        history.undo()
    with pytest.raises(IndexError):
        history.redo()


def test_record_undo_redo_cursor():
    history = MoveHistory()
    history.record(L_X)
    history.record(R_Y)
    assert history.get_turn_count() == 2
    assert history.undo() == (R_Y,)
    assert history.can_redo()
    assert history.get_turn_count() == 1
    assert history.redo() == (R_Y,)
    assert not history.can_redo()
    assert history.get_turn_count() == 2


def test_new_move_truncates_redo_tail():
    history = MoveHistory()
    history.record(L_X)
    history.record(R_Y)
    history.undo()
    history.undo()
    history.record(GyroOuter())
    assert not history.can_redo()
    assert len(history) == 1
    assert history.entries == ((GyroOuter(),),)


def test_block_entry_counts_once():
    history = MoveHistory()
    block = (L_X, Gyro(CellLocation.LEFT), GyroMiddle(1))
    history.record(*block)
    assert history.get_turn_count() == 1
    assert history.undo() == block


def test_record_requires_moves():
    with pytest.raises(ValueError):
        MoveHistory().record()


def test_clear():
    history = MoveHistory()
    history.record(L_X)
    history.undo()
    history.clear()
    assert not history.can_undo()
    assert not history.can_redo()
    assert len(history) == 0
