import pytest

from playlist.core import shifts
from playlist.core.errors import PositionOutOfRange
from playlist.core.models import Shift


def positions_of(n: int) -> dict[str, int]:
    return {f"i{p}": p for p in range(n)}


def test_insert_in_middle_shifts_tail():
    plan = shifts.plan_insert(5, 2)

    assert plan.final_position == 2
    assert plan.shifts == [Shift(start=2, delta=1)]
    assert not plan.relocate


def test_insert_append_slot_needs_no_shift():
    plan = shifts.plan_insert(5, 5)

    assert plan.final_position == 5
    assert plan.shifts == []


def test_insert_into_empty_channel():
    assert shifts.plan_insert(0, 0).final_position == 0


@pytest.mark.parametrize("position", [-1, 6, 10])
def test_insert_rejects_out_of_range(position):
    with pytest.raises(PositionOutOfRange):
        shifts.plan_insert(5, position)


def test_insert_error_names_valid_range():
    with pytest.raises(PositionOutOfRange, match="Valid range is 0 to 5"):
        shifts.plan_insert(5, 10)


def test_delete_closes_gap():
    plan = shifts.plan_delete(5, 2)

    assert plan.shifts == [Shift(start=3, delta=-1)]


def test_delete_last_needs_no_shift():
    assert shifts.plan_delete(5, 4).shifts == []


def test_move_forward_shifts_range_up():
    plan = shifts.plan_move(5, 0, 3)

    assert plan.shifts == [Shift(start=1, end=3, delta=-1)]
    assert plan.final_position == 3
    assert plan.relocate


def test_move_backward_shifts_range_down():
    plan = shifts.plan_move(5, 4, 1)

    assert plan.shifts == [Shift(start=1, end=3, delta=1)]
    assert plan.final_position == 1


def test_move_same_index_is_noop():
    plan = shifts.plan_move(5, 2, 2)

    assert plan.is_noop
    assert plan.final_position == 2


@pytest.mark.parametrize("position", [-1, 5, 9])
def test_move_rejects_append_slot_and_beyond(position):
    with pytest.raises(PositionOutOfRange):
        shifts.plan_move(5, 0, position)


def test_move_error_names_valid_range():
    with pytest.raises(PositionOutOfRange, match="Valid range is 0 to 4"):
        shifts.plan_move(5, 0, 5)


def test_shift_covers_open_and_closed_ranges():
    assert Shift(start=2, delta=1).covers(100)
    assert not Shift(start=2, delta=1).covers(1)
    assert Shift(start=1, end=3, delta=-1).covers(3)
    assert not Shift(start=1, end=3, delta=-1).covers(4)


def test_apply_move_matches_expected_order():
    before = positions_of(5)
    after = shifts.apply(before, "i0", shifts.plan_move(5, 0, 3))

    order = sorted(after, key=after.get)
    assert order == ["i1", "i2", "i3", "i0", "i4"]


def test_every_plan_preserves_contiguity():
    n = 6
    for target in range(n + 1):
        after = shifts.apply(positions_of(n), "new", shifts.plan_insert(n, target))
        assert shifts.is_contiguous(after)
    for victim in range(n):
        after = shifts.apply(
            positions_of(n), f"i{victim}", shifts.plan_delete(n, victim), remove=True
        )
        assert shifts.is_contiguous(after)
    for old in range(n):
        for new in range(n):
            after = shifts.apply(positions_of(n), f"i{old}", shifts.plan_move(n, old, new))
            assert shifts.is_contiguous(after)
            assert after[f"i{old}"] == new
