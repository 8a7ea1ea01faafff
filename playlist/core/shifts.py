"""Index-shift planning for insert, delete and move.

Pure functions: given the channel's item count and the requested operation,
return the bulk shifts that keep positions contiguous over {0..N-1}.
"""

from collections.abc import Mapping

from playlist.core.errors import PositionOutOfRange
from playlist.core.models import ShiftPlan, Shift


def _check_non_negative(position: int) -> None:
    if position < 0:
        raise PositionOutOfRange("Index must be non-negative")


def validate_insert(count: int, position: int) -> None:
    """Insert may target any existing slot or the append slot N."""
    _check_non_negative(position)
    if position > count:
        raise PositionOutOfRange(
            f"Index {position} is out of range. Valid range is 0 to {count}"
        )


def validate_move(count: int, position: int) -> None:
    """Move only targets existing slots 0..N-1."""
    _check_non_negative(position)
    if position >= count:
        raise PositionOutOfRange(
            f"Index {position} is out of range. Valid range is 0 to {count - 1}"
        )


def plan_insert(count: int, position: int) -> ShiftPlan:
    validate_insert(count, position)
    shifts = [Shift(start=position, delta=1)] if position < count else []
    return ShiftPlan(final_position=position, shifts=shifts)


def plan_delete(count: int, position: int) -> ShiftPlan:
    if not 0 <= position < count:
        raise PositionOutOfRange(f"No item at index {position} in a playlist of {count}")
    shifts = [Shift(start=position + 1, delta=-1)] if position < count - 1 else []
    return ShiftPlan(final_position=position, shifts=shifts)


def plan_move(count: int, old: int, new: int) -> ShiftPlan:
    validate_move(count, new)
    if old == new:
        return ShiftPlan(final_position=new)
    if old < new:
        shift = Shift(start=old + 1, end=new, delta=-1)
    else:
        shift = Shift(start=new, end=old - 1, delta=1)
    return ShiftPlan(final_position=new, shifts=[shift], relocate=True)


def apply(
    positions: Mapping[str, int], item_id: str, plan: ShiftPlan, remove: bool = False
) -> dict[str, int]:
    """Apply a plan to an id -> position mapping without I/O.

    The planned item is lifted out first, the other items are shifted, then the
    item lands on plan.final_position (or stays out when remove=True).
    """
    result = {key: pos for key, pos in positions.items() if key != item_id}
    for shift in plan.shifts:
        result = {
            key: pos + shift.delta if shift.covers(pos) else pos for key, pos in result.items()
        }
    if not remove:
        result[item_id] = plan.final_position
    return result


def is_contiguous(positions: Mapping[str, int]) -> bool:
    return sorted(positions.values()) == list(range(len(positions)))
