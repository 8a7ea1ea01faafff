from dataclasses import dataclass, field

MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 50

# Parking slot for an item mid-move; never a valid position.
SENTINEL_POSITION = -1


@dataclass
class Item:
    item_id: str
    channel_id: str
    title: str
    position: int


@dataclass
class PlaylistPage:
    items: list[Item]
    total_count: int
    fingerprint: str
    offset: int = 0
    limit: int = DEFAULT_LIMIT

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total_count

    @property
    def next_offset(self) -> int | None:
        return self.offset + self.limit if self.has_more else None


@dataclass
class InsertResult:
    item: Item
    fingerprint: str


@dataclass
class MoveResult:
    item: Item
    fingerprint: str
    moved: bool = True


@dataclass
class DeleteResult:
    fingerprint: str


@dataclass
class SyncResult:
    fingerprint: str


@dataclass
class Shift:
    """Bulk position adjustment. end=None shifts every position >= start."""

    start: int
    delta: int
    end: int | None = None

    def covers(self, position: int) -> bool:
        if position < self.start:
            return False
        return self.end is None or position <= self.end


@dataclass
class ShiftPlan:
    final_position: int
    shifts: list[Shift] = field(default_factory=list)
    relocate: bool = False

    @property
    def is_noop(self) -> bool:
        return not self.shifts and not self.relocate
