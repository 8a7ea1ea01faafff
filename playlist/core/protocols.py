"""Persistence port for playlist items.

Implementations must run every call made inside transaction() as one
all-or-nothing unit, serialized per channel, and every call made inside
snapshot() against a single consistent read view.
"""

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from playlist.core.models import Item


@runtime_checkable
class PlaylistStore(Protocol):
    def transaction(self, channel_id: str) -> AbstractContextManager[None]:
        """Serialized write scope for one channel. Rolls back on any exception."""
        ...

    def snapshot(self, channel_id: str) -> AbstractContextManager[None]:
        """Lock-free consistent read view."""
        ...

    def read_ordered(self, channel_id: str) -> list[Item]: ...

    def read_page(self, channel_id: str, offset: int, limit: int) -> list[Item]: ...

    def count(self, channel_id: str) -> int: ...

    def find_by_id(self, item_id: str) -> Item | None: ...

    def create(self, item: Item) -> None: ...

    def delete_by_id(self, item_id: str) -> None: ...

    def shift_from(self, channel_id: str, from_position: int, delta: int) -> None:
        """Add delta to every position >= from_position."""
        ...

    def shift_range(
        self, channel_id: str, from_position: int, to_position: int, delta: int
    ) -> None:
        """Add delta to every position in [from_position, to_position]."""
        ...

    def set_position(self, item_id: str, position: int) -> None: ...
