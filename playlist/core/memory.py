"""In-memory implementation of the playlist persistence port.

Committed state is an immutable mapping swapped wholesale on commit, so readers
always see a whole commit. A transaction stages a private copy of its channel.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from playlist.core.locks import ChannelLocks
from playlist.core.models import Item


class MemoryPlaylistStore:
    def __init__(self):
        self._committed: dict[str, Item] = {}
        self._guard = threading.Lock()
        self._locks = ChannelLocks()
        self._local = threading.local()

    def _view(self) -> dict[str, Item]:
        view = getattr(self._local, "view", None)
        if view is not None:
            return view
        with self._guard:
            return self._committed

    def _staged(self) -> dict[str, Item]:
        staged = getattr(self._local, "staged", None)
        if staged is None:
            raise RuntimeError("MemoryPlaylistStore writes require an open transaction")
        return staged

    @contextmanager
    def transaction(self, channel_id: str) -> Iterator[None]:
        with self._locks.hold(channel_id):
            with self._guard:
                base = self._committed
            staged = {
                key: replace(item) for key, item in base.items() if item.channel_id == channel_id
            }
            self._local.view = self._local.staged = staged
            try:
                yield
            finally:
                self._local.view = self._local.staged = None
            with self._guard:
                merged = {
                    key: item
                    for key, item in self._committed.items()
                    if item.channel_id != channel_id
                }
                merged.update(staged)
                self._committed = merged

    @contextmanager
    def snapshot(self, channel_id: str) -> Iterator[None]:
        with self._guard:
            self._local.view = self._committed
        try:
            yield
        finally:
            self._local.view = None

    def read_ordered(self, channel_id: str) -> list[Item]:
        items = [replace(i) for i in self._view().values() if i.channel_id == channel_id]
        return sorted(items, key=lambda item: item.position)

    def read_page(self, channel_id: str, offset: int, limit: int) -> list[Item]:
        return self.read_ordered(channel_id)[offset : offset + limit]

    def count(self, channel_id: str) -> int:
        return sum(1 for item in self._view().values() if item.channel_id == channel_id)

    def find_by_id(self, item_id: str) -> Item | None:
        item = self._view().get(item_id)
        return replace(item) if item else None

    def create(self, item: Item) -> None:
        staged = self._staged()
        if item.item_id in staged:
            raise ValueError(f"Duplicate item id: {item.item_id}")
        staged[item.item_id] = replace(item)

    def delete_by_id(self, item_id: str) -> None:
        self._staged().pop(item_id, None)

    def shift_from(self, channel_id: str, from_position: int, delta: int) -> None:
        for item in self._staged().values():
            if item.channel_id == channel_id and item.position >= from_position:
                item.position += delta

    def shift_range(
        self, channel_id: str, from_position: int, to_position: int, delta: int
    ) -> None:
        for item in self._staged().values():
            if item.channel_id == channel_id and from_position <= item.position <= to_position:
                item.position += delta

    def set_position(self, item_id: str, position: int) -> None:
        item = self._staged().get(item_id)
        if item is not None:
            item.position = position
