import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ChannelLocks:
    """One mutex per channel, created on first use.

    Mutations on the same channel serialize; different channels never contend.
    """

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, channel_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(channel_id)
            if lock is None:
                lock = self._locks[channel_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, channel_id: str) -> Iterator[None]:
        lock = self.get(channel_id)
        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
