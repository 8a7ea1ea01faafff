"""Order fingerprint: SHA-256 over the channel's (position, item_id) sequence.

Titles do not participate. Callers must read from a view consistent with the
commit boundary they reason about (a snapshot or an open transaction).
"""

from collections.abc import Iterable

from playlist.core.models import Item
from playlist.core.protocols import PlaylistStore
from playlist.lib.hashing import sha256

EMPTY_FINGERPRINT = sha256("")


def compute(items: Iterable[Item]) -> str:
    return sha256("|".join(f"{item.position}:{item.item_id}" for item in items))


def fingerprint(store: PlaylistStore, channel_id: str) -> str:
    return compute(store.read_ordered(channel_id))
