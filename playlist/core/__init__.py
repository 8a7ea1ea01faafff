"""Playlist core: ordered per-channel items guarded by order fingerprints.

Reads: get_page, iter_items, current_fingerprint, sync_check.
Mutations: insert_item, delete_item, move_item.
"""

from .errors import (
    FingerprintConflict,
    InvalidInput,
    InvalidPagination,
    ItemNotFound,
    PlaylistError,
    PositionOutOfRange,
    StoreFailure,
)
from .playlists import (
    current_fingerprint,
    delete_item,
    get_page,
    insert_item,
    iter_items,
    move_item,
    sync_check,
)

__all__ = [
    "FingerprintConflict",
    "InvalidInput",
    "InvalidPagination",
    "ItemNotFound",
    "PlaylistError",
    "PositionOutOfRange",
    "StoreFailure",
    "current_fingerprint",
    "delete_item",
    "get_page",
    "insert_item",
    "iter_items",
    "move_item",
    "sync_check",
]
