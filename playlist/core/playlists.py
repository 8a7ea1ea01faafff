"""Playlist operations: paged reads, sync-check, and fingerprint-guarded mutations.

Every mutation runs inside one store transaction: fingerprint check, existence
and range validation, the shift writes, the primary write, and the resulting
fingerprint. A stale fingerprint aborts before anything is written.

Pages are independent snapshots. A mutation between two page fetches can skip
or repeat an item across pages; the fingerprint differs between those pages.
"""

import logging
import uuid
from collections.abc import Iterator

from playlist.core import db, shifts
from playlist.core.errors import FingerprintConflict, InvalidInput, InvalidPagination, ItemNotFound
from playlist.core.fingerprint import fingerprint
from playlist.core.models import (
    MAX_LIMIT,
    MIN_LIMIT,
    SENTINEL_POSITION,
    DeleteResult,
    InsertResult,
    Item,
    MoveResult,
    PlaylistPage,
    Shift,
    SyncResult,
)
from playlist.core.protocols import PlaylistStore
from playlist.lib import config

logger = logging.getLogger(__name__)


def _resolve(store: PlaylistStore | None) -> PlaylistStore:
    return store if store is not None else db.default_store()


def _require_text(name: str, value, allow_empty: bool = False) -> None:
    if not isinstance(value, str) or (not allow_empty and not value):
        raise InvalidInput(f"{name} is required")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidInput(f"{name} is not valid UTF-8 text") from e


def _require_position(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer")


def validate_pagination(offset: int, limit: int) -> None:
    if offset < 0:
        raise InvalidPagination("Offset must be non-negative")
    if limit < MIN_LIMIT or limit > MAX_LIMIT:
        raise InvalidPagination(f"Limit must be between {MIN_LIMIT} and {MAX_LIMIT}")


def _verify(store: PlaylistStore, channel_id: str, client_fingerprint: str) -> str:
    server_fingerprint = fingerprint(store, channel_id)
    if server_fingerprint != client_fingerprint:
        logger.warning(
            f"Fingerprint conflict on '{channel_id}': "
            f"client {client_fingerprint[:12]} != server {server_fingerprint[:12]}"
        )
        raise FingerprintConflict(server_fingerprint)
    return server_fingerprint


def _find_in_channel(store: PlaylistStore, channel_id: str, item_id: str) -> Item:
    item = store.find_by_id(item_id)
    if item is None or item.channel_id != channel_id:
        raise ItemNotFound(item_id)
    return item


def _apply(store: PlaylistStore, channel_id: str, shift: Shift) -> None:
    if shift.end is None:
        store.shift_from(channel_id, shift.start, shift.delta)
    else:
        store.shift_range(channel_id, shift.start, shift.end, shift.delta)


def get_page(
    channel_id: str, offset: int = 0, limit: int | None = None, store: PlaylistStore | None = None
) -> PlaylistPage:
    """Return one page of the channel ordered by position, with count and fingerprint.

    Items, total count and fingerprint come from a single snapshot.
    """
    _require_text("channel_id", channel_id)
    limit = config.default_limit() if limit is None else limit
    validate_pagination(offset, limit)

    store = _resolve(store)
    with store.snapshot(channel_id):
        items = store.read_page(channel_id, offset, limit)
        total_count = store.count(channel_id)
        current = fingerprint(store, channel_id)

    return PlaylistPage(
        items=items, total_count=total_count, fingerprint=current, offset=offset, limit=limit
    )


def iter_items(
    channel_id: str, limit: int = MAX_LIMIT, store: PlaylistStore | None = None
) -> Iterator[Item]:
    """Walk every page from offset 0. Not a consistent snapshot across pages."""
    offset: int | None = 0
    while offset is not None:
        page = get_page(channel_id, offset=offset, limit=limit, store=store)
        yield from page.items
        offset = page.next_offset


def current_fingerprint(channel_id: str, store: PlaylistStore | None = None) -> str:
    _require_text("channel_id", channel_id)
    store = _resolve(store)
    with store.snapshot(channel_id):
        return fingerprint(store, channel_id)


def sync_check(
    channel_id: str, client_fingerprint: str, store: PlaylistStore | None = None
) -> SyncResult:
    """Compare a client fingerprint with the server's. Raises FingerprintConflict on mismatch."""
    _require_text("channel_id", channel_id)
    _require_text("client_fingerprint", client_fingerprint, allow_empty=True)

    store = _resolve(store)
    with store.snapshot(channel_id):
        return SyncResult(fingerprint=_verify(store, channel_id, client_fingerprint))


def insert_item(
    channel_id: str,
    title: str,
    position: int,
    client_fingerprint: str,
    store: PlaylistStore | None = None,
) -> InsertResult:
    """Insert a new item at position (0..N). Items at or after it move down by one."""
    _require_text("channel_id", channel_id)
    _require_text("title", title, allow_empty=True)
    _require_position("index", position)
    _require_text("client_fingerprint", client_fingerprint, allow_empty=True)

    store = _resolve(store)
    with store.transaction(channel_id):
        _verify(store, channel_id, client_fingerprint)
        plan = shifts.plan_insert(store.count(channel_id), position)

        for shift in plan.shifts:
            _apply(store, channel_id, shift)
        item = Item(
            item_id=str(uuid.uuid4()),
            channel_id=channel_id,
            title=title,
            position=plan.final_position,
        )
        store.create(item)
        updated = fingerprint(store, channel_id)

    logger.info(f"Inserted {item.item_id} into '{channel_id}' at {item.position} ({updated[:12]})")
    return InsertResult(item=item, fingerprint=updated)


def delete_item(
    channel_id: str, item_id: str, client_fingerprint: str, store: PlaylistStore | None = None
) -> DeleteResult:
    """Delete an item and close the gap it leaves."""
    _require_text("channel_id", channel_id)
    _require_text("item_id", item_id)
    _require_text("client_fingerprint", client_fingerprint, allow_empty=True)

    store = _resolve(store)
    with store.transaction(channel_id):
        _verify(store, channel_id, client_fingerprint)
        item = _find_in_channel(store, channel_id, item_id)
        plan = shifts.plan_delete(store.count(channel_id), item.position)

        store.delete_by_id(item_id)
        for shift in plan.shifts:
            _apply(store, channel_id, shift)
        updated = fingerprint(store, channel_id)

    logger.info(f"Deleted {item_id} from '{channel_id}' at {item.position} ({updated[:12]})")
    return DeleteResult(fingerprint=updated)


def move_item(
    channel_id: str,
    item_id: str,
    position: int,
    client_fingerprint: str,
    store: PlaylistStore | None = None,
) -> MoveResult:
    """Move an item to an existing slot (0..N-1).

    Moving to the current position is a successful no-op. Otherwise the item is
    parked on the sentinel slot while the others shift, then set to its target.
    """
    _require_text("channel_id", channel_id)
    _require_text("item_id", item_id)
    _require_position("newIndex", position)
    _require_text("client_fingerprint", client_fingerprint, allow_empty=True)

    store = _resolve(store)
    with store.transaction(channel_id):
        current = _verify(store, channel_id, client_fingerprint)
        item = _find_in_channel(store, channel_id, item_id)
        plan = shifts.plan_move(store.count(channel_id), item.position, position)

        if plan.is_noop:
            return MoveResult(item=item, fingerprint=current, moved=False)

        store.set_position(item_id, SENTINEL_POSITION)
        for shift in plan.shifts:
            _apply(store, channel_id, shift)
        store.set_position(item_id, plan.final_position)

        moved = _find_in_channel(store, channel_id, item_id)
        updated = fingerprint(store, channel_id)

    logger.info(
        f"Moved {item_id} in '{channel_id}' from {item.position} to {moved.position} ({updated[:12]})"
    )
    return MoveResult(item=moved, fingerprint=updated)
