"""SQLite implementation of the playlist persistence port."""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from playlist.core.errors import StoreFailure
from playlist.core.locks import ChannelLocks
from playlist.core.models import Item
from playlist.lib import store
from playlist.lib.store import from_row

logger = logging.getLogger(__name__)

_COLUMNS = "item_id, channel_id, title, position"

_stores: dict[str, SqlitePlaylistStore] = {}
_stores_lock = threading.Lock()


def _row_to_item(row: store.Row) -> Item:
    return from_row(row, Item)


class SqlitePlaylistStore:
    """Playlist items in one SQLite file.

    Writers take the in-process channel lock and then BEGIN IMMEDIATE, so a
    second process writing the same file queues on SQLite's write lock. Readers
    use deferred transactions, which under WAL see one committed snapshot and
    never wait on writers.

    SQLite's write lock covers the whole file, so commits on different channels
    still queue briefly behind each other. A writer that waits longer than the
    connection's busy timeout (5 s) fails with StoreFailure, whichever channel
    holds the lock.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or store.database_path()
        self._locks = ChannelLocks()

    def _conn(self) -> sqlite3.Connection:
        return store.ensure(self.db_path)

    @contextmanager
    def transaction(self, channel_id: str) -> Iterator[None]:
        with self._locks.hold(channel_id):
            conn = self._conn()
            try:
                conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as e:
                raise StoreFailure(f"Could not open transaction for '{channel_id}': {e}") from e
            try:
                yield
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                self._rollback(conn)
                logger.error(f"Commit failed for channel '{channel_id}': {e}")
                raise StoreFailure(f"Commit failed for channel '{channel_id}': {e}") from e
            except BaseException:
                self._rollback(conn)
                raise

    @contextmanager
    def snapshot(self, channel_id: str) -> Iterator[None]:
        conn = self._conn()
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise StoreFailure(f"Could not open read view for '{channel_id}': {e}") from e
        try:
            yield
        except sqlite3.Error as e:
            self._rollback(conn)
            raise StoreFailure(f"Read failed for channel '{channel_id}': {e}") from e
        except BaseException:
            self._rollback(conn)
            raise
        try:
            if conn.in_transaction:
                conn.execute("COMMIT")
        except sqlite3.Error as e:
            self._rollback(conn)
            raise StoreFailure(f"Could not close read view for '{channel_id}': {e}") from e

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        if conn.in_transaction:
            conn.execute("ROLLBACK")

    def read_ordered(self, channel_id: str) -> list[Item]:
        rows = self._conn().execute(
            f"SELECT {_COLUMNS} FROM playlist_items WHERE channel_id = ? ORDER BY position ASC",
            (channel_id,),
        ).fetchall()
        return [_row_to_item(row) for row in rows]

    def read_page(self, channel_id: str, offset: int, limit: int) -> list[Item]:
        rows = self._conn().execute(
            f"""
            SELECT {_COLUMNS} FROM playlist_items
            WHERE channel_id = ?
            ORDER BY position ASC
            LIMIT ? OFFSET ?
            """,
            (channel_id, limit, offset),
        ).fetchall()
        return [_row_to_item(row) for row in rows]

    def count(self, channel_id: str) -> int:
        return self._conn().execute(
            "SELECT COUNT(*) FROM playlist_items WHERE channel_id = ?", (channel_id,)
        ).fetchone()[0]

    def find_by_id(self, item_id: str) -> Item | None:
        row = self._conn().execute(
            f"SELECT {_COLUMNS} FROM playlist_items WHERE item_id = ?", (item_id,)
        ).fetchone()
        return _row_to_item(row) if row else None

    def create(self, item: Item) -> None:
        self._conn().execute(
            "INSERT INTO playlist_items (item_id, channel_id, title, position) VALUES (?, ?, ?, ?)",
            (item.item_id, item.channel_id, item.title, item.position),
        )

    def delete_by_id(self, item_id: str) -> None:
        self._conn().execute("DELETE FROM playlist_items WHERE item_id = ?", (item_id,))

    def shift_from(self, channel_id: str, from_position: int, delta: int) -> None:
        self._conn().execute(
            "UPDATE playlist_items SET position = position + ? WHERE channel_id = ? AND position >= ?",
            (delta, channel_id, from_position),
        )

    def shift_range(
        self, channel_id: str, from_position: int, to_position: int, delta: int
    ) -> None:
        self._conn().execute(
            """
            UPDATE playlist_items SET position = position + ?
            WHERE channel_id = ? AND position >= ? AND position <= ?
            """,
            (delta, channel_id, from_position, to_position),
        )

    def set_position(self, item_id: str, position: int) -> None:
        self._conn().execute(
            "UPDATE playlist_items SET position = ? WHERE item_id = ?", (position, item_id)
        )

    def ping(self) -> bool:
        self._conn().execute("SELECT 1").fetchone()
        return True


def default_store() -> SqlitePlaylistStore:
    """Store for the configured database, shared so channel locks are shared."""
    db_path = store.database_path()
    key = str(db_path)
    with _stores_lock:
        existing = _stores.get(key)
        if existing is None:
            existing = _stores[key] = SqlitePlaylistStore(db_path)
        return existing
