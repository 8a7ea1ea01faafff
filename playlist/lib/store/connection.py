import contextvars
import sqlite3
import threading
from dataclasses import fields
from pathlib import Path
from typing import Any, TypeVar

from playlist.lib import config, paths
from playlist.lib.store import migrations
from playlist.lib.store.sqlite import connect

T = TypeVar("T")

Row = sqlite3.Row

_connections = threading.local()
_migrated: set[str] = set()
_opened: list[sqlite3.Connection] = []
_registry_lock = threading.Lock()
_generation = 0

# Context variable for test isolation - overrides paths.dot_playlist()
_db_path_override: contextvars.ContextVar[Path | None] = contextvars.ContextVar(
    "db_path_override", default=None
)


def database_path() -> Path:
    """Resolve the active database file, honouring the test override."""
    override = _db_path_override.get()
    base = override if override is not None else paths.dot_playlist()
    return base / config.database_file()


def database_exists() -> bool:
    return database_path().exists()


def from_row(row: dict[str, Any] | Any, dataclass_type: type[T]) -> T:
    """Convert dict-like row to dataclass instance.

    Backend-agnostic: works with sqlite3.Row, dict, or any dict-like object.
    """
    field_names = {f.name for f in fields(dataclass_type)}
    row_dict = dict(row) if not isinstance(row, dict) else row
    kwargs = {key: row_dict[key] for key in field_names if key in row_dict}
    return dataclass_type(**kwargs)


def ensure(db_path: Path | None = None) -> sqlite3.Connection:
    """Ensure the database exists with migrations applied.

    Returns a connection cached per thread and per database file, so worker
    threads each hold their own connection to the same file.
    """
    db_path = db_path or database_path()
    cache_key = str(db_path)

    if getattr(_connections, "generation", None) != _generation:
        _connections.by_path = {}
        _connections.generation = _generation

    conn = _connections.by_path.get(cache_key)
    if conn is not None:
        return conn

    db_path.parent.mkdir(parents=True, exist_ok=True)

    with _registry_lock:
        if cache_key not in _migrated:
            migrations.ensure_schema(db_path, migrations.load_migrations("playlist.core"))
            _migrated.add(cache_key)

    conn = connect(db_path)
    _connections.by_path[cache_key] = conn
    with _registry_lock:
        _opened.append(conn)

    return conn


def close_all() -> None:
    """Close every connection opened by ensure(), across all threads.

    Bumps the generation so other threads drop their stale cache on next use.
    """
    global _generation
    with _registry_lock:
        for conn in _opened:
            conn.close()
        _opened.clear()
        _generation += 1


def set_test_db_path(db_dir: Path | None) -> None:
    """Set database directory override for test isolation.

    Call with path to override, None to clear.
    """
    _db_path_override.set(db_dir)


def _reset_for_testing() -> None:
    _db_path_override.set(None)
    close_all()
    with _registry_lock:
        _migrated.clear()
