"""Database connection management and utilities."""

from playlist.lib.store.connection import (
    Row,
    _reset_for_testing,
    close_all,
    database_exists,
    database_path,
    ensure,
    from_row,
    set_test_db_path,
)
from playlist.lib.store.sqlite import connect

__all__ = [
    "ensure",
    "from_row",
    "Row",
    "database_exists",
    "database_path",
    "_reset_for_testing",
    "set_test_db_path",
    "close_all",
    "connect",
]
