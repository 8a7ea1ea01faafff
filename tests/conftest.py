import pytest

from playlist.core import playlists
from playlist.core.db import SqlitePlaylistStore
from playlist.core.memory import MemoryPlaylistStore
from playlist.lib import config, paths, store


@pytest.fixture
def test_db(monkeypatch, tmp_path):
    """Isolated playlist home per test execution.

    Provides:
    - Temporary ~/.playlist replacement holding config.yaml and the database
    - Fresh connection cache and config cache (setup + teardown reset)

    ALL tests touching the default store must accept this fixture.
    """
    store._reset_for_testing()
    config.clear_cache()

    home = tmp_path / ".playlist"
    home.mkdir()
    monkeypatch.setattr(paths, "dot_playlist", lambda: home)

    yield home

    store._reset_for_testing()
    config.clear_cache()


@pytest.fixture
def memory_store():
    return MemoryPlaylistStore()


@pytest.fixture
def sqlite_store(test_db):
    return SqlitePlaylistStore(test_db / "playlist.db")


@pytest.fixture(params=["sqlite", "memory"])
def playlist_store(request):
    """Run a test against both persistence port implementations."""
    return request.getfixturevalue(f"{request.param}_store")


def _seed(playlist_store, channel_id: str, count: int) -> tuple[list[str], str]:
    item_ids = []
    fingerprint = playlists.current_fingerprint(channel_id, store=playlist_store)
    for i in range(count):
        result = playlists.insert_item(
            channel_id, f"Item {i}", i, fingerprint, store=playlist_store
        )
        item_ids.append(result.item.item_id)
        fingerprint = result.fingerprint
    return item_ids, fingerprint


@pytest.fixture
def seed():
    """Append `count` items titled 'Item 0'.. and return (ids in order, fingerprint)."""
    return _seed


@pytest.fixture
def ordered_ids():
    def _ordered_ids(playlist_store, channel_id: str) -> list[str]:
        return [item.item_id for item in playlist_store.read_ordered(channel_id)]

    return _ordered_ids


@pytest.fixture
def assert_contiguous():
    def _assert_contiguous(playlist_store, channel_id: str) -> None:
        positions = [item.position for item in playlist_store.read_ordered(channel_id)]
        assert positions == list(range(len(positions)))

    return _assert_contiguous
