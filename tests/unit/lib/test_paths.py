from pathlib import Path

from playlist.lib import paths


def test_home_respects_env_var(monkeypatch):
    monkeypatch.setenv("PLAYLIST_HOME", "/custom/playlist")

    assert paths.dot_playlist() == Path("/custom/playlist")


def test_home_expands_user(monkeypatch):
    monkeypatch.setenv("PLAYLIST_HOME", "~/alt")

    assert paths.dot_playlist() == Path.home() / "alt"


def test_home_default(monkeypatch):
    monkeypatch.delenv("PLAYLIST_HOME", raising=False)

    assert paths.dot_playlist() == Path.home() / ".playlist"
