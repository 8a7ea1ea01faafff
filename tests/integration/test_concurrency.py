"""Concurrent callers: fingerprint compare-and-swap and snapshot reads under churn."""

import threading

from playlist.core import playlists
from playlist.core.errors import FingerprintConflict
from playlist.core.fingerprint import compute

CHANNEL = "ch-live"


def run_threads(targets):
    errors = []

    def guarded(target):
        try:
            target()
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=guarded, args=(target,)) for target in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    assert errors == []


def test_same_fingerprint_admits_one_writer(playlist_store, seed):
    _, captured = seed(playlist_store, CHANNEL, 3)
    barrier = threading.Barrier(6)
    outcomes = []
    outcomes_lock = threading.Lock()

    def attempt(n):
        def _attempt():
            barrier.wait()
            try:
                playlists.insert_item(CHANNEL, f"racer {n}", 0, captured, store=playlist_store)
                outcome = "ok"
            except FingerprintConflict as e:
                assert e.server_fingerprint != captured
                outcome = "conflict"
            with outcomes_lock:
                outcomes.append(outcome)

        return _attempt

    run_threads([attempt(n) for n in range(6)])

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == 5
    assert playlist_store.count(CHANNEL) == 4


def test_retrying_writers_all_land_contiguously(playlist_store, assert_contiguous):
    writers, per_writer = 4, 5

    def writer(tag):
        def _write():
            for k in range(per_writer):
                while True:
                    page = playlists.get_page(CHANNEL, limit=1, store=playlist_store)
                    try:
                        playlists.insert_item(
                            CHANNEL, f"{tag}-{k}", page.total_count, page.fingerprint,
                            store=playlist_store,
                        )
                        break
                    except FingerprintConflict:
                        continue

        return _write

    run_threads([writer(tag) for tag in range(writers)])

    titles = [item.title for item in playlist_store.read_ordered(CHANNEL)]
    assert sorted(titles) == sorted(f"{t}-{k}" for t in range(writers) for k in range(per_writer))
    assert_contiguous(playlist_store, CHANNEL)


def test_readers_see_whole_commits_during_moves(playlist_store, seed, assert_contiguous):
    item_ids, _ = seed(playlist_store, CHANNEL, 8)
    done = threading.Event()

    def mover():
        try:
            for step in range(40):
                current = playlists.current_fingerprint(CHANNEL, store=playlist_store)
                target = (step * 3) % len(item_ids)
                try:
                    playlists.move_item(
                        CHANNEL, item_ids[step % len(item_ids)], target, current,
                        store=playlist_store,
                    )
                except FingerprintConflict:
                    continue
        finally:
            done.set()

    def reader():
        while not done.is_set():
            page = playlists.get_page(CHANNEL, limit=100, store=playlist_store)
            assert [item.position for item in page.items] == list(range(8))
            assert page.total_count == 8
            assert page.fingerprint == compute(page.items)

    run_threads([mover, reader, reader])

    assert_contiguous(playlist_store, CHANNEL)


def test_channels_mutate_independently(playlist_store, assert_contiguous):
    channels = [f"ch-{n}" for n in range(4)]

    def fill(channel_id):
        def _fill():
            fingerprint = playlists.current_fingerprint(channel_id, store=playlist_store)
            for i in range(10):
                fingerprint = playlists.insert_item(
                    channel_id, f"{channel_id}/{i}", 0, fingerprint, store=playlist_store
                ).fingerprint

        return _fill

    run_threads([fill(channel_id) for channel_id in channels])

    for channel_id in channels:
        assert playlist_store.count(channel_id) == 10
        assert_contiguous(playlist_store, channel_id)
