"""Tests for the repository reader/writer lock."""

import threading
import time

from gitglass.git.locking import RepositoryLock


class TestRepositoryLock:
    def test_readers_share(self):
        lock = RepositoryLock()
        inside = threading.Barrier(2, timeout=2)

        def reader():
            with lock.read():
                inside.wait()  # both readers must be inside together

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=3)
        assert not any(t.is_alive() for t in threads)

    def test_writer_excludes_readers(self):
        lock = RepositoryLock()
        events = []
        writer_in = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()
                time.sleep(0.1)
                events.append("writer-done")

        def reader():
            writer_in.wait()
            with lock.read():
                events.append("reader")

        w = threading.Thread(target=writer)
        r = threading.Thread(target=reader)
        w.start()
        r.start()
        w.join(timeout=3)
        r.join(timeout=3)
        assert events == ["writer-done", "reader"]

    def test_writers_serialise(self):
        lock = RepositoryLock()
        active = []
        overlaps = []

        def writer():
            with lock.write():
                active.append(1)
                if len(active) > 1:
                    overlaps.append(True)
                time.sleep(0.02)
                active.pop()

        threads = [threading.Thread(target=writer) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=3)
        assert overlaps == []

    def test_released_after_exception(self):
        lock = RepositoryLock()
        try:
            with lock.write():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with lock.read():
            pass
        with lock.write():
            pass
