"""
Tests for the active session registry and its reader-writer lock.
"""
import threading
from concurrent.futures import ThreadPoolExecutor

from torc.services.registry import ActiveSessionRegistry, ReadWriteLock


class TestActiveSessionRegistry:

    def test_starts_empty(self, registry):
        assert registry.get() == ""

    def test_set_and_get(self, registry):
        registry.set("friday")
        assert registry.get() == "friday"
        registry.set("saturday")
        assert registry.get() == "saturday"

    def test_clear(self, registry):
        registry.set("friday")
        registry.clear()
        assert registry.get() == ""

    def test_instances_are_independent(self):
        a, b = ActiveSessionRegistry(), ActiveSessionRegistry()
        a.set("one")
        assert b.get() == ""

    def test_concurrent_readers_see_whole_values(self, registry):
        names = {"", "alpha", "beta-session", "gamma_3"}

        def worker(i):
            if i % 4 == 0:
                registry.set(["alpha", "beta-session", "gamma_3"][i % 3])
                return None
            return registry.get()

        with ThreadPoolExecutor(max_workers=16) as pool:
            seen = [v for v in pool.map(worker, range(400)) if v is not None]

        assert set(seen) <= names


class TestReadWriteLock:

    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        second_reader_in = threading.Event()

        def second_reader():
            with lock.read():
                second_reader_in.set()

        with lock.read():
            t = threading.Thread(target=second_reader)
            t.start()
            assert second_reader_in.wait(timeout=2)
        t.join(timeout=2)

    def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        writer_in = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()

        with lock.read():
            t = threading.Thread(target=writer)
            t.start()
            assert not writer_in.wait(timeout=0.2)

        assert writer_in.wait(timeout=2)
        t.join(timeout=2)

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        reader_in = threading.Event()

        def reader():
            with lock.read():
                reader_in.set()

        with lock.write():
            t = threading.Thread(target=reader)
            t.start()
            assert not reader_in.wait(timeout=0.2)

        assert reader_in.wait(timeout=2)
        t.join(timeout=2)
