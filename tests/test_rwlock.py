"""Tests for the RWLock guarding Matcher state.

Tests verify:
- Shared readers, exclusive writer
- Writer preference over newly arriving readers
- Reentrant reads
- Upgrade, downgrade and nested write rejection
- Introspection properties
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from langbundle.runtime.rwlock import RWLock


class TestRWLockAccess:
    """Test shared and exclusive access."""

    def test_readers_overlap(self) -> None:
        """Several readers hold the lock at the same time."""
        lock = RWLock()
        inside = threading.Barrier(3, timeout=5)

        def reader() -> int:
            with lock.read():
                inside.wait()  # only passes if all three are inside together
                return lock.reader_count

        with ThreadPoolExecutor(max_workers=3) as executor:
            counts = list(executor.map(lambda _: reader(), range(3)))

        assert max(counts) == 3
        assert lock.reader_count == 0

    def test_writer_excludes_readers(self) -> None:
        """A reader waits until the writer releases."""
        lock = RWLock()
        writer_inside = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writer_inside.set()
                time.sleep(0.05)
                order.append("writer")

        def reader() -> None:
            writer_inside.wait()
            with lock.read():
                order.append("reader")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["writer", "reader"]

    def test_reader_excludes_writer(self) -> None:
        """A writer waits until the reader releases."""
        lock = RWLock()
        reader_inside = threading.Event()
        order: list[str] = []

        def reader() -> None:
            with lock.read():
                reader_inside.set()
                time.sleep(0.05)
                order.append("reader")

        def writer() -> None:
            reader_inside.wait()
            with lock.write():
                order.append("writer")

        threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["reader", "writer"]

    def test_waiting_writer_blocks_new_readers(self) -> None:
        """Writer preference: a queued writer goes before a later reader."""
        lock = RWLock()
        first_reader_inside = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                first_reader_inside.set()
                time.sleep(0.1)
                order.append("first-reader")

        def writer() -> None:
            first_reader_inside.wait()
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            first_reader_inside.wait()
            time.sleep(0.03)  # let the writer queue up first
            with lock.read():
                order.append("late-reader")

        threads = [
            threading.Thread(target=first_reader),
            threading.Thread(target=writer),
            threading.Thread(target=late_reader),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["first-reader", "writer", "late-reader"]


class TestRWLockReentrancy:
    """Test reentrant reads and rejected lock transitions."""

    def test_nested_reads(self) -> None:
        """The same thread can nest read acquisitions."""
        lock = RWLock()
        with lock.read(), lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_upgrade_rejected(self) -> None:
        """Read-to-write upgrade raises RuntimeError."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="Cannot upgrade read lock"):
            with lock.write():
                pass

    def test_downgrade_rejected(self) -> None:
        """Write-to-read downgrade raises RuntimeError."""
        lock = RWLock()
        with lock.write(), pytest.raises(
            RuntimeError, match="Cannot acquire read lock while holding write lock"
        ):
            with lock.read():
                pass

    def test_nested_write_rejected(self) -> None:
        """Write reentry raises RuntimeError."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding write lock"):
            with lock.write():
                pass

    def test_lock_usable_after_rejection(self) -> None:
        """A rejected transition leaves the lock consistent."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError):
            with lock.write():
                pass
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active
        assert lock.reader_count == 0


class TestRWLockState:
    """Test introspection properties."""

    def test_idle_lock(self) -> None:
        """A fresh lock has no readers and no writer."""
        lock = RWLock()
        assert lock.reader_count == 0
        assert not lock.writer_active

    def test_writer_active_during_write(self) -> None:
        """writer_active reflects the write section."""
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_many_writers_serialize(self) -> None:
        """Concurrent writers never overlap."""
        lock = RWLock()
        counter = {"value": 0, "inside": 0, "max_inside": 0}

        def increment() -> None:
            with lock.write():
                counter["inside"] += 1
                counter["max_inside"] = max(counter["max_inside"], counter["inside"])
                counter["value"] += 1
                counter["inside"] -= 1

        with ThreadPoolExecutor(max_workers=10) as executor:
            for future in [executor.submit(increment) for _ in range(200)]:
                future.result()

        assert counter["value"] == 200
        assert counter["max_inside"] == 1
