"""
Tests for the asyncio reader/writer lock.
"""

import asyncio

import pytest

from model_store_api.app.core.locks import ReadWriteLock


class TestReadWriteLock:
    @pytest.mark.asyncio
    async def test_readers_share_the_lock(self):
        """Test that several readers hold the lock at the same time"""
        lock = ReadWriteLock()
        inside = asyncio.Event()
        peak = 0

        async def reader():
            nonlocal peak
            async with lock.read():
                peak = max(peak, lock.readers)
                if lock.readers == 3:
                    inside.set()
                await asyncio.wait_for(inside.wait(), timeout=1)

        await asyncio.gather(reader(), reader(), reader())

        assert peak == 3
        assert lock.readers == 0

    @pytest.mark.asyncio
    async def test_writer_excludes_readers(self):
        """Test that a reader waits until the writer releases"""
        lock = ReadWriteLock()
        events = []

        async with lock.write():
            reader = asyncio.create_task(self._read(lock, events))
            await asyncio.sleep(0.01)
            assert events == []
            events.append("write-done")

        await reader
        assert events == ["write-done", "read"]

    @pytest.mark.asyncio
    async def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        events = []

        async with lock.read():
            writer = asyncio.create_task(self._write(lock, events))
            await asyncio.sleep(0.01)
            assert not lock.writer_active
            events.append("read-done")

        await writer
        assert events == ["read-done", "write"]

    @pytest.mark.asyncio
    async def test_writers_are_exclusive(self):
        lock = ReadWriteLock()
        active = 0
        peak = 0

        async def writer():
            nonlocal active, peak
            async with lock.write():
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.001)
                active -= 1

        await asyncio.gather(*(writer() for _ in range(10)))

        assert peak == 1

    @pytest.mark.asyncio
    async def test_waiting_writer_blocks_new_readers(self):
        """Test that readers arriving after a queued writer run after it"""
        lock = ReadWriteLock()
        events = []

        async with lock.read():
            writer = asyncio.create_task(self._write(lock, events))
            await asyncio.sleep(0.01)
            late_reader = asyncio.create_task(self._read(lock, events))
            await asyncio.sleep(0.01)
            assert events == []

        await asyncio.gather(writer, late_reader)
        assert events == ["write", "read"]

    @pytest.mark.asyncio
    async def test_cancelled_writer_releases_readers(self):
        lock = ReadWriteLock()
        events = []

        async with lock.read():
            writer = asyncio.create_task(self._write(lock, events))
            await asyncio.sleep(0.01)
            late_reader = asyncio.create_task(self._read(lock, events))
            await asyncio.sleep(0.01)
            writer.cancel()
            with pytest.raises(asyncio.CancelledError):
                await writer
            await asyncio.wait_for(late_reader, timeout=1)

        assert events == ["read"]

    @staticmethod
    async def _read(lock, events):
        async with lock.read():
            events.append("read")

    @staticmethod
    async def _write(lock, events):
        async with lock.write():
            events.append("write")
