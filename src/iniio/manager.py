# -*- encoding: utf-8 -*-
# @File   : manager.py
# @Time   : 2024/10/13 00:12:36
# @Author : Kariko Lin

"""Putting entries on disk, either right away or in batches.

- `EntryWriter` commits one entry at a time, behind a single lock.
- `PendingWriteQueue` stages entries per file, and flushes them all
at once with a thread per file.

KNOWN GAPS (kept on purpose, callers should be aware):
1. `PendingWriteQueue.flush()` calls the committer *directly*,
so it does NOT serialize against `EntryWriter.commit()`.
2. `flush()` clears the queue right after dispatching,
i.e. before the per-file tasks finish. Use `join()` to wait for them.
3. `last_error` is one slot shared by everything using the writer,
last failure wins. It is not a per-request error report.
"""

import logging
import os
import time
from collections.abc import Iterable
from multiprocessing.pool import AsyncResult, ThreadPool
from os.path import abspath
from threading import Lock, RLock

from .abstract import EntryCommitter
from .entry import Entry
from .ini.profile import ProfileCommitter

__all__ = [
    'EntryWriter', 'PendingWriteQueue', 'default_writer', 'default_queue'
]

NO_ERROR = "No error message set."


class EntryWriter:
    def __init__(self, committer: EntryCommitter | None = None) -> None:
        self.committer = committer or ProfileCommitter()
        self.__lock = Lock()
        self.__last_error = NO_ERROR

    @property
    def last_error(self) -> str:
        """Latest failure message of this writer (or its queues)."""
        return self.__last_error

    def record_error(self, where: str, reason: object) -> None:
        self.__last_error = f'{where}: {reason}'
        logging.warning(self.__last_error)

    @staticmethod
    def touch(path: str) -> None:
        # use the precise clock, fs timestamps may be jiffy-grained.
        now = time.time_ns()
        os.utime(path, ns=(now, now))

    def last_write_time(self, path: str) -> int:
        return self.committer.last_write_time(path)

    def __commit(self, where: str, entry: Entry, path: str) -> bool:
        try:
            with self.__lock:
                ok = self.committer.commit(
                    entry.section, entry.property, entry.value, path)
                if ok and os.path.exists(path):
                    self.touch(path)
        except Exception as e:
            self.record_error(where, e)
            return False
        if not ok:
            self.record_error(
                where, f'[{entry.section}] {entry.property} not committed '
                f'to {path}')
        return ok

    def commit(self, entry: Entry, path: str) -> bool:
        """Write (or overwrite) `entry` into `path`."""
        return self.__commit('WriteEntry', entry, abspath(path))

    def remove(self, entry: Entry, path: str) -> bool:
        """Drop `entry.property` from `[entry.section]` in `path`."""
        return self.__commit(
            'RemoveEntry', entry.with_value(None), abspath(path))


class PendingWriteQueue:
    """Entries staged per file, waiting for `flush()`.

    Files are keyed by absolute path,
    so `a.ini` and `./a.ini` share one pending list.
    """
    def __init__(
        self, writer: EntryWriter | None = None, workers: int | None = None
    ) -> None:
        self._writer = writer or default_writer()
        self._workers = workers
        self.__lock = RLock()
        self.__entries: dict[str, list[Entry]] = {}
        self.__pool: ThreadPool | None = None
        self.__inflight: list[AsyncResult] = []

    @property
    def writer(self) -> EntryWriter:
        return self._writer

    @property
    def last_error(self) -> str:
        return self._writer.last_error

    def __len__(self) -> int:
        with self.__lock:
            return sum(len(i) for i in self.__entries.values())

    def paths(self) -> list[str]:
        with self.__lock:
            return list(self.__entries)

    def pending(self, path: str) -> list[Entry]:
        with self.__lock:
            return list(self.__entries.get(abspath(path), []))

    def stage(self, entry: Entry, path: str) -> bool:
        with self.__lock:
            self.__entries.setdefault(abspath(path), []).append(entry)
        return True

    def stage_many(self, path: str, entries: Iterable[Entry]) -> bool:
        """Stage in order; stop at the first failure.

        Entries staged before the failure are NOT rolled back.
        """
        for i in entries:
            if not self.stage(i, path):
                return False
        return True

    def unstage(self, entry: Entry, path: str) -> bool:
        """Drop all staged entries equal to `entry`.

        Always `True`, even if nothing matched.
        Check with `contains()` if that matters.
        """
        key = abspath(path)
        with self.__lock:
            if key in self.__entries:
                self.__entries[key] = [
                    i for i in self.__entries[key] if i != entry]
        return True

    def unstage_many(self, path: str, entries: Iterable[Entry]) -> bool:
        for i in entries:
            if not self.unstage(i, path):
                return False
        return True

    def contains(self, entry: Entry, path: str) -> bool:
        with self.__lock:
            return entry in self.__entries.get(abspath(path), ())

    def __flush_file(self, path: str, entries: list[Entry]) -> None:
        commit = self._writer.committer.commit
        for i in entries:
            if not commit(i.section, i.property, i.value, path):
                self._writer.record_error(
                    'FlushEntries',
                    f'[{i.section}] {i.property} not committed to {path}')
        if entries and os.path.exists(path):
            self._writer.touch(path)
        logging.debug(f'{len(entries)} entries flushed to {path}')

    def __on_flush_error(self, e: BaseException) -> None:
        self._writer.record_error('FlushEntries', e)

    def flush(self) -> bool:
        """Dispatch one task per file, then empty the queue.

        Does not wait for the tasks. Their failures only show up
        in `last_error` (and the log).
        """
        try:
            with self.__lock:
                if self.__pool is None:
                    self.__pool = ThreadPool(self._workers)
                self.__inflight = [
                    i for i in self.__inflight if not i.ready()]
                for path, entries in self.__entries.items():
                    self.__inflight.append(self.__pool.apply_async(
                        self.__flush_file, (path, list(entries)),
                        error_callback=self.__on_flush_error))
                self.__entries.clear()
        except Exception as e:
            self._writer.record_error('FlushEntries', e)
            return False
        return True

    def join(self, timeout: float | None = None) -> None:
        """Wait for the flush tasks dispatched so far."""
        with self.__lock:
            inflight = list(self.__inflight)
        for i in inflight:
            i.wait(timeout)

    def close(self) -> None:
        """Finish in-flight flushes and release the worker threads."""
        with self.__lock:
            pool, self.__pool = self.__pool, None
            self.__inflight = []
        if pool is not None:
            pool.close()
            pool.join()


_defaults_lock = Lock()
_default_writer: EntryWriter | None = None
_default_queue: PendingWriteQueue | None = None


def default_writer() -> EntryWriter:
    """The process-wide writer, used when none is injected."""
    global _default_writer
    with _defaults_lock:
        if _default_writer is None:
            _default_writer = EntryWriter()
        return _default_writer


def default_queue() -> PendingWriteQueue:
    """The process-wide pending-write queue, used when none is injected."""
    global _default_queue
    if _default_queue is None:
        writer = default_writer()
        with _defaults_lock:
            if _default_queue is None:
                _default_queue = PendingWriteQueue(writer)
    return _default_queue
