# -*- encoding: utf-8 -*-
# @File   : batch.py
# @Time   : 2024/10/13 02:05:12
# @Author : Kariko Lin

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from .entry import Entry
from .manager import PendingWriteQueue, default_queue

if TYPE_CHECKING:
    from .store import IniStore


def flatten(
    entries: Mapping[str, Mapping[str, str | None]]
) -> Iterator[Entry]:
    """`{section: {property: value}}` -> `Entry`s, in mapping order."""
    for section, pairs in entries.items():
        for k, v in pairs.items():
            yield Entry(section, k, v)


class BatchWriter:
    """Stage entries for the file of an `IniStore`, then write them at once.

    Staged entries live in a `PendingWriteQueue`,
    which may be shared with writers of other files.
    `write_saved_entries()` flushes *every* file in that queue.
    """
    def __init__(
        self, store: 'IniStore', queue: PendingWriteQueue | None = None
    ) -> None:
        self._store = store
        self._queue = queue or default_queue()

    @property
    def queue(self) -> PendingWriteQueue:
        return self._queue

    @property
    def last_error(self) -> str:
        return self._queue.last_error

    def save_entry(
        self, section: str, name: str, value: str | None = None
    ) -> bool:
        return self._queue.stage(Entry(section, name, value), self._store.path)

    def save_entries(
        self, entries: Mapping[str, Mapping[str, str | None]]
    ) -> bool:
        return self._queue.stage_many(self._store.path, flatten(entries))

    def remove_saved_entry(
        self, section: str, name: str, value: str | None = None
    ) -> bool:
        return self._queue.unstage(
            Entry(section, name, value), self._store.path)

    def remove_saved_entries(
        self, entries: Mapping[str, Mapping[str, str | None]]
    ) -> bool:
        return self._queue.unstage_many(self._store.path, flatten(entries))

    def contains_saved_entry(
        self, section: str, name: str, value: str | None = None
    ) -> bool:
        return self._queue.contains(
            Entry(section, name, value), self._store.path)

    def saved_entries(self) -> list[Entry]:
        return self._queue.pending(self._store.path)

    def write_saved_entries(self) -> bool:
        return self._queue.flush()
