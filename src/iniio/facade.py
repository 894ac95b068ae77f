# -*- encoding: utf-8 -*-
# @File   : facade.py
# @Time   : 2024/10/13 02:40:58
# @Author : Kariko Lin

"""The easy way in: one object per INI file, plain scalars in and out.

```python
ini = ConfigurationFile('MyECFMail.ini')
ini.read_value('environment', 'cloud')             # 'false'
ini.read_value_as_boolean('environment', 'cloud')  # (True, False)
```
"""

from collections.abc import Mapping
from os import PathLike

from .batch import BatchWriter
from .manager import EntryWriter, PendingWriteQueue
from .store import IniStore


class ConfigurationFile:
    def __init__(
        self, path: str | PathLike[str],
        encoding: str | None = None, *,
        writer: EntryWriter | None = None
    ) -> None:
        """Raises `BadIniPath` or `MalformedIniFile`."""
        self._store = IniStore(path, encoding=encoding, writer=writer)

    @property
    def store(self) -> IniStore:
        return self._store

    @property
    def last_error(self) -> str:
        return self._store.writer.last_error

    def get_section_names(self) -> list[str]:
        return self._store.section_names()

    def contains_section(self, name: str) -> bool:
        return self._store.contains_section(name)

    def contains_property(self, name: str) -> bool:
        return self._store.contains_property(name)

    def locate_property(self, name: str) -> tuple[bool, str, str]:
        """`(found, section, value)`, with empty strings if not found."""
        if (e := self._store.find_property(name)) is None:
            return False, '', ''
        return True, e.section, e.value or ''

    def read_value(self, section: str, name: str) -> str:
        return self._store.read_value(section, name)

    def read_value_as_boolean(
        self, section: str, name: str
    ) -> tuple[bool, bool]:
        return self._store.read_boolean(section, name)

    def read_value_as_integer(
        self, section: str, name: str
    ) -> tuple[bool, int]:
        return self._store.read_integer(section, name)

    def read_value_as_long(self, section: str, name: str) -> tuple[bool, int]:
        return self._store.read_long(section, name)

    def write_entry(self, section: str, name: str, value: str) -> bool:
        return self._store.write_entry(section, name, value)

    def remove_entry(self, section: str, name: str) -> bool:
        return self._store.remove_entry(section, name)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return self._store.to_dict()

    def __str__(self) -> str:
        return str(self._store)


class BatchConfigurationFile(ConfigurationFile):
    """`ConfigurationFile` plus staged writes."""
    def __init__(
        self, path: str | PathLike[str],
        encoding: str | None = None, *,
        writer: EntryWriter | None = None,
        queue: PendingWriteQueue | None = None
    ) -> None:
        super().__init__(path, encoding, writer=writer)
        self._batch: BatchWriter = self._store.batch(queue)

    @property
    def batch(self) -> BatchWriter:
        return self._batch

    def save_entry(
        self, section: str, name: str, value: str | None = None
    ) -> bool:
        return self._batch.save_entry(section, name, value)

    def save_entries(
        self, entries: Mapping[str, Mapping[str, str | None]]
    ) -> bool:
        return self._batch.save_entries(entries)

    def remove_saved_entry(
        self, section: str, name: str, value: str | None = None
    ) -> bool:
        return self._batch.remove_saved_entry(section, name, value)

    def remove_saved_entries(
        self, entries: Mapping[str, Mapping[str, str | None]]
    ) -> bool:
        return self._batch.remove_saved_entries(entries)

    def contains_saved_entry(
        self, section: str, name: str, value: str | None = None
    ) -> bool:
        return self._batch.contains_saved_entry(section, name, value)

    def write_saved_entries(self) -> bool:
        return self._batch.write_saved_entries()
