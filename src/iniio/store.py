# -*- encoding: utf-8 -*-
# @File   : store.py
# @Time   : 2024/10/13 01:27:50
# @Author : Kariko Lin

"""INI file contents, kept in sync with the file on disk.

Each query re-reads the file first if its modification time
is no longer the one seen at the last read.
Writes go straight to disk through an `EntryWriter`,
the in-memory contents follow on the next query.
"""

from os import PathLike
from os.path import abspath, isfile

from .batch import BatchWriter
from .entry import Entry
from .errors import BadIniPath
from .ini.model import IniContents, RawSectionBlock
from .ini.parser import IniParser
from .ini.profile import ProfileCommitter
from .manager import EntryWriter, PendingWriteQueue, default_writer


class IniStore:
    def __init__(
        self, path: str | PathLike[str], *,
        encoding: str | None = None,
        writer: EntryWriter | None = None
    ) -> None:
        if not isfile(path):
            raise BadIniPath(str(path))
        self._fn = abspath(path)
        self._writer = writer or default_writer()
        self.__parser = IniParser(self._fn, encoding)
        self.__blocks: list[RawSectionBlock] = []
        self.__contents: IniContents | None = None
        self.__last_read = 0
        self.reload()

    @property
    def path(self) -> str:
        return self._fn

    @property
    def writer(self) -> EntryWriter:
        return self._writer

    @property
    def encoding(self) -> str | None:
        return self.__parser.encoding

    def reload(self) -> None:
        """Re-read the file unconditionally."""
        mtime = self._writer.last_write_time(self._fn)
        self.__blocks = self.__parser.read()
        self.__contents = None
        self.__last_read = mtime
        self.__remember_codec()

    def __remember_codec(self) -> None:
        # so that commits to this file decode it the way we just did.
        committer = self._writer.committer
        if self.encoding is not None \
                and isinstance(committer, ProfileCommitter):
            committer.use_encoding(self._fn, self.encoding)

    def is_stale(self) -> bool:
        """A vanished file is not stale: the last contents keep serving."""
        try:
            mtime = self._writer.last_write_time(self._fn)
        except FileNotFoundError:
            return False
        return mtime != self.__last_read

    def __fresh(self) -> IniContents:
        if self.is_stale():
            self.reload()
        if self.__contents is None:
            self.__contents = IniContents.from_blocks(self.__blocks)
        return self.__contents

    @property
    def blocks(self) -> list[RawSectionBlock]:
        self.__fresh()
        return list(self.__blocks)

    @property
    def contents(self) -> IniContents:
        return self.__fresh()

    # queries

    def section_names(self) -> list[str]:
        return list(self.__fresh())

    def contains_section(self, name: str) -> bool:
        return name in self.__fresh()

    def contains_property(self, name: str) -> bool:
        return self.__fresh().has_property(name)

    def find_property(self, name: str) -> Entry | None:
        """See `IniContents.find_property()`: last match wins."""
        return self.__fresh().find_property(name)

    def read_entry(self, section: str, name: str) -> Entry:
        """Value left `None` if not found."""
        return Entry(section, name, self.__fresh().value_of(section, name))

    def read_value(self, section: str, name: str) -> str:
        """Empty string if not found. No exceptions here."""
        return self.read_entry(section, name).value or ''

    def read_boolean(self, section: str, name: str) -> tuple[bool, bool]:
        return self.read_entry(section, name).as_boolean()

    def read_integer(self, section: str, name: str) -> tuple[bool, int]:
        return self.read_entry(section, name).as_integer()

    def read_long(self, section: str, name: str) -> tuple[bool, int]:
        return self.read_entry(section, name).as_long()

    def to_dict(self) -> dict[str, dict[str, str]]:
        return self.__fresh().to_dict()

    # mutations

    def write_entry(self, section: str, name: str, value: str) -> bool:
        return self._writer.commit(Entry(section, name, value), self._fn)

    def remove_entry(self, section: str, name: str) -> bool:
        return self._writer.remove(Entry(section, name), self._fn)

    def batch(self, queue: PendingWriteQueue | None = None) -> BatchWriter:
        return BatchWriter(self, queue)

    def __str__(self) -> str:
        self.__fresh()
        return '\n'.join(str(i) for i in self.__blocks)

    def __repr__(self) -> str:
        return f'<IniStore {self._fn}>'
