# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure, in two layers:

- `RawSectionBlock`s keep what the file says, line by line;
- `IniContents` is the normalized `section -> {property: value}` view.

Only `key=value` pairs split at the *first* `=` are understood.
No quotes, no inline comments, no multi-line values.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from re import compile as regex
from typing import Iterator

from ..entry import Entry

# text strictly between the first `[` and the next `]`.
_SECTION_NAME = regex(r'(?<=\[)(.*?)(?=\])')
_COMMENT_MARKS = (';', '#')


def clean_section_name(header: str) -> str | None:
    if (m := _SECTION_NAME.search(header)) is None:
        return None
    return m.group(0)


def split_pair(line: str) -> tuple[str, str] | None:
    """`k=a=b` -> `('k', 'a=b')`.

    Returns `None` for comments, blanks, and lines
    without `=` (or starting with it).
    """
    if not line or line[0] in _COMMENT_MARKS:
        return None
    loc = line.find('=')
    if loc < 1:
        return None
    return line[:loc], line[loc + 1:]


@dataclass
class RawSectionBlock:
    header: str  # literal, brackets included
    lines: list[str] = field(default_factory=list)

    @property
    def name(self) -> str | None:
        return clean_section_name(self.header)

    def pairs(self) -> Iterator[tuple[str, str]]:
        for i in self.lines:
            if (pair := split_pair(i)) is not None:
                yield pair

    def __str__(self) -> str:
        return '\n'.join([self.header, *self.lines])


class IniSection(Mapping[str, str]):
    """Read-only `property -> value` dict of a section."""
    def __init__(self, name: str, pairs: dict[str, str]) -> None:
        self._name = name
        self.__raw = pairs

    def __getitem__(self, key: str) -> str:
        return self.__raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self.__raw))

    def to_dict(self) -> dict[str, str]:
        return self.__raw.copy()


class IniContents(Mapping[str, IniSection]):
    """Normalized INI document: `section -> IniSection`.

    Keys within a section are unique; the first occurrence wins,
    even across repeated `[section]` headers.
    """
    def __init__(self) -> None:
        self.__raw: dict[str, dict[str, str]] = {}

    @classmethod
    def from_blocks(cls, blocks: Iterable[RawSectionBlock]) -> 'IniContents':
        ret = cls()
        for block in blocks:
            if (name := block.name) is None:
                continue
            section = ret.__raw.setdefault(name, {})
            for key, val in block.pairs():
                section.setdefault(key, val)
        return ret

    def __getitem__(self, key: str) -> IniSection:
        return IniSection(key, self.__raw[key])

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def has_property(self, name: str) -> bool:
        return any(name in i for i in self.__raw.values())

    def find_property(self, name: str) -> Entry | None:
        """Locate `name` across all sections.

        NOTE: the scan never stops early,
        so with the same property in several sections
        the *last* section in iteration order is reported.
        """
        ret = None
        for section, pairs in self.__raw.items():
            if name in pairs:
                logging.debug(f'{section} | {name} | {pairs[name]}')
                ret = Entry(section, name, pairs[name])
        return ret

    def value_of(self, section: str, name: str) -> str | None:
        if section not in self.__raw:
            return None
        return self.__raw[section].get(name)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {k: v.copy() for k, v in self.__raw.items()}
