# -*- encoding: utf-8 -*-
# @File   : profile.py
# @Time   : 2024/10/12 22:41:17
# @Author : Kariko Lin

"""Targeted edits of a single key, keeping every other line untouched.

Works the way `WritePrivateProfileString` does on Windows:
- `value=None` drops the key,
- `key=None` drops the whole section,
- a missing section (or file) gets created.
"""

import os
from os.path import abspath, exists

from ..abstract import EntryCommitter
from .model import RawSectionBlock, split_pair
from .parser import IniParser


def _key_of(line: str) -> str | None:
    pair = split_pair(line)
    return None if pair is None else pair[0]


def _check(section: str, key: str | None, value: str | None) -> None:
    if not section or any(i in section for i in ']\r\n'):
        raise ValueError(f'Bad section name: {section!r}')
    if key is not None and (
            not key or key[0] in ';#[' or any(i in key for i in '=\r\n')):
        raise ValueError(f'Bad property name: {key!r}')
    if value is not None and any(i in value for i in '\r\n'):
        raise ValueError(f'Multi-line value is not supported: {value!r}')


def _append(block: RawSectionBlock, line: str) -> None:
    # keep blank lines between sections where they were.
    at = len(block.lines)
    while at > 0 and not block.lines[at - 1].strip():
        at -= 1
    block.lines.insert(at, line)


def write_profile_string(
    section: str, key: str | None, value: str | None,
    path: str, encoding: str | None = None
) -> bool:
    """Commit one `key=value` into `[section]` of `path`.

    Only the first `key` line is replaced, since that is the one readers see.
    Raises `ValueError`, `MalformedIniFile` or `OSError` on failure.
    """
    _check(section, key, value)
    parser = IniParser(path, encoding)
    blocks = parser.read() if exists(path) else []
    owned = [i for i in blocks if i.name == section]

    if key is None:
        if owned:
            parser.write([i for i in blocks if i.name != section])
        return True

    if value is None:
        changed = False
        for block in owned:
            kept = [i for i in block.lines if _key_of(i) != key]
            if len(kept) != len(block.lines):
                block.lines[:] = kept
                changed = True
        if changed:
            parser.write(blocks)
        return True

    line = f'{key}={value}'
    for block in owned:
        for idx, i in enumerate(block.lines):
            if _key_of(i) == key:
                block.lines[idx] = line
                parser.write(blocks)
                return True
    if owned:
        _append(owned[-1], line)
    else:
        blocks.append(RawSectionBlock(f'[{section}]', [line]))
    parser.write(blocks)
    return True


class ProfileCommitter(EntryCommitter):
    """Default committer, backed by `write_profile_string()`.

    `encoding` is the fallback; files registered with `use_encoding()`
    are always read and written with their own codec.
    """
    def __init__(self, encoding: str | None = None) -> None:
        self._codec = encoding
        self.__codecs: dict[str, str] = {}

    def use_encoding(self, path: str, encoding: str) -> None:
        self.__codecs[abspath(path)] = encoding

    def encoding_of(self, path: str) -> str | None:
        return self.__codecs.get(abspath(path), self._codec)

    def commit(
        self, section: str, key: str | None, value: str | None, path: str
    ) -> bool:
        return write_profile_string(
            section, key, value, path, self.encoding_of(path))

    def last_write_time(self, path: str) -> int:
        return os.stat(path).st_mtime_ns
