# -*- encoding: utf-8 -*-
# @File   : entry.py
# @Time   : 2024/10/12 21:10:05
# @Author : Kariko Lin

from dataclasses import dataclass
from re import compile as regex

_INTEGER = regex(r'\s*[+-]?\d+\s*')

INT32_RANGE = (-2 ** 31, 2 ** 31 - 1)
INT64_RANGE = (-2 ** 63, 2 ** 63 - 1)


def _parse_ranged(text: str | None, bounds: tuple[int, int]) -> int | None:
    if text is None or not _INTEGER.fullmatch(text):
        return None
    ret = int(text)
    if not bounds[0] <= ret <= bounds[1]:
        return None
    return ret


@dataclass(frozen=True)
class Entry:
    """A `(section, property, value)` triple.

    Equality is structural over all three fields,
    so an absent value (`None`) never equals an empty one (`''`).
    """
    section: str
    property: str
    value: str | None = None

    def with_value(self, value: str | None) -> 'Entry':
        return Entry(self.section, self.property, value)

    def as_boolean(self) -> tuple[bool, bool]:
        if self.value is None:
            return False, False
        match self.value.strip().lower():
            case 'true':
                return True, True
            case 'false':
                return True, False
        return False, False

    def as_integer(self) -> tuple[bool, int]:
        """32-bit signed only. Try `as_long()` for larger values."""
        ret = _parse_ranged(self.value, INT32_RANGE)
        return (False, 0) if ret is None else (True, ret)

    def as_long(self) -> tuple[bool, int]:
        ret = _parse_ranged(self.value, INT64_RANGE)
        return (False, 0) if ret is None else (True, ret)
