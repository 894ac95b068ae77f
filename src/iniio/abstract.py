# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike
from typing import TypeVar

T = TypeVar('T')


class FileHandler[T](metaclass=ABCMeta):
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = str(filename)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn


class EntryCommitter(metaclass=ABCMeta):
    """The "commit one key to a file" capability.

    `value=None` drops the key, `key=None` drops the whole section.
    """
    @abstractmethod
    def commit(
        self, section: str, key: str | None, value: str | None, path: str
    ) -> bool:
        raise NotImplementedError

    @abstractmethod
    def last_write_time(self, path: str) -> int:
        """Modification time of `path`, in nanoseconds."""
        raise NotImplementedError
