# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Line-oriented INI reader (and verbatim writer).

What we accept:
1. A line starting with `[` opens a section block,
which lasts until the next such line.
Repeated headers are kept as separate blocks.
2. Every other line belongs to the block above it, stored *as is*.
3. Anything but blank lines before the first header is an error.
"""

import os
from io import StringIO, TextIOBase
from os import PathLike
from os.path import abspath, dirname, exists
from shutil import copymode
from tempfile import mkstemp
from warnings import warn

import chardet

from ..abstract import FileHandler
from ..errors import MalformedIniFile
from .model import RawSectionBlock


class IniParser(FileHandler[list[RawSectionBlock]]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._newline = '\n'

    @property
    def encoding(self) -> str | None:
        """The codec in use, may be updated by `chardet` after `read()`."""
        return self._codec

    @property
    def newline(self) -> str:
        """Line terminator seen by the last `read()`, kept by `write()`."""
        return self._newline

    @staticmethod
    def readstream(buf: TextIOBase) -> list[RawSectionBlock]:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        ret: list[RawSectionBlock] = []
        this_block: RawSectionBlock | None = None
        lineno = 0
        while i := buf.readline():
            lineno += 1
            i = i.rstrip('\r\n')
            if i and i[0] == '[':
                this_block = RawSectionBlock(i)
                if this_block.name is None:
                    warn(f'第 {lineno} 行的小节头缺少`]`：{i}')
                ret.append(this_block)
            elif this_block is not None:
                this_block.lines.append(i)
            elif i:
                raise MalformedIniFile(
                    f"Property or value found outside of a valid section "
                    f"(line {lineno}). "
                    "Check that your INI file is formatted correctly.")
        return ret

    @staticmethod
    def _decode_file(filename: str) -> tuple[StringIO, str]:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            codec = {'encoding': 'gbk'}
            buf = raw.decode('gbk')
        return StringIO(buf), codec['encoding']

    def read(self) -> list[RawSectionBlock]:
        """读取`IniParser`实例指定的文件。"""
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            # `newline=''` keeps `\r\n` visible.
            with open(self._fn, 'r', encoding=self._codec, newline='') as fp:
                text = fp.read()
        except UnicodeDecodeError:
            buf, self._codec = self._decode_file(self._fn)
            text = buf.getvalue()
        self._newline = '\r\n' if '\r\n' in text else '\n'
        return self.readstream(StringIO(text, newline=''))

    def write(self, instance: list[RawSectionBlock]) -> None:
        """原样保存到 INI 文件。

        先写临时文件再`os.replace()`，免得写一半留下残缺的文件。
        """
        target = abspath(self._fn)
        fd, tmp = mkstemp(prefix='.iniio-', dir=dirname(target))
        try:
            with open(fd, 'w', encoding=self._codec or 'utf-8',
                      newline=self._newline) as fp:
                for i in instance:
                    fp.write(str(i))
                    fp.write('\n')
            if exists(target):
                copymode(target, tmp)
            os.replace(tmp, target)
        except BaseException:
            os.unlink(tmp)
            raise

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
