# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:03:41
# @Author : Kariko Lin


class BadIniPath(FileNotFoundError):
    """The backing INI path does not point to an existing file."""
    def __init__(self, path: str = '') -> None:
        super().__init__("Bad file or path.")
        self.path = path


class MalformedIniFile(OSError):
    """To record content found outside any section."""
    pass
