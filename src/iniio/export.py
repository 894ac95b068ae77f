# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/10/14 23:18:09
# @Author : Kariko Lin

"""Dump the whole `section -> {property: value}` dict to JSON or YAML.

Values stay strings both ways, e.g. `cloud=false` is exported as `'false'`.
"""

import json

import yaml

from .abstract import FileHandler

type IniDict = dict[str, dict[str, str]]


def _stringify(src: dict) -> IniDict:
    # may there be some scalars considered as int/bool by yaml
    return {
        str(sect): {
            str(k): '' if v is None else str(v)
            for k, v in (pairs or {}).items()}
        for sect, pairs in (src or {}).items()
    }


class IniJsonExporter(FileHandler[IniDict]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> IniDict:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return _stringify(json.load(fp))

    def write(self, instance: IniDict, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(instance, fp, ensure_ascii=False, indent=indent)


class IniYamlExporter(FileHandler[IniDict]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> IniDict:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return _stringify(yaml.safe_load(fp))

    def write(self, instance: IniDict) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                instance, fp, allow_unicode=True, sort_keys=False)
