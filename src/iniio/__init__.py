# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 03:02:27
# @Author : Kariko Lin

import logging

from .batch import BatchWriter
from .entry import Entry
from .errors import BadIniPath, MalformedIniFile
from .export import IniJsonExporter, IniYamlExporter
from .facade import BatchConfigurationFile, ConfigurationFile
from .ini import (
    IniContents, IniParser, IniSection, ProfileCommitter, RawSectionBlock,
    write_profile_string
)
from .manager import (
    EntryWriter, PendingWriteQueue, default_queue, default_writer
)
from .store import IniStore

__all__ = [
    'ConfigurationFile', 'BatchConfigurationFile',
    'IniStore', 'BatchWriter', 'Entry',
    'EntryWriter', 'PendingWriteQueue', 'default_writer', 'default_queue',
    'IniParser', 'IniContents', 'IniSection', 'RawSectionBlock',
    'ProfileCommitter', 'write_profile_string',
    'IniJsonExporter', 'IniYamlExporter',
    'BadIniPath', 'MalformedIniFile'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
