# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .model import IniContents, IniSection, RawSectionBlock
from .parser import IniParser
from .profile import ProfileCommitter, write_profile_string
