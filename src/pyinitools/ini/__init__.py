# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 14:00:26

from .model import (
    IniSection, IniDocument, IniSectionMeta,
    FrozenError, ImmutabilityError
)
from .parser import ParseError, IniParser, parse, serialize, load

__all__ = [
    'IniSection', 'IniDocument', 'IniSectionMeta',
    'FrozenError', 'ImmutabilityError',
    'ParseError', 'IniParser', 'parse', 'serialize', 'load'
]
