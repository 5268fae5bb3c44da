# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 13:58:40

import logging

from .ini import (
    IniSection, IniDocument, IniParser,
    ParseError, FrozenError, ImmutabilityError,
    parse, serialize, load
)

__all__ = [
    'IniSection', 'IniDocument', 'IniParser',
    'ParseError', 'FrozenError', 'ImmutabilityError',
    'parse', 'serialize', 'load'
]

__version__ = '0.2.2'

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
