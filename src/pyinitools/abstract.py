# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/19 14:20:37

from abc import ABCMeta, abstractmethod
from io import IOBase
from os import PathLike, fspath
from typing import IO, Generic, TypeVar

T = TypeVar('T')

Source = str | PathLike | IO


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Something read from, and written back to, one source.

    The source is either a file path or an already opened stream.
    """
    def __init__(self, source: Source | None) -> None:
        self._fn = source

    @property
    def is_stream(self) -> bool:
        return isinstance(self._fn, IOBase) or hasattr(self._fn, 'read')

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        if self._fn is None:
            return "<lines>"
        if self.is_stream:
            return str(getattr(self._fn, 'name', repr(self._fn)))
        return fspath(self._fn)
