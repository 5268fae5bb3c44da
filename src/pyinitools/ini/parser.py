# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 14:31:05

"""Read and write INI text.

Each line falls into exactly one of these shapes, tested in order:

1. blank, or a comment (`; ...` after optional spaces);
2. section header, `[name]`;
3. parameter, `key = value ; optional comment`;

anything else is a `ParseError`.

Comment lines right above a section header become its *leading comments*.
Those above a parameter are dropped, since a parameter only keeps
the comment trailing on its own line.

Note: writing **never emits comments**. So `write()` after `read()`
loses them, and that's how it is meant to be.
"""

import logging
import re
from collections.abc import Iterable
from io import StringIO, TextIOBase
from os.path import isfile

import chardet

from .model import IniDocument, IniSection
from ..abstract import FileHandler, Source

__all__ = ['ParseError', 'IniParser', 'parse', 'serialize', 'load']


class ParseError(ValueError):
    """A line of INI text could not be understood.

    `line` is the offending raw line (without its line break),
    `lineno` counts from 1.
    """
    def __init__(
        self, message: str, line: str | None = None,
        lineno: int | None = None
    ) -> None:
        super().__init__(message)
        self.line = line
        self.lineno = lineno


def _split_fields(text: str, delims: re.Pattern | None) -> list[str]:
    """Split on every delimiter, trailing empty fields dropped."""
    parts = [text] if delims is None else delims.split(text)
    while parts and parts[-1] == '':
        parts.pop()
    return parts


class IniParser(FileHandler[IniDocument]):
    # the last resort, which decodes any bytes.
    FALLBACK_CODEC = 'latin-1'

    def __init__(
        self, source: Source | None = None, encoding: str | None = None, *,
        comment: str = ';', parameter: str = '='
    ) -> None:
        super().__init__(source)
        if not parameter:
            raise ValueError("parameter separator must not be empty")
        self._codec = encoding
        # every char in `comment` starts a comment on its own.
        self._comment = comment
        self._comment_chars = frozenset(comment)
        self._comment_rgxp = (
            re.compile(f'[{re.escape(comment)}]') if comment else None)
        self._param = parameter

    @property
    def comment(self) -> str:
        return self._comment

    @property
    def parameter(self) -> str:
        return self._param

    def readstream(
        self, buf: Iterable[str] | str, ins: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的文本行。

        `buf` could be any iterable of lines, like an opened file,
        a `StringIO`, a `list[str]`, or simply the whole text as `str`.
        Pass `ins` to read into an existing document.

        如没有特殊需求，直接调用`self.read()`便是。
        """
        if ins is None:
            ins = IniDocument()
        if isinstance(buf, str):
            buf = StringIO(buf)
        this_sect: IniSection | None = None
        this_comments: dict[str, str] | None = None
        unmatched: list[str] = []

        for lineno, raw in enumerate(buf, 1):
            line = raw.rstrip('\r\n')
            stripped = line.lstrip()

            # blank lines and comment lines
            if not stripped or stripped[0] in self._comment_chars:
                if stripped and (text := stripped[1:].strip()):
                    unmatched.append(text)
                continue

            # section declaration, trailing chars after `]` are ignored
            if stripped[0] == '[' and (close := stripped.find(']')) > 1:
                name = stripped[1:close].strip()
                this_sect = ins.section(name)
                this_comments = ins._param_comments_of(name)
                if unmatched:
                    ins._set_section_comments(name, unmatched)
                    unmatched = []
                continue

            # otherwise we have a parameter
            if (sep := line.find(self._param)) > 0:
                if unmatched:
                    logging.debug(
                        f'line {lineno}: dropped {len(unmatched)} comment(s) '
                        'above a parameter.')
                    unmatched = []
                if this_sect is None or this_comments is None:
                    raise ParseError(
                        "parameter encountered before first section",
                        line, lineno)
                key = line[:sep].strip()
                val = line[sep + len(self._param):]
                if val != '':
                    # `a ; b ; c` keeps `b` only, and `a ;` has no comment.
                    fields = _split_fields(val, self._comment_rgxp)
                    if len(fields) > 1:
                        this_comments[key] = fields[1].strip()
                    val = fields[0].strip() if fields else ''
                this_sect[key] = val
                continue

            raise ParseError(f"could not parse line '{line}'", line, lineno)
        return ins

    def _decode_bytes(self, raw: bytes) -> StringIO:
        if self._codec is not None:
            try:
                return StringIO(raw.decode(self._codec))
            except UnicodeDecodeError:
                pass

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            logging.debug(
                f"{self} is not {codec['encoding']}, "
                f"falling back to {self.FALLBACK_CODEC}.")
            buf = raw.decode(self.FALLBACK_CODEC)
        return StringIO(buf)

    def _decode_file(self, filename: Source) -> StringIO:
        with open(filename, 'rb') as fp:
            return self._decode_bytes(fp.read())

    def read(self) -> IniDocument:
        """读取`IniParser`实例指定的文件（或流）。

        A path which is not an existing regular file gives
        an empty document rather than an error.
        """
        if self._fn is None:
            raise ValueError("no file or stream to read from")
        if self.is_stream:
            if isinstance(self._fn, TextIOBase):
                return self.readstream(self._fn)
            data = self._fn.read()
            if isinstance(data, bytes):
                return self.readstream(self._decode_bytes(data))
            return self.readstream(StringIO(data))

        if not isfile(self._fn):
            logging.warning(f'`{self}` is not a file, starting an empty one.')
            return IniDocument()
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp)
        except UnicodeDecodeError:
            logging.debug(f'guessing the encoding of `{self}`.')
            return self.readstream(self._decode_file(self._fn))

    def serialize(self, instance: IniDocument) -> list[str]:
        """Render `instance` as lines, without line breaks.

        Comments are NOT written back.
        """
        ret: list[str] = []
        for i in instance:
            meta = instance._get_meta(i)
            ret.append(f'[{meta["section"]}]')
            for k, v in meta['pairs'].items():
                ret.append(f'{k} {self._param} {v}')
            ret.append('')
        return ret

    def write(
        self, instance: IniDocument, filename: Source | None = None
    ) -> 'IniParser':
        """保存到 INI 文件（或流）。

        A given `filename` replaces the one bound to this parser,
        for this write and all later ones.
        """
        if filename is not None:
            self._fn = filename
        if self._fn is None:
            raise ValueError("no file or stream to write to")
        lines = self.serialize(instance)
        if self.is_stream:
            for i in lines:
                self._fn.write(i + '\n')
            return self
        with open(self._fn, 'w', encoding=self._codec) as fp:
            for i in lines:
                fp.write(i + '\n')
        return self

    save = write

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def parse(
    lines: Iterable[str] | str,
    comment_char: str = ';', separator_char: str = '='
) -> IniDocument:
    """Parse INI `lines` into a new `IniDocument`."""
    return IniParser(
        comment=comment_char, parameter=separator_char
    ).readstream(lines)


def serialize(doc: IniDocument, separator_char: str = '=') -> list[str]:
    return IniParser(parameter=separator_char).serialize(doc)


def load(filename: Source, encoding: str | None = None, **opts) -> IniDocument:
    """Read the INI at `filename` (a path or a stream).

    `opts` are `comment` and `parameter`, see `IniParser`.
    """
    return IniParser(filename, encoding, **opts).read()
