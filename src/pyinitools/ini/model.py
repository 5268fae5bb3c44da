# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 14:02:11

"""
Basically INI Structure with comment bookkeeping.

Sections hold plain `str: str` pairs. Comments are kept aside,
in two stores that never take part in equality:

- leading comments, a block of `;` lines right above a section header;
- parameter comments, the trailing `; ...` after a value.
"""

import logging
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from typing import TypedDict

__all__ = [
    'IniSection', 'IniDocument', 'IniSectionMeta',
    'FrozenError', 'ImmutabilityError'
]


class FrozenError(TypeError):
    """Raised on any attempt to change a frozen document or section."""


ImmutabilityError = FrozenError


class IniSection(MutableMapping[str, str]):
    """INI section dict, keeping pairs in first-seen order.

    All pairs *should* be `str: str` (empty string included),
    however in runtime we wouldn't limit that much.
    """

    def __init__(
        self, section_name: str, /,
        pairs_to_import: Mapping[str, str] | None = None
    ) -> None:
        self._name = section_name
        self._data: dict[str, str] = {}
        self._frozen = False
        if pairs_to_import:
            self._data.update(pairs_to_import)

    def _check_frozen(self) -> None:
        if self._frozen:
            raise FrozenError(f"can't modify frozen section [{self._name}]")

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._check_frozen()
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        self._check_frozen()
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IniSection):
            return self._data == other._data
        return super().__eq__(other)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    @property
    def name(self) -> str:
        return self._name

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> 'IniSection':
        self._frozen = True
        return self

    def to_dict(self) -> dict[str, str]:
        """A detached `dict` copy of the pairs."""
        return self._data.copy()


class IniSectionMeta(TypedDict):
    section: str
    pairs: dict[str, str]
    comments: list[str]


class IniDocument(MutableMapping[str, IniSection]):
    """INI 文件表示。支持以下形式的 INI 小节、键值对和注释：

        ```ini
        ; leading comment, belongs to [section]
        [section]
        key233 = val666  ; parameter comment of `key233`
        ```

    Reading a section that doesn't exist *creates it* (empty),
    the same way the parser obtains its "current section".
    Use `has_section()` or `in` to test without side effect.
    """

    def __init__(self) -> None:
        self.__raw_dicts: dict[str, IniSection] = {}
        self.__section_comments: dict[str, list[str]] = {}
        self.__param_comments: dict[str, dict[str, str]] = {}
        self.__frozen = False

    def _check_frozen(self) -> None:
        if self.__frozen:
            raise FrozenError("can't modify frozen INI document")

    # lookup-or-insert.
    def __getitem__(self, key: str) -> IniSection:
        key = str(key)
        if key not in self.__raw_dicts:
            self._check_frozen()
            self.__raw_dicts[key] = IniSection(key)
        return self.__raw_dicts[key]

    def __setitem__(
        self, key: str, value: IniSection | Mapping[str, str]
    ) -> None:
        self._check_frozen()
        key = str(key)
        # shouldn't keep ptr to external dict in key setting operation.
        self.__raw_dicts[key] = IniSection(key, value)

    def __delitem__(self, key: str) -> None:
        self._check_frozen()
        key = str(key)
        # comments stay, and come back with a section of the same name.
        del self.__raw_dicts[key]

    def __contains__(self, key: object) -> bool:
        return str(key) in self.__raw_dicts

    def __len__(self) -> int:
        return len(self.__raw_dicts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw_dicts)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return False
        return self.__raw_dicts == other.__raw_dicts

    def __repr__(self) -> str:
        return f'<{type(self).__name__} sections={self.sections()!r}>'

    # Mapping mixins would go through __getitem__ and create the section.
    def get(self, key, default=None):
        key = str(key)
        if key not in self.__raw_dicts:
            return default
        return self.__raw_dicts[key]

    def pop(self, key, default=None):
        key = str(key)
        if key not in self.__raw_dicts:
            return default
        value = self.__raw_dicts[key]
        del self[key]
        return value

    @property
    def frozen(self) -> bool:
        return self.__frozen

    def section(self, name: object) -> IniSection | None:
        """Get the pairs of `name`, creating an empty section if absent."""
        if name is None:
            return None
        return self[str(name)]

    def has_section(self, name: object) -> bool:
        return name is not None and str(name) in self.__raw_dicts

    def delete_section(self, name: object) -> IniSection | None:
        """Remove `name`, returning its pairs, or `None` if not found.

        Comments read for `name` are kept.
        """
        return self.pop(str(name), None)

    def sections(self) -> list[str]:
        return list(self.__raw_dicts)

    def for_each(
        self, fn: Callable[[str, str, str], object] | None = None
    ) -> 'IniDocument':
        if fn is None:
            return self
        for section, pairs in self.__raw_dicts.items():
            for param, value in pairs.items():
                fn(section, param, value)
        return self

    def for_each_section(
        self, fn: Callable[[str], object] | None = None
    ) -> 'IniDocument':
        if fn is None:
            return self
        for section in self.__raw_dicts:
            fn(section)
        return self

    def comments(self, section: object) -> list[str] | None:
        """Leading comment lines of `section`, in the order read."""
        if section is None:
            return None
        return list(self.__section_comments.get(str(section), []))

    def comment(self, section: object, param: object) -> str | None:
        """Trailing comment of `param` in `section`, if any."""
        if section is None or str(section) not in self.__param_comments:
            return None
        return self.__param_comments[str(section)].get(str(param))

    def has_comment(self, section: object, param: object) -> bool:
        return str(param) in self.__param_comments.get(str(section), {})

    def has_comments(self, section: object) -> bool:
        return str(section) in self.__section_comments

    def freeze(self) -> 'IniDocument':
        """Make the document, and every section of it, read-only for good."""
        for i in self.__raw_dicts.values():
            i.freeze()
        self.__frozen = True
        return self

    def copy(self) -> 'IniDocument':
        """An independent duplicate of the sections and pairs.

        Comments are *not* carried over, and the duplicate is never frozen.
        """
        other = type(self)()
        for name, pairs in self.__raw_dicts.items():
            other[name] = pairs.to_dict()
        return other

    def clone(self) -> 'IniDocument':
        """Same as `copy()`, but a frozen source gives a frozen clone."""
        other = self.copy()
        if self.__frozen:
            other.freeze()
        return other

    def _get_meta(self, key: str) -> IniSectionMeta:
        """for serializer."""
        return IniSectionMeta(
            section=key,
            pairs=self.__raw_dicts[key].to_dict(),
            comments=self.comments(key) or []
        )

    def _param_comments_of(self, key: str) -> dict[str, str]:
        """for parser. the live comment dict of section `key`."""
        self._check_frozen()
        return self.__param_comments.setdefault(key, {})

    def _set_section_comments(self, key: str, lines: list[str]) -> None:
        """for parser."""
        self._check_frozen()
        self.__section_comments[key] = list(lines)
        logging.debug(f"[{key}] takes {len(lines)} leading comment(s).")
