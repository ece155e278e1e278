"""Domain-level configuration value object.

Purpose
-------
Anchor the immutable :class:`ApplicationConfig` that carries merged
configuration through the system and resolves dotted paths against it. This
module belongs to the domain layer and performs no I/O.

Contents
--------
* :class:`ApplicationConfig` – read-only store exposing existence checks,
  dotted-path lookup, key enumeration, and iteration over ``(path, value)``
  pairs.
* :func:`_freeze_value` / :func:`_thaw_value` – internal helpers that convert
  between caller-owned containers and the frozen representation kept inside
  the store.

System Role
-----------
:func:`lib_container_config.core.read_config` and the service configurator both
produce :class:`ApplicationConfig` instances. The type guarantees that nothing
handed in or handed out can alter the stored tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Sequence

from .errors import EntryDoesNotExist, ReadOnly


@dataclass(frozen=True, slots=True)
class ApplicationConfig:
    """Immutable configuration tree addressed by separator-joined paths.

    Why
    ----
    Applications need a single object holding merged configuration that can be
    shared freely without defensive copies at every call site.

    What
    ----
    Freezes the supplied mapping (nested mappings become ``mappingproxy``
    objects, sequences become tuples) and resolves lookups segment by segment.
    Every accessor returns fresh mutable copies.

    Parameters
    ----------
    _data:
        Root mapping, typically produced by
        :func:`lib_container_config.application.merge.merge_configs`.
    separator:
        Non-empty string used to split dotted paths. Defaults to ``"."``.

    Examples
    --------
    >>> cfg = ApplicationConfig({"group1": {"keyA": "valueA"}})
    >>> cfg.get("group1.keyA")
    'valueA'
    >>> cfg.get("group1")
    {'keyA': 'valueA'}
    >>> cfg.keys()
    ['group1.keyA']
    >>> "group1.missing" in cfg
    False
    """

    _data: Mapping[str, Any]
    separator: str = "."

    def __post_init__(self) -> None:
        """Validate the separator and freeze the incoming tree."""

        if not isinstance(self.separator, str) or not self.separator:
            raise ValueError("separator must be a non-empty string")
        if not isinstance(self._data, Mapping):
            raise TypeError(f"configuration must be a mapping, got {type(self._data).__name__}")
        object.__setattr__(self, "_data", _freeze_value(self._data))

    @classmethod
    def from_files(cls, patterns: Sequence[str], separator: str = ".") -> ApplicationConfig:
        """Locate, read, and merge files matching *patterns*.

        Thin alias for :func:`lib_container_config.core.read_config` so the
        file-based constructor lives next to the direct one.
        """

        from ..core import read_config

        return read_config(patterns, separator=separator)

    def exists(self, path: str) -> bool:
        """Return whether *path* resolves; never raises, even for non-string *path*."""

        if not isinstance(path, str):
            return False
        try:
            self._traverse(path)
        except EntryDoesNotExist:
            return False
        return True

    def get(self, path: str) -> Any:
        """Return a copy of the value stored under *path*.

        Raises
        ------
        EntryDoesNotExist
            When a segment is missing or an intermediate value is not a
            mapping. The error names the full requested path.
        """

        return _thaw_value(self._traverse(path))

    def keys(self) -> list[str]:
        """Return every path that leads to a scalar or sequence value.

        Paths that lead to mappings are not listed; their descendants are.
        Ordering follows a depth-first walk in insertion order.

        Examples
        --------
        >>> ApplicationConfig({"a": {"b": 1, "c": [2]}, "d": True}).keys()
        ['a.b', 'a.c', 'd']
        """

        return [path for path, _ in self._walk(self._data, [])]

    def items(self) -> list[tuple[str, Any]]:
        """Return ``(path, value)`` pairs in :meth:`keys` order."""

        return [(path, _thaw_value(value)) for path, value in self._walk(self._data, [])]

    def as_dict(self) -> dict[str, Any]:
        """Return a deep, mutable copy of the whole configuration tree.

        Examples
        --------
        >>> cfg = ApplicationConfig({"service": {"timeout": 5}})
        >>> clone = cfg.as_dict()
        >>> clone["service"]["timeout"] = 10
        >>> cfg.get("service.timeout")
        5
        """

        return _thaw_value(self._data)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the configuration to JSON via :meth:`as_dict`.

        Examples
        --------
        >>> ApplicationConfig({"service": {"timeout": 5}}).to_json()
        '{"service":{"timeout":5}}'
        """

        import json

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False)

    def set(self, path: str, value: Any) -> None:
        """Always raise :class:`ReadOnly`; the store is immutable."""

        raise ReadOnly.from_class_name(type(self).__name__)

    def unset(self, path: str) -> None:
        """Always raise :class:`ReadOnly`; the store is immutable."""

        raise ReadOnly.from_class_name(type(self).__name__)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)

    def __getitem__(self, path: str) -> Any:
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        self.unset(path)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self.keys())

    def _traverse(self, path: str) -> Any:
        """Walk the frozen tree along *path* and return the raw node."""

        current: Any = self._data
        for segment in path.split(self.separator):
            if not isinstance(current, Mapping) or segment not in current:
                raise EntryDoesNotExist.from_key(path)
            current = current[segment]
        return current

    def _walk(self, node: Mapping[str, Any], segments: list[str]) -> Iterator[tuple[str, Any]]:
        """Yield ``(path, raw_value)`` for every non-mapping descendant of *node*."""

        for key, value in node.items():
            trail = [*segments, key]
            if isinstance(value, Mapping):
                yield from self._walk(value, trail)
            else:
                yield self.separator.join(trail), value


def _freeze_value(value: Any) -> Any:
    """Return an immutable clone of *value*.

    Keys must be strings; anything else could be listed by ``keys()`` but never
    resolved by a dotted path, so it is rejected with :class:`TypeError`.

    Examples
    --------
    >>> frozen = _freeze_value({"a": [1, {"b": 2}]})
    >>> type(frozen).__name__, frozen["a"][0]
    ('mappingproxy', 1)
    """

    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"configuration keys must be strings, got {key!r}")
        return MappingProxyType({key: _freeze_value(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(item) for item in value)
    return value


def _thaw_value(value: Any) -> Any:
    """Return a mutable deep copy of a frozen *value* (mappings to dicts, tuples to lists).

    Examples
    --------
    >>> _thaw_value(_freeze_value({"a": [1, {"b": 2}]}))
    {'a': [1, {'b': 2}]}
    """

    if isinstance(value, Mapping):
        return {key: _thaw_value(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw_value(item) for item in value]
    return value
