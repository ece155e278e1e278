"""Composition root for ``lib_container_config``.

Purpose
-------
Provide the single entry point that orchestrates file discovery, per-format
reading, and the overlay merge, returning an immutable
:class:`~lib_container_config.domain.config.ApplicationConfig`.

Contents
--------
* :func:`read_config` – high-level API building a store from glob patterns.
* :func:`read_config_raw` – lower-level API returning the merged ``dict``.

System Role
-----------
Connects the locator and reader adapters with the merge policy and the domain
value object while emitting structured observability signals. The CLI and the
service configurator both load files through this module.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

from .adapters.file_locator.default import GlobFileLocator
from .adapters.file_readers.factory import DEFAULT_READERS, ReaderFactory
from .application.merge import merge_configs
from .application.ports import FileLocator, FileReader
from .domain.config import ApplicationConfig
from .domain.errors import (
    ConfigError,
    EntryDoesNotExist,
    InvalidConfig,
    NoMatchingFiles,
    ReadOnly,
    UnknownFileType,
    UnknownSetting,
    UnsupportedFeature,
)
from .observability import log_debug, log_info, make_event


def read_config(
    patterns: Sequence[str],
    *,
    separator: str = ".",
    readers: Mapping[str, Callable[[], FileReader]] | None = None,
    locator: FileLocator | None = None,
) -> ApplicationConfig:
    """Return the merged configuration of every file matching *patterns*.

    Parameters
    ----------
    patterns:
        Glob patterns; files are merged in pattern order, later files winning.
    separator:
        Path separator used by the returned store.
    readers:
        Optional extension table overriding :data:`DEFAULT_READERS`.
    locator:
        Optional :class:`FileLocator` (defaults to :class:`GlobFileLocator`).

    Raises
    ------
    NoMatchingFiles
        When no pattern matched a file.
    UnknownFileType / InvalidConfig
        Propagated unchanged from the reader layer; one bad file aborts the load.

    Examples
    --------
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> root = Path(tmp.name)
    >>> _ = (root / "a.json").write_text('{"keyA": "valueA", "keyB": "valueX"}', encoding="utf-8")
    >>> _ = (root / "b.json").write_text('{"keyB": "valueB"}', encoding="utf-8")
    >>> cfg = read_config([str(root / "a.json"), str(root / "b.json")])
    >>> cfg.get("keyA"), cfg.get("keyB")
    ('valueA', 'valueB')
    >>> tmp.cleanup()
    """

    return ApplicationConfig(read_config_raw(patterns, readers=readers, locator=locator), separator)


def read_config_raw(
    patterns: Sequence[str],
    *,
    readers: Mapping[str, Callable[[], FileReader]] | None = None,
    locator: FileLocator | None = None,
) -> dict[str, object]:
    """Return the merged ``dict`` without wrapping it in a store."""

    patterns = list(patterns)
    files = (locator or GlobFileLocator()).locate(patterns)
    if not files:
        raise NoMatchingFiles.from_patterns(patterns)

    factory = ReaderFactory(DEFAULT_READERS if readers is None else readers)
    configs = []
    for path in files:
        configs.append(factory.create(path).read(path))
        log_debug("config_file_merged", **make_event("merge", path, {"position": len(configs)}))

    merged = merge_configs(configs)
    log_info("configuration_merged", **make_event("merge", None, {"files": len(files)}))
    return merged


__all__ = [
    "ApplicationConfig",
    "ConfigError",
    "EntryDoesNotExist",
    "InvalidConfig",
    "NoMatchingFiles",
    "ReadOnly",
    "UnknownFileType",
    "UnknownSetting",
    "UnsupportedFeature",
    "read_config",
    "read_config_raw",
]
