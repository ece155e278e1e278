"""Public package surface for ``lib_container_config``.

Load configuration files or literal mappings into an immutable
:class:`ApplicationConfig`, and optionally wire declared services into a
dependency-injection container with :class:`Configurator`.
"""

from __future__ import annotations

from .adapters.container.default import Container, ServiceNotFound
from .adapters.file_readers.factory import DEFAULT_READERS, ReaderFactory
from .configurator import Configurator
from .core import (
    ApplicationConfig,
    ConfigError,
    EntryDoesNotExist,
    InvalidConfig,
    NoMatchingFiles,
    ReadOnly,
    UnknownFileType,
    UnknownSetting,
    UnsupportedFeature,
    read_config,
    read_config_raw,
)
from .observability import bind_trace_id, get_logger

__all__ = [
    "ApplicationConfig",
    "ConfigError",
    "Configurator",
    "Container",
    "DEFAULT_READERS",
    "EntryDoesNotExist",
    "InvalidConfig",
    "NoMatchingFiles",
    "ReadOnly",
    "ReaderFactory",
    "ServiceNotFound",
    "UnknownFileType",
    "UnknownSetting",
    "UnsupportedFeature",
    "bind_trace_id",
    "get_logger",
    "read_config",
    "read_config_raw",
]
