"""Extension-keyed reader selection.

Purpose
-------
Map a file's extension to the :class:`~lib_container_config.application.ports.FileReader`
that understands it, creating at most one reader per extension.

Contents
--------
* :data:`DEFAULT_READERS` – extension table used by
  :func:`lib_container_config.core.read_config` when the caller supplies none.
* :class:`ReaderFactory` – caching factory over an extension table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

from ...application.ports import FileReader
from ...domain.errors import UnknownFileType
from ...observability import log_debug, make_event
from .structured import JSONFileReader, PythonFileReader, TOMLFileReader, YAMLFileReader

#: Extension table consumers can copy and extend for custom formats.
DEFAULT_READERS: Mapping[str, Callable[[], FileReader]] = {
    ".json": JSONFileReader,
    ".py": PythonFileReader,
    ".toml": TOMLFileReader,
    ".yaml": YAMLFileReader,
    ".yml": YAMLFileReader,
}


class ReaderFactory:
    """Create and cache one reader instance per registered extension.

    Parameters
    ----------
    readers:
        Mapping from extension (with leading dot, e.g. ``".json"``) to a
        zero-argument callable, usually a reader class.

    Examples
    --------
    >>> factory = ReaderFactory({".json": JSONFileReader, ".py": PythonFileReader})
    >>> factory.create("a.json") is factory.create("b.JSON")
    True
    >>> factory.create("x.csv")
    Traceback (most recent call last):
    ...
    lib_container_config.domain.errors.UnknownFileType: No reader configured for ".csv" files; readers are available for ".json" and ".py".
    """

    def __init__(self, readers: Mapping[str, Callable[[], FileReader]]) -> None:
        self._config = {extension.lower(): reader for extension, reader in readers.items()}
        self._readers: dict[str, FileReader] = {}

    @property
    def extensions(self) -> list[str]:
        """Registered extensions in registration order."""

        return list(self._config)

    def create(self, path: str) -> FileReader:
        """Return the cached reader for *path*'s extension, creating it on first use.

        Raises
        ------
        UnknownFileType
            When no reader is registered for the extension.
        """

        extension = Path(path).suffix.lower()
        if extension not in self._readers:
            if extension not in self._config:
                raise UnknownFileType.from_extension(extension, self.extensions)
            self._readers[extension] = self._config[extension]()
            log_debug("reader_created", **make_event("read", path, {"extension": extension}))
        return self._readers[extension]
