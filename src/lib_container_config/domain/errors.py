"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the file readers, the configuration
store, the composition root, and the service configurator. Every exception
carries the structured data that produced it so callers can react without
parsing messages.

Contents
--------
* :class:`ConfigError` – umbrella base class for all library failures.
* :class:`NoMatchingFiles` – no file matched the supplied glob patterns.
* :class:`UnknownFileType` – a file extension has no registered reader.
* :class:`InvalidConfig` – a file could not be interpreted as configuration.
* :class:`EntryDoesNotExist` – a dotted-path lookup could not be resolved.
* :class:`ReadOnly` – a mutation was attempted on an immutable store.
* :class:`UnsupportedFeature` – a container lacks a requested capability.
* :class:`UnknownSetting` – the configurator received an unknown setting name.

System Role
-----------
Adapters and the domain raise these exceptions; callers catch
:class:`ConfigError` to handle all library failures uniformly.
"""

from __future__ import annotations

from typing import Iterable, Sequence


def _list_to_string(items: Iterable[str]) -> str:
    """Render *items* as a quoted, human-readable enumeration.

    Examples
    --------
    >>> _list_to_string([".json", ".php"])
    '".json" and ".php"'
    >>> _list_to_string(["a", "b", "c"])
    '"a", "b" and "c"'
    """

    quoted = [f'"{item}"' for item in items]
    if not quoted:
        return "none"
    if len(quoted) == 1:
        return quoted[0]
    return ", ".join(quoted[:-1]) + " and " + quoted[-1]


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_container_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class NoMatchingFiles(ConfigError):
    """Raised when none of the glob patterns matched an existing file."""

    def __init__(self, message: str, patterns: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.patterns = list(patterns)

    @classmethod
    def from_patterns(cls, patterns: Sequence[str]) -> NoMatchingFiles:
        """Build the error for *patterns*.

        Examples
        --------
        >>> str(NoMatchingFiles.from_patterns(["*.unknownext"]))
        'No files found matching patterns: "*.unknownext"'
        """

        return cls(f"No files found matching patterns: {_list_to_string(patterns)}", patterns)


class UnknownFileType(ConfigError):
    """Raised when a file extension has no registered reader."""

    def __init__(self, message: str, extension: str = "", available: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.extension = extension
        self.available = list(available)

    @classmethod
    def from_extension(cls, extension: str, available: Sequence[str]) -> UnknownFileType:
        """Build the error listing the extensions that do have readers.

        Examples
        --------
        >>> str(UnknownFileType.from_extension(".csv", [".json", ".php"]))
        'No reader configured for ".csv" files; readers are available for ".json" and ".php".'
        """

        message = (
            f'No reader configured for "{extension}" files; '
            f"readers are available for {_list_to_string(available)}."
        )
        return cls(message, extension, available)


class InvalidConfig(ConfigError):
    """Raised when a file's content cannot be interpreted as configuration.

    Typical Sources
    ---------------
    Structured readers (:mod:`json`, :mod:`tomllib`, :mod:`yaml`) reporting a
    syntax error, any reader meeting a non-string key, and the Python reader
    when a file fails to evaluate or does not define a ``CONFIG`` mapping.
    """

    def __init__(self, message: str = "", filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename

    @classmethod
    def from_format_error(cls, filename: str, fmt: str, error: str) -> InvalidConfig:
        """Wrap a parser message, naming the file and the format.

        Examples
        --------
        >>> str(InvalidConfig.from_format_error("example.json", "JSON", "JSON Error Message"))
        'Invalid JSON in "example.json": JSON Error Message'
        """

        return cls(f'Invalid {fmt} in "{filename}": {error}', filename)

    @classmethod
    def from_python_file(cls, filename: str) -> InvalidConfig:
        """Report a Python file that did not yield a ``CONFIG`` mapping.

        Examples
        --------
        >>> str(InvalidConfig.from_python_file("example.cfg"))
        '"example.cfg" does not define a CONFIG mapping.'
        """

        return cls(f'"{filename}" does not define a CONFIG mapping.', filename)

    @classmethod
    def from_missing_file(cls, filename: str) -> InvalidConfig:
        """Report a file that disappeared between discovery and reading."""

        return cls(f'Configuration file "{filename}" does not exist.', filename)


class EntryDoesNotExist(ConfigError, KeyError):
    """Raised when a dotted path cannot be fully resolved."""

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""

    @classmethod
    def from_key(cls, key: str) -> EntryDoesNotExist:
        """Build the error for the full requested *key*.

        Examples
        --------
        >>> str(EntryDoesNotExist.from_key("db.password"))
        'No configuration entry found for "db.password".'
        """

        return cls(f'No configuration entry found for "{key}".', key)


class ReadOnly(ConfigError):
    """Raised on any attempt to mutate an immutable configuration store."""

    def __init__(self, message: str, class_name: str = "") -> None:
        super().__init__(message)
        self.class_name = class_name

    @classmethod
    def from_class_name(cls, class_name: str) -> ReadOnly:
        """Build the error naming the store type.

        Examples
        --------
        >>> str(ReadOnly.from_class_name("ApplicationConfig"))
        '"ApplicationConfig" is read only.'
        """

        return cls(f'"{class_name}" is read only.', class_name)


class UnsupportedFeature(ConfigError):
    """Raised when a container adapter cannot provide a requested feature."""

    def __init__(self, message: str, feature: str = "") -> None:
        super().__init__(message)
        self.feature = feature

    @classmethod
    def from_feature(cls, feature: str, container: object) -> UnsupportedFeature:
        """Name the missing *feature* and the container type lacking it."""

        return cls(f'{type(container).__name__} does not support {feature}.', feature)


class UnknownSetting(ConfigError):
    """Raised when the configurator receives a setting name it does not know."""

    def __init__(self, message: str, setting: str = "") -> None:
        super().__init__(message)
        self.setting = setting

    @classmethod
    def from_setting(cls, setting: str, known: Iterable[str]) -> UnknownSetting:
        """Name the rejected setting and the accepted ones."""

        return cls(f'Setting "{setting}" does not exist; valid settings are {_list_to_string(known)}.', setting)
