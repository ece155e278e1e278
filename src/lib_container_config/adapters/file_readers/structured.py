"""Configuration file readers.

Purpose
-------
Convert on-disk artifacts into Python mappings that the merge layer understands.
Readers are small wrappers around ``json``/``tomllib``/``yaml.safe_load`` and
``compile``/``exec`` so error handling, observability, and the string-keyed
mapping requirement live in one place.

Contents
--------
* :class:`BaseFileReader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`JSONFileReader` – structured-text reader for JSON.
* :class:`PythonFileReader` – evaluates a Python file and returns its
  ``CONFIG`` mapping.
* :class:`TOMLFileReader` – reader for TOML documents.
* :class:`YAMLFileReader` – optional YAML reader (only available when PyYAML is
  installed).

System Role
-----------
Instantiated by :class:`lib_container_config.adapters.file_readers.factory.ReaderFactory`
and invoked by :func:`lib_container_config.core.read_config` before the merge.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...domain.errors import InvalidConfig
from ...observability import log_debug, log_error, make_event

try:
    import yaml  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]

#: Module-level name a Python configuration file must bind to its mapping.
PYTHON_CONFIG_NAME = "CONFIG"


class BaseFileReader:
    """Common utilities shared by the file readers."""

    format_name = "file"

    def _read(self, path: str) -> bytes:
        """Read *path* fully, raising :class:`InvalidConfig` when it is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise InvalidConfig.from_missing_file(path)
        payload = file_path.read_bytes()
        log_debug("config_file_read", **make_event("read", path, {"size": len(payload)}))
        return payload

    def _fail(self, path: str, error: Exception) -> InvalidConfig:
        """Log a parse failure and return the matching :class:`InvalidConfig`."""

        log_error("config_file_invalid", **make_event("read", path, {"format": self.format_name, "error": str(error)}))
        return InvalidConfig.from_format_error(path, self.format_name, str(error))

    def _ensure_mapping(self, data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* is a mapping with string keys, otherwise raise :class:`InvalidConfig`.

        Why
        ----
        Dotted paths can only address string keys; an integer key such as
        YAML's ``8080:`` would show up in ``keys()`` yet never resolve.

        Examples
        --------
        >>> JSONFileReader()._ensure_mapping({"key": 1}, path="demo.json")
        {'key': 1}
        >>> JSONFileReader()._ensure_mapping([1, 2], path="demo.json")
        Traceback (most recent call last):
        ...
        lib_container_config.domain.errors.InvalidConfig: Invalid JSON in "demo.json": top level must be an object, got list
        >>> YAMLFileReader()._ensure_mapping({"ports": {8080: "web"}}, path="demo.yaml")
        Traceback (most recent call last):
        ...
        lib_container_config.domain.errors.InvalidConfig: Invalid YAML in "demo.yaml": key 8080 under "ports" is not a string
        """

        if not isinstance(data, Mapping):
            raise self._fail(path, TypeError(f"top level must be an object, got {type(data).__name__}"))
        offending = _find_non_string_key(data, [])
        if offending is not None:
            key, trail = offending
            location = f'under "{".".join(trail)}"' if trail else "at top level"
            raise self._fail(path, TypeError(f"key {key!r} {location} is not a string"))
        log_debug("config_file_loaded", **make_event("read", path, {"format": self.format_name, "keys": len(data)}))
        return data


def _find_non_string_key(value: object, trail: list[str]) -> tuple[object, list[str]] | None:
    """Return the first non-string mapping key in *value* with its parent trail."""

    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                return key, trail
            found = _find_non_string_key(item, [*trail, key])
            if found is not None:
                return found
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            found = _find_non_string_key(item, [*trail, str(index)])
            if found is not None:
                return found
    return None


class JSONFileReader(BaseFileReader):
    """Read JSON documents whose top level is an object."""

    format_name = "JSON"

    def read(self, path: str) -> Mapping[str, object]:
        """Return the mapping stored in the JSON file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.json', delete=False, encoding='utf-8')
        >>> _ = tmp.write('{"enabled": true}')
        >>> tmp.close()
        >>> JSONFileReader().read(tmp.name)["enabled"]
        True
        >>> Path(tmp.name).unlink()
        """

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._fail(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class PythonFileReader(BaseFileReader):
    """Evaluate a Python file and return the mapping bound to ``CONFIG``.

    The source is compiled from the bytes already read and executed in a fresh
    namespace, so it may compute values, read environment variables, or import
    helpers.
    """

    format_name = "Python"

    def read(self, path: str) -> Mapping[str, object]:
        """Execute the file at *path* and return its ``CONFIG`` mapping.

        Why
        ----
        Python files are the native, programmable format. Anything raised while
        compiling or running them is reported with the file name and the
        underlying error so a broken file is not mistaken for a missing
        ``CONFIG``.

        What
        ----
        Raises :class:`InvalidConfig` when evaluation fails (``Invalid Python in
        "<file>": <error>``) or when ``CONFIG`` is absent or not a mapping.
        """

        payload = self._read(path)
        namespace: dict[str, object] = {"__name__": "__config__", "__file__": path}
        try:
            exec(compile(payload, path, "exec"), namespace)
        except Exception as exc:
            raise self._fail(path, exc) from exc
        data = namespace.get(PYTHON_CONFIG_NAME)
        if not isinstance(data, Mapping):
            log_error("config_file_invalid", **make_event("read", path, {"format": self.format_name, "error": "no mapping"}))
            raise InvalidConfig.from_python_file(path)
        return self._ensure_mapping(data, path=path)


class TOMLFileReader(BaseFileReader):
    """Read TOML documents using the standard library parser."""

    format_name = "TOML"

    def read(self, path: str) -> Mapping[str, object]:
        """Parse the TOML document at *path*; decode errors become :class:`InvalidConfig`."""

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._fail(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class YAMLFileReader(BaseFileReader):
    """Read YAML documents when PyYAML is available.

    An empty document yields an empty mapping.
    """

    format_name = "YAML"

    def read(self, path: str) -> Mapping[str, object]:
        """Parse the YAML document at *path* with ``yaml.safe_load``.

        YAML allows non-string keys (``8080: web``); those are rejected by
        :meth:`BaseFileReader._ensure_mapping` because dotted paths cannot
        address them.
        """

        if yaml is None:
            raise InvalidConfig(f'PyYAML is required to read "{path}"', path)
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._fail(path, exc) from exc
        if data is None:
            data = {}
        return self._ensure_mapping(data, path=path)
