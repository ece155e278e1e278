"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts that adapters must satisfy so the composition
root and the service configurator can orchestrate behaviour without depending
on concrete implementations.

Contents
--------
* :class:`FileLocator` – expands glob patterns into concrete file paths.
* :class:`FileReader` – parses one configuration file into a mapping.
* :class:`Container` – dependency-injection container used by the configurator.
* :class:`InflectingContainer` – container that can also apply inflectors.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). Each adapter implements one
protocol so the application layer can request behaviour via abstraction.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class FileLocator(Protocol):
    """Discover configuration files for a list of glob patterns.

    Why
    ----
    Keep filesystem search rules out of the composition root so tests can feed
    fixed path lists.
    """

    def locate(self, patterns: Sequence[str]) -> list[str]:
        """Return matching file paths in pattern order."""


@runtime_checkable
class FileReader(Protocol):
    """Parse a configuration file into a mapping.

    Why
    ----
    Segregate parsing concerns (JSON/Python/TOML/YAML) from orchestration logic.
    """

    def read(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping or raise ``InvalidConfig``."""


@runtime_checkable
class Container(Protocol):
    """Minimal service container the configurator registers into."""

    def register(self, name: str, factory: Callable[[], Any], *, singleton: bool = False) -> None:
        """Register *factory* under *name*."""

    def get(self, name: str) -> Any:
        """Return the service registered under *name*."""

    def has(self, name: str) -> bool:
        """Return whether *name* is registered."""


@runtime_checkable
class InflectingContainer(Container, Protocol):
    """Container that applies callbacks to every instance of a given type."""

    def inflect(self, interface: type, callback: Callable[[Any], None]) -> None:
        """Run *callback* on each resolved service that is an instance of *interface*."""
