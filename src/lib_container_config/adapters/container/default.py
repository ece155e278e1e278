"""Reference dependency-injection container.

Purpose
-------
Provide a small container satisfying
:class:`~lib_container_config.application.ports.InflectingContainer` so the
service configurator works out of the box. Applications with their own
container only need to offer ``register``/``get``/``has`` (plus ``inflect`` for
inflector support).
"""

from __future__ import annotations

from typing import Any, Callable

from ...observability import log_debug, make_event


class ServiceNotFound(KeyError):
    """Raised by :meth:`Container.get` for names nobody registered."""


class Container:
    """Factory-based service container with singleton caching and inflectors.

    Examples
    --------
    >>> container = Container()
    >>> container.register("numbers", list, singleton=True)
    >>> container.get("numbers") is container.get("numbers")
    True
    >>> container.register("fresh", list)
    >>> container.get("fresh") is container.get("fresh")
    False
    """

    def __init__(self) -> None:
        self._factories: dict[str, tuple[Callable[[], Any], bool]] = {}
        self._singletons: dict[str, Any] = {}
        self._inflectors: list[tuple[type, Callable[[Any], None]]] = []

    def register(self, name: str, factory: Callable[[], Any], *, singleton: bool = False) -> None:
        """Register *factory* under *name*, replacing any previous registration."""

        self._factories[name] = (factory, singleton)
        self._singletons.pop(name, None)

    def has(self, name: str) -> bool:
        """Return whether a factory is registered under *name*."""

        return name in self._factories

    def get(self, name: str) -> Any:
        """Return the service registered under *name*.

        Singletons are built once; other services are built on every call.
        Inflectors run on each newly built instance.
        """

        if name in self._singletons:
            return self._singletons[name]
        try:
            factory, singleton = self._factories[name]
        except KeyError:
            raise ServiceNotFound(f'Service "{name}" is not registered') from None
        instance = self._inflect(factory())
        if singleton:
            self._singletons[name] = instance
        log_debug("service_resolved", **make_event("wire", None, {"service": name, "singleton": singleton}))
        return instance

    def inflect(self, interface: type, callback: Callable[[Any], None]) -> None:
        """Run *callback* on every future instance of *interface*."""

        self._inflectors.append((interface, callback))

    def _inflect(self, instance: Any) -> Any:
        for interface, callback in self._inflectors:
            if isinstance(instance, interface):
                callback(instance)
        return instance
