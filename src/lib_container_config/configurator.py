"""Declarative service wiring driven by configuration.

Purpose
-------
Translate a merged configuration into registrations on a dependency-injection
container: configuration values become services addressable by prefixed
paths, the ``services`` section declares factories with constructor arguments,
setter calls, and lifecycle, and the ``inflectors`` section applies setter calls
to every service implementing a given type.

Contents
--------
* :data:`DEFAULT_SETTINGS` – accepted setting names and their defaults.
* :class:`Configurator` – fluent builder collecting configuration sources and
  settings, then wiring them into a container via :meth:`Configurator.to`.

Service definition
------------------
.. code-block:: json

    {"di": {"services": {"mailer": {
        "class": "app.mail:Mailer",
        "arguments": ["config.mail.host", 25],
        "methods": {"set_logger": ["logger"]},
        "singleton": true
    }}}}

String arguments naming an existing configuration path (``config.mail.host``)
or a registered service (``logger``) are resolved when the service is built;
any other value is passed as is.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any, Callable, Sequence

from .application.merge import merge_configs
from .application.ports import Container, InflectingContainer
from .core import read_config_raw
from .domain.config import ApplicationConfig
from .domain.errors import InvalidConfig, UnknownSetting, UnsupportedFeature
from .observability import log_debug, log_info, make_event

DEFAULT_SETTINGS: Mapping[str, Any] = {
    "config_prefix": "config",
    "config_separator": ".",
    "services_key": "di.services",
    "inflectors_key": "di.inflectors",
    "singleton_services": False,
}


class Configurator:
    """Collect configuration sources and wire them into a container.

    Examples
    --------
    >>> from lib_container_config.adapters.container.default import Container
    >>> container = Container()
    >>> (Configurator.apply()
    ...     .config_from_array({"keyA": "valueA", "keyB": "valueX"})
    ...     .config_from_array({"keyB": "valueB"})
    ...     .to(container))
    >>> container.get("config.keyA"), container.get("config.keyB")
    ('valueA', 'valueB')
    """

    def __init__(self) -> None:
        self._configs: list[Mapping[str, object]] = []
        self._settings: dict[str, Any] = dict(DEFAULT_SETTINGS)
        self._factories: dict[str, Callable[..., Any]] = {}

    @classmethod
    def apply(cls) -> Configurator:
        """Start a new wiring chain."""

        return cls()

    def config_from_array(self, config: Mapping[str, object]) -> Configurator:
        """Overlay a literal mapping on top of the sources collected so far."""

        self._configs.append(config)
        return self

    def config_from_config(self, config: ApplicationConfig) -> Configurator:
        """Overlay an already-built :class:`ApplicationConfig`."""

        self._configs.append(config.as_dict())
        return self

    def config_from_files(self, *patterns: str) -> Configurator:
        """Read and overlay every file matching *patterns* (see :func:`read_config_raw`)."""

        self._configs.append(read_config_raw(patterns))
        return self

    def with_setting(self, name: str, value: Any) -> Configurator:
        """Override one of :data:`DEFAULT_SETTINGS`."""

        if name not in DEFAULT_SETTINGS:
            raise UnknownSetting.from_setting(name, DEFAULT_SETTINGS)
        self._settings[name] = value
        return self

    def with_factory(self, identifier: str, factory: Callable[..., Any]) -> Configurator:
        """Bind *identifier* (as used in ``class`` or inflector keys) to *factory*."""

        self._factories[identifier] = factory
        return self

    def to(self, container: Container) -> None:
        """Register configuration, services, and inflectors on *container*.

        Raises
        ------
        UnsupportedFeature
            When the configuration declares inflectors and *container* cannot
            apply them.
        InvalidConfig
            When a section has the wrong shape or an identifier cannot be
            resolved.
        """

        config = ApplicationConfig(merge_configs(self._configs), self._settings["config_separator"])
        self._register_config(config, container)
        self._register_services(config, container)
        self._register_inflectors(config, container)

    def _register_config(self, config: ApplicationConfig, container: Container) -> None:
        """Register the whole mapping under the prefix and every path beneath it.

        Branch paths are registered as well as leaves, so ``config.group1``
        yields the nested mapping. Each factory returns a fresh copy.
        """

        prefix = self._settings["config_prefix"]
        if prefix:
            container.register(prefix, config.as_dict)
        for path in _all_paths(config.as_dict(), config.separator):
            container.register(self._prefixed(path, config), _value_factory(config, path))
        log_info("configuration_registered", **make_event("wire", None, {"prefix": prefix, "keys": len(config)}))

    def _register_services(self, config: ApplicationConfig, container: Container) -> None:
        """Register one factory per entry of the ``services_key`` section, if present."""

        key = self._settings["services_key"]
        if not config.exists(key):
            return
        for name, definition in _section(config, key).items():
            if not isinstance(definition, Mapping):
                raise InvalidConfig(f'Service "{name}" must be defined by a mapping')
            self._register_service(name, definition, config, container)

    def _register_service(
        self,
        name: str,
        definition: Mapping[str, Any],
        config: ApplicationConfig,
        container: Container,
    ) -> None:
        """Register a factory that builds service *name* from its *definition*.

        Why
        ----
        The definition is checked here, at wiring time, so a malformed
        ``arguments`` or ``methods`` entry fails when ``to()`` runs instead of
        the first time someone asks the container for the service.

        What
        ----
        ``class`` defaults to *name*. ``arguments`` must be a list and
        ``methods`` a mapping of setter name to argument list. Arguments are
        resolved lazily, every time the factory runs.
        """

        factory = self._resolve_identifier(definition.get("class", name))
        arguments = _argument_list(definition.get("arguments", []), f'Arguments of service "{name}"')
        methods = _method_table(definition.get("methods", {}), f'Methods of service "{name}"')
        singleton = bool(definition.get("singleton", self._settings["singleton_services"]))

        def build() -> Any:
            instance = factory(*self._resolve_arguments(arguments, config, container))
            _call_methods(instance, methods, lambda args: self._resolve_arguments(args, config, container))
            return instance

        container.register(name, build, singleton=singleton)
        log_debug("service_registered", **make_event("wire", None, {"service": name, "singleton": singleton}))

    def _register_inflectors(self, config: ApplicationConfig, container: Container) -> None:
        """Turn each ``interface -> {setter: arguments}`` entry into a container inflector.

        Raises :class:`UnsupportedFeature` when the section exists, even empty,
        and *container* has no ``inflect`` method.
        """

        key = self._settings["inflectors_key"]
        if not config.exists(key):
            return
        if not isinstance(container, InflectingContainer):
            raise UnsupportedFeature.from_feature("inflectors", container)
        for identifier, methods in _section(config, key).items():
            interface = self._resolve_identifier(identifier)
            if not isinstance(interface, type):
                raise InvalidConfig(f'Inflector target "{identifier}" is not a class')
            table = _method_table(methods, f'Inflector "{identifier}"')

            def callback(instance: Any, methods: Mapping[str, list[Any]] = table) -> None:
                _call_methods(instance, methods, lambda args: self._resolve_arguments(args, config, container))

            container.inflect(interface, callback)
            log_debug("inflector_registered", **make_event("wire", None, {"interface": identifier}))

    def _resolve_identifier(self, identifier: Any) -> Callable[..., Any]:
        """Return the factory bound to *identifier*: registered, callable, or importable."""

        if isinstance(identifier, str) and identifier in self._factories:
            return self._factories[identifier]
        if callable(identifier):
            return identifier
        if not isinstance(identifier, str):
            raise InvalidConfig(f"Cannot resolve {identifier!r} to a factory")
        return _import_object(identifier)

    def _resolve_arguments(self, arguments: Sequence[Any], config: ApplicationConfig, container: Container) -> list[Any]:
        """Resolve each of *arguments* with :meth:`_resolve_argument`."""

        return [self._resolve_argument(argument, config, container) for argument in arguments]

    def _resolve_argument(self, argument: Any, config: ApplicationConfig, container: Container) -> Any:
        """Swap configuration paths and service names for their values."""

        if not isinstance(argument, str):
            return argument
        path = self._config_path(argument, config)
        if path is not None:
            return config.get(path)
        if container.has(argument):
            return container.get(argument)
        return argument

    def _config_path(self, name: str, config: ApplicationConfig) -> str | None:
        """Return the configuration path *name* refers to, if it exists."""

        prefix = self._settings["config_prefix"]
        if prefix:
            head = prefix + config.separator
            if not name.startswith(head):
                return None
            name = name[len(head) :]
        return name if config.exists(name) else None

    def _prefixed(self, path: str, config: ApplicationConfig) -> str:
        """Return the container name for configuration *path*."""

        prefix = self._settings["config_prefix"]
        return f"{prefix}{config.separator}{path}" if prefix else path


def _section(config: ApplicationConfig, key: str) -> Mapping[str, Any]:
    """Return the mapping stored under *key*; anything else is :class:`InvalidConfig`."""

    section = config.get(key)
    if not isinstance(section, Mapping):
        raise InvalidConfig(f'Configuration entry "{key}" must be a mapping')
    return section


def _all_paths(node: Mapping[str, Any], separator: str, segments: Sequence[str] = ()) -> list[str]:
    """Return every path in *node*, branches included, depth first.

    Examples
    --------
    >>> _all_paths({"group1": {"keyA": "valueA"}, "b": 1}, ".")
    ['group1', 'group1.keyA', 'b']
    """

    paths: list[str] = []
    for key, value in node.items():
        trail = [*segments, str(key)]
        paths.append(separator.join(trail))
        if isinstance(value, Mapping):
            paths.extend(_all_paths(value, separator, trail))
    return paths


def _value_factory(config: ApplicationConfig, path: str) -> Callable[[], Any]:
    """Bind *path* now so every registered factory reads its own entry."""

    return lambda: config.get(path)


def _argument_list(value: Any, owner: str) -> list[Any]:
    """Return *value* as a list, refusing strings and other non-sequences.

    Examples
    --------
    >>> _argument_list(("a", 1), "Arguments")
    ['a', 1]
    >>> _argument_list("host", "Arguments")
    Traceback (most recent call last):
    ...
    lib_container_config.domain.errors.InvalidConfig: Arguments must be a list, got str
    """

    if not isinstance(value, (list, tuple)):
        raise InvalidConfig(f"{owner} must be a list, got {type(value).__name__}")
    return list(value)


def _method_table(value: Any, owner: str) -> dict[str, list[Any]]:
    """Validate a ``{setter: [arguments]}`` mapping and return a copy of it."""

    if not isinstance(value, Mapping):
        raise InvalidConfig(f"{owner} must map method names to argument lists, got {type(value).__name__}")
    return {method: _argument_list(arguments, f'{owner}: method "{method}"') for method, arguments in value.items()}


def _call_methods(
    instance: Any,
    methods: Mapping[str, list[Any]],
    resolve: Callable[[Sequence[Any]], list[Any]],
) -> None:
    """Call each setter on *instance* with its resolved arguments, in order."""

    for method, arguments in methods.items():
        getattr(instance, method)(*resolve(arguments))


def _import_object(dotted: str) -> Callable[..., Any]:
    """Import ``package.module:Name`` or ``package.module.Name``.

    Examples
    --------
    >>> _import_object("collections:OrderedDict").__name__
    'OrderedDict'
    >>> _import_object("collections.OrderedDict").__name__
    'OrderedDict'
    """

    module_name, _, attribute = dotted.partition(":") if ":" in dotted else dotted.rpartition(".")
    try:
        return getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError, ValueError) as exc:
        raise InvalidConfig(f'Cannot import "{dotted}"') from exc
