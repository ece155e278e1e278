"""Acceptance tests for wiring configuration and services into a container."""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, Callable

import pytest

from lib_container_config import (
    Configurator,
    Container,
    InvalidConfig,
    UnknownSetting,
    UnsupportedFeature,
)


class ExampleInterface(abc.ABC):
    @abc.abstractmethod
    def set_value(self, value: Any) -> None: ...


class ExampleClass(ExampleInterface):
    def __init__(self) -> None:
        self.value = None

    def set_value(self, value: Any) -> None:
        self.value = value


class ExampleClassWithArgs:
    def __init__(self, *args: Any) -> None:
        self.constructor_args = list(args)


class BareContainer:
    """Container without inflector support."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], Any]] = {}

    def register(self, name: str, factory: Callable[[], Any], *, singleton: bool = False) -> None:
        self._factories[name] = factory

    def get(self, name: str) -> Any:
        return self._factories[name]()

    def has(self, name: str) -> bool:
        return name in self._factories


def identifier(cls: type) -> str:
    return f"{cls.__module__}:{cls.__qualname__}"


@pytest.fixture()
def container() -> Container:
    return Container()


def services(**definitions: Any) -> dict[str, Any]:
    return {"di": {"services": definitions}}


# configuration entries


def test_adds_config_to_the_container(container: Container) -> None:
    Configurator.apply().config_from_array({"keyA": "valueA"}).to(container)
    assert container.get("config.keyA") == "valueA"


def test_cascade_adds_config_to_the_container(container: Container) -> None:
    (
        Configurator.apply()
        .config_from_array({"keyA": "valueA", "keyB": "valueX"})
        .config_from_array({"keyB": "valueB"})
        .to(container)
    )
    assert container.get("config.keyA") == "valueA"
    assert container.get("config.keyB") == "valueB"


def test_adds_grouped_config_to_the_container(container: Container) -> None:
    Configurator.apply().config_from_array({"group1": {"keyA": "valueA"}}).to(container)
    assert container.get("config.group1") == {"keyA": "valueA"}
    assert container.get("config.group1.keyA") == "valueA"
    assert container.get("config") == {"group1": {"keyA": "valueA"}}


def test_config_values_are_copies(container: Container) -> None:
    Configurator.apply().config_from_array({"group1": {"keyA": "valueA"}}).to(container)
    container.get("config.group1")["keyA"] = "changed"
    assert container.get("config.group1.keyA") == "valueA"


def test_alternative_separator(container: Container) -> None:
    Configurator.apply().config_from_array({"keyA": "valueA"}).with_setting("config_separator", "/").to(container)
    assert container.get("config/keyA") == "valueA"


def test_alternative_prefix(container: Container) -> None:
    Configurator.apply().config_from_array({"keyA": "valueA"}).with_setting("config_prefix", "settings").to(container)
    assert container.get("settings.keyA") == "valueA"


def test_no_prefix(container: Container) -> None:
    Configurator.apply().config_from_array({"keyA": "valueA"}).with_setting("config_prefix", "").to(container)
    assert container.get("keyA") == "valueA"
    assert not container.has("")


def test_config_from_files(tmp_path: Path, container: Container) -> None:
    (tmp_path / "a.json").write_text('{"keyA": "valueA", "keyB": "valueX"}', encoding="utf-8")
    (tmp_path / "b.json").write_text('{"keyB": "valueB"}', encoding="utf-8")
    Configurator.apply().config_from_files(str(tmp_path / "*.json")).to(container)
    assert container.get("config.keyB") == "valueB"


def test_unknown_setting_is_rejected() -> None:
    with pytest.raises(UnknownSetting) as info:
        Configurator.apply().with_setting("no_such_setting", 1)
    assert info.value.setting == "no_such_setting"


# services


def test_adds_services_to_the_container(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass)})
    Configurator.apply().config_from_array(config).to(container)
    assert isinstance(container.get("example_class"), ExampleClass)


def test_accepts_callables_as_class(container: Container) -> None:
    Configurator.apply().config_from_array(services(example_class={"class": ExampleClass})).to(container)
    assert isinstance(container.get("example_class"), ExampleClass)


def test_services_for_a_different_config_key(container: Container) -> None:
    config = {"di": {"example_class": {"class": identifier(ExampleClass)}}}
    Configurator.apply().config_from_array(config).with_setting("services_key", "di").to(container)
    assert isinstance(container.get("example_class"), ExampleClass)


def test_registered_factory_identifiers(container: Container) -> None:
    (
        Configurator.apply()
        .config_from_array(services(example={"class": "example"}, implicit={}))
        .with_factory("example", ExampleClass)
        .with_factory("implicit", ExampleClassWithArgs)
        .to(container)
    )
    assert isinstance(container.get("example"), ExampleClass)
    assert isinstance(container.get("implicit"), ExampleClassWithArgs)


def test_creates_unique_instances_by_default(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass)})
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class") is not container.get("example_class")


def test_creates_singleton_instances(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass), "singleton": True})
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class") is container.get("example_class")


def test_singleton_by_default_setting(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass)})
    Configurator.apply().config_from_array(config).with_setting("singleton_services", True).to(container)
    assert container.get("example_class") is container.get("example_class")


def test_unique_instances_when_singleton_is_default(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass), "singleton": False})
    Configurator.apply().config_from_array(config).with_setting("singleton_services", True).to(container)
    assert container.get("example_class") is not container.get("example_class")


def test_adds_constructor_arguments(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClassWithArgs), "arguments": ["arg1", "arg2"]})
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").constructor_args == ["arg1", "arg2"]


def test_resolves_constructor_arguments_naming_config_entries(container: Container) -> None:
    config = {
        "arg1": "value1",
        "arg2": {"nested": 2},
        **services(
            example_class={
                "class": identifier(ExampleClassWithArgs),
                "arguments": ["config.arg1", "config.arg2", "config.missing", 3],
            }
        ),
    }
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").constructor_args == ["value1", {"nested": 2}, "config.missing", 3]


def test_resolves_constructor_arguments_naming_services(container: Container) -> None:
    config = services(
        dependency={"class": identifier(ExampleClass), "singleton": True},
        example_class={"class": identifier(ExampleClassWithArgs), "arguments": ["dependency"]},
    )
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").constructor_args == [container.get("dependency")]


def test_class_name_arguments_stay_strings(container: Container) -> None:
    config = services(
        example_class={"class": identifier(ExampleClassWithArgs), "arguments": [identifier(ExampleClass), "arg2"]}
    )
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").constructor_args == [identifier(ExampleClass), "arg2"]


def test_calls_setter_methods(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass), "methods": {"set_value": ["the value"]}})
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").value == "the value"


def test_resolves_setter_arguments_naming_config_entries(container: Container) -> None:
    config = {
        "arg": "value",
        **services(example_class={"class": identifier(ExampleClass), "methods": {"set_value": ["config.arg"]}}),
    }
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").value == "value"


def test_resolves_prefixed_paths_with_custom_prefix_and_separator(container: Container) -> None:
    config = {
        "db": {"host": "localhost"},
        "di": {"services": {"example_class": {"class": identifier(ExampleClass), "methods": {"set_value": ["settings/db/host"]}}}},
    }
    (
        Configurator.apply()
        .config_from_array(config)
        .with_setting("config_prefix", "settings")
        .with_setting("config_separator", "/")
        .with_setting("services_key", "di/services")
        .to(container)
    )
    assert container.get("example_class").value == "localhost"


def test_unimportable_class_is_reported(container: Container) -> None:
    config = services(broken={"class": "no_such_module_xyz:Nothing"})
    with pytest.raises(InvalidConfig, match="no_such_module_xyz"):
        Configurator.apply().config_from_array(config).to(container)


def test_services_section_must_be_a_mapping(container: Container) -> None:
    with pytest.raises(InvalidConfig):
        Configurator.apply().config_from_array({"di": {"services": ["oops"]}}).to(container)


def test_string_arguments_are_rejected(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClassWithArgs), "arguments": "host"})
    with pytest.raises(InvalidConfig, match='Arguments of service "example_class" must be a list, got str'):
        Configurator.apply().config_from_array(config).to(container)


def test_tuple_arguments_are_accepted(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClassWithArgs), "arguments": ("arg1", "arg2")})
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example_class").constructor_args == ["arg1", "arg2"]


def test_string_setter_arguments_are_rejected(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass), "methods": {"set_value": "abc"}})
    with pytest.raises(InvalidConfig, match='method "set_value" must be a list, got str'):
        Configurator.apply().config_from_array(config).to(container)


def test_methods_must_be_a_mapping(container: Container) -> None:
    config = services(example_class={"class": identifier(ExampleClass), "methods": ["set_value"]})
    with pytest.raises(InvalidConfig, match="must map method names to argument lists"):
        Configurator.apply().config_from_array(config).to(container)


# inflectors


def test_sets_up_an_inflector(container: Container) -> None:
    config = {
        "di": {
            "services": {"example": {"class": identifier(ExampleClass)}},
            "inflectors": {identifier(ExampleInterface): {"set_value": ["test_value"]}},
        }
    }
    Configurator.apply().config_from_array(config).to(container)
    assert container.get("example").value == "test_value"


def test_sets_up_an_inflector_using_custom_inflectors_key(container: Container) -> None:
    config = {
        "di": {"services": {"example": {"class": identifier(ExampleClass)}}},
        "inflectors": {identifier(ExampleInterface): {"set_value": ["test_value"]}},
    }
    Configurator.apply().config_from_array(config).with_setting("inflectors_key", "inflectors").to(container)
    assert container.get("example").value == "test_value"


def test_inflector_resolves_config_arguments(container: Container) -> None:
    config = {
        "greeting": "hello",
        "di": {
            "services": {"example": {"class": identifier(ExampleClass)}},
            "inflectors": {"example_interface": {"set_value": ["config.greeting"]}},
        },
    }
    (
        Configurator.apply()
        .config_from_array(config)
        .with_factory("example_interface", ExampleInterface)
        .to(container)
    )
    assert container.get("example").value == "hello"


def test_string_inflector_arguments_are_rejected(container: Container) -> None:
    config = {"di": {"inflectors": {identifier(ExampleInterface): {"set_value": "abc"}}}}
    with pytest.raises(InvalidConfig, match='method "set_value" must be a list, got str'):
        Configurator.apply().config_from_array(config).to(container)


def test_inflector_methods_must_be_a_mapping(container: Container) -> None:
    config = {"di": {"inflectors": {identifier(ExampleInterface): ["set_value"]}}}
    with pytest.raises(InvalidConfig, match="must map method names to argument lists"):
        Configurator.apply().config_from_array(config).to(container)


def test_inflectors_are_unsupported_by_bare_containers() -> None:
    with pytest.raises(UnsupportedFeature) as info:
        Configurator.apply().config_from_array({"di": {"inflectors": {}}}).to(BareContainer())
    assert info.value.feature == "inflectors"


def test_bare_containers_work_without_inflectors() -> None:
    container = BareContainer()
    Configurator.apply().config_from_array(services(example={"class": ExampleClass})).to(container)
    assert isinstance(container.get("example"), ExampleClass)


def test_config_from_config_overlays_a_store(container: Container) -> None:
    from lib_container_config import ApplicationConfig

    (
        Configurator.apply()
        .config_from_array({"keyA": "valueA", "keyB": "valueX"})
        .config_from_config(ApplicationConfig({"keyB": "valueB"}))
        .to(container)
    )
    assert container.get("config.keyB") == "valueB"
