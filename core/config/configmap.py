"""Layered key/value configuration with priority tiers."""

import json
import os
from enum import IntEnum
from typing import Any, Optional, Protocol, runtime_checkable


class Priority(IntEnum):
    """
    Priority tiers for config getters, lowest number wins.

    NORMAL: command line flags, connection string parameters, env vars
    CONFIG: the config file
    DEFAULT: compiled-in option defaults
    """

    NORMAL = 0
    CONFIG = 1
    DEFAULT = 2
    MAX = 3


@runtime_checkable
class Getter(Protocol):
    """Anything with get(key) returning the value or None. A dict is one."""

    def get(self, key: str) -> Optional[str]:
        ...


@runtime_checkable
class Setter(Protocol):
    def set(self, key: str, value: str) -> None:
        ...


def _to_text(value: Any) -> str:
    """Render a YAML scalar or list the way option kinds parse it back."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return json.dumps([str(v) for v in value], separators=(",", ":"))
    return str(value)


class Simple(dict):
    """
    A plain dict usable as both Getter and Setter.

    Usage:
        m = Simple()
        m.set("chunk_size", "4Mi")
        m.get("chunk_size")  # -> "4Mi"
    """

    def set(self, key: str, value: str) -> None:
        self[key] = value

    @classmethod
    def from_section(cls, section: dict, skip: tuple = ("type",)) -> "Simple":
        """
        Build from a parsed config file section.

        Args:
            section: Mapping of option name to YAML value
            skip: Keys that aren't options
        """
        return cls({k: _to_text(v) for k, v in section.items() if k not in skip})


class EnvGetter:
    """Reads option values from their environment variables."""

    def __init__(self, options, prefix: str):
        self.options = options
        self.prefix = prefix

    def get(self, key: str) -> Optional[str]:
        opt = self.options.get(key)
        if opt is None:
            return None
        return os.environ.get(opt.env_var_name(self.prefix))


class DefaultsGetter:
    """Exposes the textual default of each option."""

    def __init__(self, options):
        self.options = options

    def get(self, key: str) -> Optional[str]:
        opt = self.options.get(key)
        if opt is None:
            return None
        return opt.default_string()


class SetOptionsGetter:
    """Exposes options whose value was set, e.g. from a command line flag."""

    def __init__(self, options):
        self.options = options

    def get(self, key: str) -> Optional[str]:
        opt = self.options.get(key)
        if opt is None or not opt.value_set:
            return None
        return str(opt)


class ConfigMap:
    """
    Ordered getters consulted by priority, plus setters receiving writes.

    Getters of equal priority are consulted in the order they were added.

    Usage:
        m = ConfigMap()
        m.add_getter(Simple({"chunk_size": "2Mi"}), Priority.NORMAL)
        m.add_getter(DefaultsGetter(options), Priority.DEFAULT)
        m.get("chunk_size")  # -> "2Mi"
        m.get_priority("max_objects", Priority.NORMAL)  # -> None
    """

    def __init__(self):
        self._getters: list[tuple[Priority, Getter]] = []
        self._setters: list[Setter] = []

    def add_getter(self, getter: Getter, priority: Priority = Priority.NORMAL) -> None:
        position = len(self._getters)
        for i, (existing, _) in enumerate(self._getters):
            if existing > priority:
                position = i
                break
        self._getters.insert(position, (Priority(priority), getter))

    def add_setter(self, setter: Setter) -> None:
        self._setters.append(setter)

    def get_priority(self, key: str, max_priority: Priority) -> Optional[str]:
        """
        Get key from getters with priority <= max_priority.

        Returns:
            The first value found, or None
        """
        for priority, getter in self._getters:
            if priority > max_priority:
                break
            value = getter.get(key)
            if value is not None:
                return value
        return None

    def get(self, key: str) -> Optional[str]:
        return self.get_priority(key, Priority.MAX)

    def set(self, key: str, value: str) -> None:
        for setter in self._setters:
            setter.set(key, value)
