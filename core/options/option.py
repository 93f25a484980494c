"""A single backend configuration option."""

import copy
import json
import re
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Optional

from core.options.exceptions import OptionParseError
from core.options.values import (
    OptionValue,
    StringListValue,
    StringValue,
    to_option_value,
)
from core.utils.logging import get_logger

logger = get_logger(__name__)

_NON_ENV_CHARS = re.compile(r"[^A-Za-z0-9]")


def option_to_env(name: str) -> str:
    """
    Convert an option name into an environment variable name.

    Example:
        option_to_env("mem-chunk_size") -> "MEM_CHUNK_SIZE"
    """
    return _NON_ENV_CHARS.sub("_", name).upper()


class OptionVisibility(IntFlag):
    """Where an option is hidden from."""

    SHOWN = 0
    HIDE_COMMAND_LINE = 1
    HIDE_CONFIGURATOR = 2
    HIDE_BOTH = HIDE_COMMAND_LINE | HIDE_CONFIGURATOR


@dataclass
class OptionExample:
    """A predefined value that can be picked for an option."""

    value: str
    help: str = ""
    provider: str = ""

    def to_dict(self) -> dict:
        return {"Value": self.value, "Help": self.help, "Provider": self.provider}


class OptionExamples(list):
    """Ordered list of OptionExample."""

    def sort(self, *, key=None, reverse: bool = False) -> None:
        """Sort in place, by help text unless another key is given."""
        super().sort(key=key or (lambda example: example.help), reverse=reverse)


@dataclass
class Option:
    """
    Describes one configuration option of a backend.

    The same declaration drives the command line flag, the environment
    variable, the configurator question and the JSON introspection export.

    To make a multiple-choice option list the permitted values in
    examples. By default any value is allowed; set exclusive=True to
    restrict the value to the examples, and required=True to refuse the
    empty string.

    Usage:
        opt = Option(name="chunk_size", help="Chunk size.", default=SizeValue(1 << 20))
        opt.set("4Mi")
        str(opt)  # -> "4Mi"
    """

    name: str
    help: str = ""
    default: Any = None
    value: Any = None
    examples: list = field(default_factory=OptionExamples)
    field_name: str = ""
    groups: str = ""
    provider: str = ""
    short_opt: str = ""
    hide: OptionVisibility = OptionVisibility.SHOWN
    required: bool = False
    is_password: bool = False
    no_prefix: bool = False
    advanced: bool = False
    exclusive: bool = False
    sensitive: bool = False
    # Set once set() has succeeded - a string list default is replaced
    # on the first write and appended to afterwards
    value_set: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.default is not None:
            self.default = to_option_value(self.default)
        if self.value is not None:
            self.value = to_option_value(self.value)
            self.value_set = True
        self.examples = OptionExamples(
            e if isinstance(e, OptionExample) else OptionExample(**e)
            for e in self.examples
        )
        self.hide = OptionVisibility(self.hide)

    # ------------------------------------------------------------
    # Values
    # ------------------------------------------------------------

    def get_value(self) -> OptionValue:
        """Return the current value, falling back to the default, then ""."""
        if self.value is not None:
            return self.value
        if self.default is not None:
            return self.default
        return StringValue("")

    def _render(self, value: OptionValue) -> str:
        if not isinstance(value, StringListValue):
            return value.to_string()
        try:
            return value.to_string()
        except (TypeError, ValueError) as e:
            logger.error(f"Can't encode value for {self.name!r} key - ignoring: {e}")
            return "[]"

    def value_string(self) -> str:
        """Render the effective value as text."""
        return self._render(self.get_value())

    def default_string(self) -> str:
        """Render the default as text ("" if unset)."""
        if self.default is None:
            return ""
        return self._render(self.default)

    def __str__(self) -> str:
        return self.value_string()

    def set(self, text: str) -> None:
        """
        Set the option from a string.

        String list options accumulate: the first call replaces the
        default, later calls append.

        Args:
            text: Input from a flag, environment variable or the configurator

        Raises:
            OptionParseError: If text can't be parsed as the option's kind, or
                              the option is exclusive and text isn't an example
        """
        current = self.get_value()
        if isinstance(current, StringListValue):
            base = current if self.value_set else StringListValue()
            new_value = base.append(text)
        else:
            try:
                new_value = current.parse(text)
            except ValueError as e:
                raise OptionParseError(
                    self.name, text, current.type_name(), str(e)
                ) from e
            self._check_exclusive(text, new_value)

        self.value = new_value
        self.value_set = True

    def _check_exclusive(self, text: str, new_value: OptionValue) -> None:
        if not self.exclusive or not self.examples:
            return
        rendered = new_value.to_string()
        if rendered == "" and not self.required:
            return
        allowed = [example.value for example in self.examples]
        if rendered not in allowed:
            raise OptionParseError(
                self.name,
                text,
                new_value.type_name(),
                f"must be one of: {', '.join(allowed)}",
            )

    def parse_value(self, text: str) -> Any:
        """
        Parse text in this option's kind without touching the option.

        Returns:
            The native Python value

        Raises:
            OptionParseError: If text can't be parsed
        """
        current = self.get_value()
        try:
            return current.parse(text).value
        except ValueError as e:
            raise OptionParseError(self.name, text, current.type_name(), str(e)) from e

    def kind(self) -> str:
        """Type tag of the effective value, e.g. "int" or "stringArray"."""
        return self.get_value().type_name()

    # ------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------

    def flag_name(self, prefix: str) -> str:
        """Command line flag name, e.g. chunk_size -> mem-chunk-size."""
        name = self.name.replace("_", "-")
        if not self.no_prefix:
            name = f"{prefix}-{name}"
        return name

    def env_var_name(self, prefix: str) -> str:
        """Environment variable name, e.g. chunk_size -> MEM_CHUNK_SIZE."""
        return option_to_env(f"{prefix}-{self.name}")

    # ------------------------------------------------------------
    # Copying and export
    # ------------------------------------------------------------

    def copy(self) -> "Option":
        """Return an independent copy; examples are not shared."""
        new = copy.copy(self)
        new.examples = OptionExamples(copy.deepcopy(e) for e in self.examples)
        return new

    def to_dict(self) -> dict:
        """
        Export for JSON introspection.

        Adds three derived fields to the declared ones:
            DefaultStr - the default rendered as text
            ValueStr - the effective value rendered as text
            Type - the kind tag
        """
        data = {
            "Name": self.name,
            "FieldName": self.field_name,
            "Help": self.help,
        }
        if self.groups:
            data["Groups"] = self.groups
        data.update(
            {
                "Provider": self.provider,
                "Default": self.default.to_json() if self.default is not None else "",
                "Value": self.value.to_json() if self.value is not None else None,
            }
        )
        if self.examples:
            data["Examples"] = [example.to_dict() for example in self.examples]
        data.update(
            {
                "ShortOpt": self.short_opt,
                "Hide": int(self.hide),
                "Required": self.required,
                "IsPassword": self.is_password,
                "NoPrefix": self.no_prefix,
                "Advanced": self.advanced,
                "Exclusive": self.exclusive,
                "Sensitive": self.sensitive,
                "DefaultStr": self.default_string(),
                "ValueStr": self.value_string(),
                "Type": self.kind(),
            }
        )
        return data

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str)
