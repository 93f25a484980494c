"""Ordered collection of a backend's options."""

from typing import Any, Iterable, Iterator, Optional

from core.config.configmap import ConfigMap, Getter, Priority, Simple
from core.options.option import Option, OptionExample, OptionExamples
from core.options.values import Choices, StringValue


class Options:
    """
    Ordered, name-unique list of Option.

    Order is declaration order and drives command line help ordering.

    Usage:
        options = Options([
            Option(name="chunk_size", default=SizeValue(1 << 20)),
            Option(name="hash_type", default=ChoiceValue(["md5", "sha1"])),
        ])
        options.set_values()
        options.get("hash_type").exclusive  # -> True
    """

    def __init__(self, options: Iterable[Option] = ()):
        self._options: list[Option] = []
        for opt in options:
            self.append(opt)

    def append(self, opt: Option) -> None:
        """
        Add an option at the end.

        Raises:
            ValueError: If an option with the same name exists
        """
        if self.get(opt.name) is not None:
            raise ValueError(f"duplicate option {opt.name!r}")
        self._options.append(opt)

    def __iter__(self) -> Iterator[Option]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __getitem__(self, index: int) -> Option:
        return self._options[index]

    def __repr__(self) -> str:
        return f"Options({[opt.name for opt in self._options]!r})"

    def names(self) -> list[str]:
        return [opt.name for opt in self._options]

    def set_values(self) -> None:
        """
        Apply registration-time defaults.

        Unset defaults become "". An option whose default offers choices
        and which declares no examples gets one example per choice and is
        made exclusive and required.
        """
        for opt in self._options:
            if opt.default is None:
                opt.default = StringValue("")
            if isinstance(opt.default, Choices) and not opt.examples:
                opt.exclusive = True
                opt.required = True
                opt.examples = OptionExamples(
                    OptionExample(value=choice) for choice in opt.default.choices()
                )

    def get(self, name: str) -> Optional[Option]:
        """Return the option called name, or None."""
        for opt in self._options:
            if opt.name == name:
                return opt
        return None

    def overridden(self, config_map: ConfigMap) -> Simple:
        """
        Find options explicitly supplied at normal priority or higher.

        That is by the connection string, command line flags or
        environment variables, as opposed to the config file or defaults.
        """
        overridden = Simple()
        for opt in self._options:
            value = config_map.get_priority(opt.name, Priority.NORMAL)
            if value is not None:
                overridden.set(opt.name, value)
        return overridden

    def non_default(self, getter: Getter) -> Simple:
        """Find options whose resolved value differs from the default."""
        non_default = Simple()
        for opt in self._options:
            value = getter.get(opt.name)
            if value is None:
                continue
            if value != opt.default_string():
                non_default.set(opt.name, value)
        return non_default

    def has_advanced(self) -> bool:
        return any(opt.advanced for opt in self._options)

    def resolve(self, getter: Getter) -> dict[str, Any]:
        """
        Resolve every option to a native Python value.

        Values found in getter are parsed in the option's kind; missing
        ones fall back to the option's effective value.

        Raises:
            OptionParseError: If a supplied value doesn't parse
        """
        resolved = {}
        for opt in self._options:
            text = getter.get(opt.name)
            if text is None:
                resolved[opt.name] = opt.get_value().value
            else:
                resolved[opt.name] = opt.parse_value(text)
        return resolved

    def copy(self) -> "Options":
        """Return an independent copy holding copies of every option."""
        return Options(opt.copy() for opt in self._options)
