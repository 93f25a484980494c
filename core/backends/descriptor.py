"""Static description of a backend - what a backend registers."""

import copy
import json
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from core.options import Option, Options, OptionVisibility


@dataclass
class CommandHelp:
    """Help for a backend specific command."""

    name: str
    short: str = ""
    long: str = ""
    opts: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "Name": self.name,
            "Short": self.short,
            "Long": self.long,
            "Opts": self.opts,
        }


@dataclass
class MetadataHelp:
    """Help for one system metadata key."""

    help: str
    type: str
    example: str = ""
    read_only: bool = False

    def to_dict(self) -> dict:
        return {
            "Help": self.help,
            "Type": self.type,
            "Example": self.example,
            "ReadOnly": self.read_only,
        }


@dataclass
class MetadataInfo:
    """Describes the metadata a backend supports."""

    system: dict = field(default_factory=dict)
    help: str = ""

    def to_dict(self) -> dict:
        return {
            "System": {k: v.to_dict() for k, v in self.system.items()},
            "Help": self.help,
        }


@dataclass
class BackendInfo:
    """
    Registration record for one backend.

    Args:
        name: Name of the backend, e.g. "memory"
        new_fs: Factory building a live instance:
                new_fs(name, root, config_map) -> instance
        description: Defaults to name at registration
        prefix: Prefix for command line flags, defaults to name
        config: Optional configurator callback:
                config(name, config_map, config_in) -> config_out
        options: The backend's Options
        command_help: Backend specific commands
        aliases: Other names this backend is known by
        hide: If set don't show in the configurator
        metadata_info: Help about the metadata in use
    """

    name: str
    new_fs: Optional[Callable[..., Any]] = None
    description: str = ""
    prefix: str = ""
    config: Optional[Callable[..., Any]] = None
    options: Options = field(default_factory=Options)
    command_help: list = field(default_factory=list)
    aliases: list = field(default_factory=list)
    hide: bool = False
    metadata_info: Optional[MetadataInfo] = None

    def __post_init__(self):
        if not isinstance(self.options, Options):
            self.options = Options(self.options)
        if not self.description:
            self.description = self.name

    def file_name(self) -> str:
        """The on disk file name for this backend - name without spaces."""
        return self.name.replace(" ", "")

    def alias_copy(self, alias: str) -> "BackendInfo":
        """
        Copy this info under another name, hidden along with all its options.

        The copy owns its options, so setting a value on one side never
        shows on the other.
        """
        options = self.options.copy()
        for opt in options:
            opt.hide = OptionVisibility.HIDE_BOTH
        return replace(
            self,
            name=alias,
            prefix=alias,
            hide=True,
            options=options,
            command_help=copy.deepcopy(self.command_help),
            aliases=list(self.aliases),
        )

    def to_dict(self) -> dict:
        """Export for JSON introspection - callbacks are left out."""
        return {
            "Name": self.name,
            "Description": self.description,
            "Prefix": self.prefix,
            "Options": [opt.to_dict() for opt in self.options],
            "CommandHelp": [c.to_dict() for c in self.command_help],
            "Aliases": list(self.aliases),
            "Hide": self.hide,
            "MetadataInfo": (
                self.metadata_info.to_dict() if self.metadata_info else None
            ),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


def description_option() -> Option:
    """The option appended to every backend at registration."""
    return Option(
        name="description",
        help="Description of the remote.",
        default="",
        advanced=True,
    )
