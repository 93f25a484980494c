"""Local disk backend."""

import os
from datetime import timedelta

from core.backends import BackendInfo, register
from core.options import DurationValue, Option, OptionExample, StringListValue


class Backend:
    """Files on a local disk."""

    def __init__(self, name: str, root: str, opt: dict):
        self.name = name
        self.root = root
        self.opt = opt

    def __repr__(self) -> str:
        return f"local backend '{self.root}'"


def new_fs(name: str, root: str, config_map) -> Backend:
    opt = INFO.options.resolve(config_map)
    return Backend(name, os.path.abspath(root or "."), opt)


INFO = register(
    BackendInfo(
        name="local",
        description="Local Disk",
        new_fs=new_fs,
        aliases=["disk"],
        options=[
            Option(
                name="nounc",
                help="Disable UNC (long path names) conversion on Windows.",
                default=False,
                examples=[
                    OptionExample(value="true", help="Disables long file names.")
                ],
            ),
            Option(
                name="copy_links",
                help="Follow symlinks and copy the pointed to item.",
                default=False,
                short_opt="L",
                no_prefix=True,
                advanced=True,
            ),
            Option(
                name="skip_links",
                help="Don't warn about skipped symlinks.",
                default=False,
                no_prefix=True,
                advanced=True,
            ),
            Option(
                name="time_skew",
                help="Allowed difference between local and remote modification times.",
                default=DurationValue(timedelta(seconds=1)),
                advanced=True,
            ),
            Option(
                name="exclude",
                help="Glob patterns never listed.",
                default=StringListValue(),
                advanced=True,
            ),
            Option(
                name="encoding",
                help="The encoding for the backend.",
                default="Slash,Dot",
                advanced=True,
            ),
        ],
    )
)
