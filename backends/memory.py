"""In-memory backend."""

from core.backends import (
    BackendInfo,
    CommandHelp,
    MetadataHelp,
    MetadataInfo,
    register,
)
from core.options import ChoiceValue, Option, SizeValue, StringListValue
from core.utils.logging import get_logger

logger = get_logger(__name__)


class Backend:
    """Objects held in process memory."""

    def __init__(self, name: str, root: str, opt: dict):
        self.name = name
        self.root = root.strip("/")
        self.opt = opt

    def __repr__(self) -> str:
        return f"memory backend '{self.name}:{self.root}'"


def new_fs(name: str, root: str, config_map) -> Backend:
    """Build a memory backend from its config."""
    opt = INFO.options.resolve(config_map)
    if opt["max_objects"] < 0:
        raise ValueError(f"max_objects must be >= 0, got {opt['max_objects']}")
    logger.debug(f"New memory backend '{name}' with chunk size {opt['chunk_size']}")
    return Backend(name, root, opt)


INFO = register(
    BackendInfo(
        name="memory",
        description="In memory object storage system.",
        new_fs=new_fs,
        aliases=["mem"],
        options=[
            Option(
                name="chunk_size",
                help="Size of the chunks objects are stored in.",
                default=SizeValue(1 << 20),
            ),
            Option(
                name="max_objects",
                help="Maximum number of objects held, 0 for no limit.",
                default=0,
            ),
            Option(
                name="hash_type",
                help="Hash computed for stored objects.",
                default=ChoiceValue(["md5", "sha1", "none"], type_name="HashType"),
            ),
            Option(
                name="tags",
                help="Tags attached to the remote.\n\nMay be given more than once.",
                default=StringListValue(),
                advanced=True,
            ),
        ],
        command_help=[
            CommandHelp(
                name="stats",
                short="Show object counts and bytes used.",
                long="Prints the number of objects and total bytes per root.",
            ),
        ],
        metadata_info=MetadataInfo(
            system={
                "mtime": MetadataHelp(
                    help="Time of last modification.",
                    type="RFC 3339",
                    example="2006-01-02T15:04:05.999999999Z07:00",
                ),
            },
            help="Only modification time is stored with each object.",
        ),
    )
)
