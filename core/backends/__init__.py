"""Backend registry module."""

# Public API
from core.backends.construct import config_map_for, new_backend
from core.backends.descriptor import (
    BackendInfo,
    CommandHelp,
    MetadataHelp,
    MetadataInfo,
    description_option,
)
from core.backends.exceptions import (
    BackendConstructionError,
    BackendNotFoundError,
    FatalLookupError,
    RegistryError,
)
from core.backends.registry import (
    REGISTRY,
    Registry,
    find,
    find_from_instance,
    must_find,
    record_reverse,
    register,
)
from core.backends.reverse import LockedReverseIndex, ReverseIndex, type_identity

__all__ = [
    "config_map_for",
    "new_backend",
    "BackendInfo",
    "CommandHelp",
    "MetadataHelp",
    "MetadataInfo",
    "description_option",
    "BackendConstructionError",
    "BackendNotFoundError",
    "FatalLookupError",
    "RegistryError",
    "REGISTRY",
    "Registry",
    "find",
    "find_from_instance",
    "must_find",
    "record_reverse",
    "register",
    "LockedReverseIndex",
    "ReverseIndex",
    "type_identity",
]
