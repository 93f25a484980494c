"""Build live backend instances from their registration records."""

from typing import Any, Optional

from core.backends.descriptor import BackendInfo
from core.backends.exceptions import BackendConstructionError
from core.backends.registry import REGISTRY, Registry
from core.config.configmap import (
    ConfigMap,
    DefaultsGetter,
    EnvGetter,
    Priority,
    SetOptionsGetter,
    Simple,
)
from core.utils.logging import get_logger

logger = get_logger(__name__)


def config_map_for(
    info: BackendInfo,
    section: Optional[dict] = None,
    params: Optional[dict] = None,
) -> ConfigMap:
    """
    Assemble the layered config for one backend.

    Load order (first found wins):
        1. option values set from flags           (NORMAL)
        2. connection string parameters           (NORMAL)
        3. environment variables                  (NORMAL)
        4. the remote's config file section       (CONFIG)
        5. option defaults                        (DEFAULT)

    Args:
        info: The backend's registration record
        section: Parsed config file section for the remote
        params: Connection string parameters, option name -> text

    Returns:
        ConfigMap; writes go to a fresh Simple holding the section
    """
    config_map = ConfigMap()
    config_map.add_getter(SetOptionsGetter(info.options), Priority.NORMAL)
    if params:
        config_map.add_getter(Simple.from_section(params, skip=()), Priority.NORMAL)
    config_map.add_getter(EnvGetter(info.options, info.prefix), Priority.NORMAL)

    stored = Simple.from_section(section or {})
    config_map.add_getter(stored, Priority.CONFIG)
    config_map.add_setter(stored)

    config_map.add_getter(DefaultsGetter(info.options), Priority.DEFAULT)
    return config_map


def new_backend(
    type_name: str,
    root: str = "",
    name: Optional[str] = None,
    section: Optional[dict] = None,
    params: Optional[dict] = None,
    registry: Registry = REGISTRY,
) -> Any:
    """
    Find a backend, build an instance and record it in the reverse index.

    Args:
        type_name: Backend name, prefix or file name
        root: Path inside the backend
        name: Remote name, defaults to type_name
        section: Parsed config file section for the remote
        params: Connection string parameters

    Returns:
        The live instance

    Raises:
        BackendNotFoundError: If type_name isn't registered
        BackendConstructionError: If the backend has no factory or it fails
    """
    info = registry.find(type_name)
    if info.new_fs is None:
        raise BackendConstructionError(f"Backend '{info.name}' has no factory")

    config_map = config_map_for(info, section=section, params=params)
    remote = name or info.name

    try:
        instance = info.new_fs(remote, root, config_map)
    except Exception as e:
        raise BackendConstructionError(
            f"Failed to create backend '{info.name}' for '{remote}': {e}"
        ) from e

    registry.record_reverse(instance, info)
    logger.info(f"Created '{info.name}' backend for remote '{remote}' (root={root!r})")
    return instance
