"""Backend registry - registration, lookup and the reverse index."""

from typing import Any, Iterator, Optional

from core.backends.descriptor import BackendInfo, description_option
from core.backends.exceptions import BackendNotFoundError, FatalLookupError
from core.backends.reverse import LockedReverseIndex, ReverseIndex, type_identity
from core.utils.logging import get_logger
from monitoring import Metrics

logger = get_logger(__name__)


class Registry:
    """
    Append-only, ordered collection of BackendInfo.

    Registration is meant to run to completion during single threaded
    startup; after that find() is a plain read and safe from any number
    of threads. The reverse index may be used from any thread at any time.

    Usage:
        registry = Registry()
        registry.register(BackendInfo(name="memory", new_fs=new_fs, aliases=["mem"]))
        info = registry.find("mem")
    """

    def __init__(self, reverse_index: Optional[ReverseIndex] = None):
        self._items: list[BackendInfo] = []
        if reverse_index is None:
            reverse_index = LockedReverseIndex()
        self._reverse = reverse_index

    def __iter__(self) -> Iterator[BackendInfo]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def names(self, include_hidden: bool = False) -> list[str]:
        """Registered names in registration order."""
        return [info.name for info in self._items if include_hidden or not info.hide]

    # ------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------

    def register(self, info: BackendInfo) -> BackendInfo:
        """
        Register a backend and one hidden copy per alias.

        Args:
            info: The backend's registration record. Its options get their
                  defaults applied and the description option appended.

        Returns:
            info, for use as a module level constant
        """
        info.options.set_values()
        if not info.prefix:
            info.prefix = info.name
        info.options.append(description_option())
        self._append(info, alias=False)

        for alias in info.aliases:
            self._append(info.alias_copy(alias), alias=True)
        if info.aliases:
            logger.info(
                f"Registered backend '{info.name}' with aliases: "
                f"{', '.join(info.aliases)}"
            )

        return info

    def _append(self, info: BackendInfo, alias: bool) -> None:
        self._items.append(info)
        Metrics.registered(alias=alias)
        kind = "alias" if alias else "backend"
        logger.debug(f"Registered {kind} '{info.name}' ({len(info.options)} options)")

    # ------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------

    def find(self, name: str) -> BackendInfo:
        """
        Find a backend by name, flag prefix or file name.

        First match wins.

        Raises:
            BackendNotFoundError: If nothing matches
        """
        for info in self._items:
            if name in (info.name, info.prefix, info.file_name()):
                return info
        raise BackendNotFoundError(name)

    def must_find(self, name: str) -> BackendInfo:
        """
        Find a backend, ending the process if it doesn't exist.

        Raises:
            FatalLookupError: If nothing matches
        """
        try:
            return self.find(name)
        except BackendNotFoundError as e:
            logger.critical(f"Failed to find backend: {e}")
            raise FatalLookupError(f"Failed to find backend: {e}") from e

    # ------------------------------------------------------------
    # Reverse index
    # ------------------------------------------------------------

    def record_reverse(self, instance: Any, info: BackendInfo) -> None:
        """Remember that instances of this kind come from info."""
        identity = type_identity(instance)
        self._reverse.record(identity, info)
        Metrics.reverse_recorded(info.name)

    def find_from_instance(self, instance: Any) -> Optional[BackendInfo]:
        """
        Find the BackendInfo an instance was built from.

        Returns:
            The info, or None if the instance's kind was never recorded
        """
        return self._reverse.lookup(type_identity(instance))


# Process-wide registry the shipped backends register into
REGISTRY = Registry()


def register(info: BackendInfo) -> BackendInfo:
    return REGISTRY.register(info)


def find(name: str) -> BackendInfo:
    return REGISTRY.find(name)


def must_find(name: str) -> BackendInfo:
    return REGISTRY.must_find(name)


def record_reverse(instance: Any, info: BackendInfo) -> None:
    REGISTRY.record_reverse(instance, info)


def find_from_instance(instance: Any) -> Optional[BackendInfo]:
    return REGISTRY.find_from_instance(instance)
