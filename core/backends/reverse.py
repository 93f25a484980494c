"""Reverse index - recover the BackendInfo a live instance was built from."""

import threading
import weakref
from abc import ABC, abstractmethod
from typing import Any, Optional

# Instance classes are conventionally called Backend inside their module
STRUCTURAL_SUFFIX = ".Backend"

_PROXY_TYPES = (weakref.ProxyType, weakref.CallableProxyType)


def type_identity(instance: Any) -> str:
    """
    Return a stable textual identity for the kind of a live instance.

    Weak proxies are looked through, and the ".Backend" class suffix is
    stripped.

    Example:
        type_identity(backends.memory.Backend(...)) -> "backends.memory"
    """
    if isinstance(instance, _PROXY_TYPES):
        # attribute access on a proxy reaches the referent
        cls = instance.__class__
    else:
        cls = type(instance)
    identity = f"{cls.__module__}.{cls.__qualname__}"
    if identity.endswith(STRUCTURAL_SUFFIX):
        identity = identity[: -len(STRUCTURAL_SUFFIX)]
    return identity


class ReverseIndex(ABC):
    """
    Map from type identity to BackendInfo.

    Implementations must be safe to call from many threads at once.
    """

    @abstractmethod
    def record(self, identity: str, info) -> None:
        """Store identity -> info, replacing any earlier entry."""
        pass

    @abstractmethod
    def lookup(self, identity: str):
        """Return the info recorded for identity, or None."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class LockedReverseIndex(ReverseIndex):
    """ReverseIndex guarded by a single mutex held only for the dict access."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: dict = {}

    def record(self, identity: str, info) -> None:
        with self._lock:
            self._entries[identity] = info

    def lookup(self, identity: str) -> Optional[Any]:
        with self._lock:
            return self._entries.get(identity)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
