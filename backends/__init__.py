"""Shipped backends.

Importing this package registers every backend below into the
process-wide registry.
"""

from backends import local, memory  # noqa: F401

__all__ = ["local", "memory"]
