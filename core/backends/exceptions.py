"""Custom exceptions for the backend registry."""


class RegistryError(Exception):
    """Base exception for registry errors."""

    pass


class BackendNotFoundError(RegistryError, KeyError):
    """Raised when no registered backend matches a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"didn't find backend called {name!r}")

    def __str__(self) -> str:
        # KeyError would quote the message
        return self.args[0]


class BackendConstructionError(RegistryError):
    """Raised when a backend's factory fails to build an instance."""

    pass


class FatalLookupError(SystemExit):
    """
    Raised by must_find when a backend kind doesn't exist in this build.

    Being a SystemExit it ends the process unless the outermost layer
    chooses to catch it.
    """

    pass
