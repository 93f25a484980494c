"""Option-related exceptions."""


class OptionError(Exception):
    """Base exception for option errors."""

    pass


class OptionParseError(OptionError, ValueError):
    """Raised when a string can't be coerced into an option's value kind."""

    def __init__(self, option: str, value: str, kind: str, reason: str = ""):
        self.option = option
        self.value = value
        self.kind = kind
        message = f"{option}: couldn't parse {value!r} as {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
