"""Exceptions raised while loading remote configuration."""


class ConfigError(Exception):
    """Base exception for remote config errors."""

    pass


class ConfigNotFoundError(ConfigError):
    """Raised when a remotes file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a remotes file isn't valid YAML or isn't a mapping."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when a remote is missing or its section has no type."""

    pass
