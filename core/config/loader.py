"""Remotes file loader - loads and merges remote definitions."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from core.config.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)

logger = logging.getLogger(__name__)


def merge_remotes(base: dict, override: dict) -> dict:
    """
    Merge two remotes mappings. Override wins on conflicts.

    Sections for the same remote are merged key by key, unless the
    override changes the remote's type: the old backend's options don't
    apply to the new one, so the section is replaced.

    Example:
        base = {"scratch": {"type": "memory", "chunk_size": "1Mi"}}
        override = {"scratch": {"max_objects": 10}}
        result = {"scratch": {"type": "memory", "chunk_size": "1Mi", "max_objects": 10}}
    """
    result = {name: dict(section) for name, section in base.items()}

    for name, section in override.items():
        current = result.get(name)
        old_type = current.get("type") if current is not None else None
        if current is None or section.get("type", old_type) != old_type:
            result[name] = dict(section)
        else:
            current.update(section)

    return result


class ConfigLoader:
    """
    Loads remote definitions from YAML.

    File format:
        scratch:
          type: memory
          chunk_size: 4Mi
          tags: [fast, volatile]

    Load order (later wins):
        1. remotes.yaml
        2. remotes.{environment}.yaml (optional environment overrides)

    Usage:
        loader = ConfigLoader("remotes.yaml")
        remotes = loader.load(environment="prod")
        section = remote_section(remotes, "scratch")
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse a YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(content, dict) or not all(
            isinstance(section, dict) for section in content.values()
        ):
            raise ConfigParseError(f"Expected a mapping of remote sections in {path}")

        logger.debug(f"Loaded config: {path}")
        return content

    def overlay_path(self, environment: str) -> Path:
        return self.path.with_name(f"{self.path.stem}.{environment}{self.path.suffix}")

    def load(self, environment: Optional[str] = None) -> dict:
        """
        Load all remotes.

        Args:
            environment: Optional environment (e.g., "prod", "staging")

        Returns:
            Mapping of remote name to section
        """
        remotes = self._load_yaml(self.path)
        logger.info(f"Loaded {len(remotes)} remotes from {self.path}")

        if environment:
            overlay = self.overlay_path(environment)
            if overlay.exists():
                remotes = merge_remotes(remotes, self._load_yaml(overlay))
                logger.info(f"Merged environment config: {overlay}")

        return remotes

    def health_check(self) -> bool:
        """Check the remotes file exists."""
        return self.path.exists()


def remote_section(remotes: dict, remote: str) -> dict:
    """
    Return one remote's section.

    Raises:
        ConfigValidationError: If the remote isn't defined or has no type
    """
    section = remotes.get(remote)
    if section is None:
        available = ", ".join(remotes) or "none"
        raise ConfigValidationError(
            f"Unknown remote: '{remote}'. Available: {available}"
        )
    if not section.get("type"):
        raise ConfigValidationError(f"Remote '{remote}' has no type")
    return section
