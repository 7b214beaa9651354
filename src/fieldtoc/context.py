"""Per-invocation CLI state."""

from __future__ import annotations

from pathlib import Path

from .settings import FieldTocConfig, discover_config


class _Context:
    """Options given once on the command line and shared by every command."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.config: FieldTocConfig | None = None


_context = _Context()


def set_config_path(path: Path | None) -> None:
    """Set the --config path and forget any config loaded for a previous one."""
    _context.config_path = path
    _context.config = None


def get_config(content_path: Path) -> FieldTocConfig:
    """Load the configuration that applies to a content file.

    The result is kept until set_config_path() is called again.

    Raises:
        ParseError: If the config file cannot be read
        ConfigurationError: If the config file is invalid
    """
    if _context.config is None:
        _context.config = discover_config(content_path, _context.config_path)
    return _context.config
