"""
Editor configuration.

Controls where playbooks are stored and how the API server runs.
All settings can be overridden via environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class EditorConfig:
    """Configuration for the playbook editor."""

    # Storage settings
    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("CHALKTALK_DATA_DIR", Path.home() / ".chalktalk"))
    )
    store_file: str = field(default_factory=lambda: os.getenv("CHALKTALK_STORE_FILE", "playbooks.json"))
    default_playbook_name: str = "My Playbook"

    # API settings
    api_host: str = field(default_factory=lambda: os.getenv("CHALKTALK_API_HOST", "127.0.0.1"))
    api_port: int = field(default_factory=lambda: int(os.getenv("CHALKTALK_API_PORT", "8000")))

    log_level: str = field(default_factory=lambda: os.getenv("CHALKTALK_LOG_LEVEL", "INFO").upper())

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Create config from environment variables."""
        return cls()

    @property
    def store_path(self) -> Path:
        return Path(self.data_dir) / self.store_file

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if not self.store_file:
            errors.append("CHALKTALK_STORE_FILE is required")
        if not 0 < self.api_port < 65536:
            errors.append(f"CHALKTALK_API_PORT out of range: {self.api_port}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown CHALKTALK_LOG_LEVEL: {self.log_level}")
        return errors


# Singleton config instance
_config: Optional[EditorConfig] = None


def get_config() -> EditorConfig:
    """Get the global editor configuration."""
    global _config
    if _config is None:
        _config = EditorConfig.from_env()
    return _config


def set_config(config: Optional[EditorConfig]) -> None:
    """
    Replace the global configuration.

    Useful for testing; passing None makes the next get_config()
    re-read the environment.
    """
    global _config
    _config = config


def configure_logging(config: Optional[EditorConfig] = None) -> None:
    """Set up root logging at the configured level."""
    config = config or get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
