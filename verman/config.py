"""Configuration management for verman."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError
from .utils import console

logger = logging.getLogger(__name__)

DEFAULT_ROOT_DIR = "~/.spin_verman"
DEFAULT_RELEASE_URL = "https://github.com/fermyon/spin/releases/download"
ACTIVE_SLOT = "current_version"
CONFIG_FILENAME = "config.yaml"


@dataclass
class VermanConfig:
    """Configuration for verman."""

    root_dir: Path = field(
        default_factory=lambda: Path(os.path.expanduser(DEFAULT_ROOT_DIR)),
    )
    binary_name: str = "spin"
    release_url: str = DEFAULT_RELEASE_URL
    version_flag: str = "--version"
    download_timeout: float | None = 30
    verify: bool = True

    def __post_init__(self) -> None:
        # Symlink targets are built from this path; keep it absolute.
        self.root_dir = Path(self.root_dir).expanduser().absolute()

    @property
    def versions_dir(self) -> Path:
        """Directory holding one subdirectory per installed version."""
        return self.root_dir / "versions"

    @property
    def active_dir(self) -> Path:
        """The reserved slot holding the link to the active binary."""
        return self.versions_dir / ACTIVE_SLOT

    @property
    def active_binary(self) -> Path:
        return self.active_dir / self.binary_name

    @classmethod
    def load_from_file(cls, config_path: str | Path | None = None) -> VermanConfig:
        """Load configuration from YAML file.

        A missing file yields the defaults; a malformed one raises ConfigError.
        """
        if not config_path:
            config_path = cls().root_dir / CONFIG_FILENAME

        try:
            with open(config_path) as file:
                config_data = yaml.safe_load(file) or {}
        except FileNotFoundError:
            logger.info("Configuration file not found: %s, using defaults", config_path)
            return cls()
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in configuration file {config_path}: {e}"
            raise ConfigError(msg) from e

        if not isinstance(config_data, dict):
            msg = f"Configuration file {config_path} must contain a mapping"
            raise ConfigError(msg)

        return cls._from_dict(config_data)

    @classmethod
    def _from_dict(cls, config_data: dict) -> VermanConfig:
        known = {f.name for f in dataclasses.fields(cls)}
        for key in config_data.keys() - known:
            console.print(f"⚠️ [yellow]Ignoring unknown configuration key '{key}'[/yellow]")

        kwargs = {k: v for k, v in config_data.items() if k in known}
        for key, value in kwargs.items():
            expected = _FIELD_TYPES[key]
            # bool is an int, so it is never a valid timeout
            if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
                names = ", ".join(t.__name__ for t in expected)
                msg = f"Configuration key '{key}' must be one of ({names}), got {value!r}"
                raise ConfigError(msg)
        return cls(**kwargs)


_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "root_dir": (str, Path),
    "binary_name": (str,),
    "release_url": (str,),
    "version_flag": (str,),
    "download_timeout": (int, float, type(None)),
    "verify": (bool,),
}
