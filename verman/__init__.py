"""verman - Spin Version Manager.

Downloads Spin CLI releases into a local store, keeps one directory per
version and switches the active binary by swapping a single symlink in
``~/.spin_verman/versions/current_version``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .activate import Activator, SubprocessVersionQuery
from .config import VermanConfig
from .download import ArtifactFetcher, artifact_name, download_file
from .errors import (
    ArchiveFormatError,
    ConfigError,
    HTTPStatusError,
    InvalidVersionError,
    NetworkError,
    UnsupportedPlatformError,
    VerificationMismatchError,
    VermanError,
)
from .extract import ArchiveExtractor
from .manager import VersionManager
from .store import VersionStore
from .utils import PlatformTag, current_platform, normalize_version, setup_logging

__all__ = [
    "Activator",
    "ArchiveExtractor",
    "ArchiveFormatError",
    "ArtifactFetcher",
    "ConfigError",
    "HTTPStatusError",
    "InvalidVersionError",
    "NetworkError",
    "PlatformTag",
    "SubprocessVersionQuery",
    "UnsupportedPlatformError",
    "VerificationMismatchError",
    "VermanConfig",
    "VermanError",
    "VersionManager",
    "VersionStore",
    "artifact_name",
    "current_platform",
    "download_file",
    "normalize_version",
    "setup_logging",
]
