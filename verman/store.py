"""On-disk layout of installed versions."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from .config import ACTIVE_SLOT
from .utils import VERSION_PREFIX

if TYPE_CHECKING:
    from .config import VermanConfig

logger = logging.getLogger(__name__)


class VersionStore:
    """Owns ``<root>/versions``.

    A version is installed iff ``versions/<tag>`` is a directory; there is
    no separate index. ``versions/current_version`` is the reserved active
    slot and never counts as a version.
    """

    def __init__(self, config: VermanConfig) -> None:
        self.config = config

    @property
    def versions_dir(self) -> Path:
        return self.config.versions_dir

    @property
    def active_dir(self) -> Path:
        return self.config.active_dir

    def ensure_root(self) -> Path:
        """Create the root and versions directories if absent."""
        self.config.root_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        self.versions_dir.mkdir(exist_ok=True)
        return self.versions_dir

    def version_dir(self, tag: str) -> Path:
        return self.versions_dir / tag

    def binary_path(self, tag: str) -> Path:
        return self.version_dir(tag) / self.config.binary_name

    def archive_path(self, artifact_name: str) -> Path:
        return self.versions_dir / artifact_name

    def is_installed(self, tag: str) -> bool:
        return self.version_dir(tag).is_dir()

    def list_installed(self) -> list[str]:
        """Return installed tags in directory-listing order."""
        if not self.versions_dir.is_dir():
            return []
        with os.scandir(self.versions_dir) as entries:
            return [
                entry.name
                for entry in entries
                if entry.is_dir()
                and entry.name.startswith(VERSION_PREFIX)
                and entry.name != ACTIVE_SLOT
            ]

    def active_version(self) -> str | None:
        """Return the tag the active link points at, if any."""
        link = self.config.active_binary
        if not link.is_symlink():
            return None
        target = Path(os.readlink(link))
        if not target.is_absolute():
            target = link.parent / target
        if not target.exists():
            return None
        return target.parent.name

    def remove_version(self, tag: str) -> None:
        logger.info("Removing %s", self.version_dir(tag))
        _remove_tree(self.version_dir(tag))

    def remove_active(self) -> None:
        logger.info("Removing %s", self.active_dir)
        _remove_tree(self.active_dir)

    def remove_all(self) -> None:
        """Remove every installed version, then the active slot.

        The first failure propagates; versions already removed stay removed.
        """
        for tag in self.list_installed():
            self.remove_version(tag)
        self.remove_active()


def _remove_tree(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)
