"""Acquire, activate, list and remove Spin versions."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .activate import Activator
from .config import VermanConfig
from .download import ArtifactFetcher
from .extract import ArchiveExtractor
from .store import VersionStore
from .utils import console, current_platform, normalize_version

logger = logging.getLogger(__name__)

REMOVE_ALL = "all"
REMOVE_CURRENT = "current"


class VersionManager:
    """Entry point for every operation on the local version store.

    Version strings are normalized here and nowhere else. Errors from any
    stage propagate unchanged; nothing is retried.
    """

    def __init__(
        self,
        config: VermanConfig | None = None,
        *,
        store: VersionStore | None = None,
        fetcher: ArtifactFetcher | None = None,
        extractor: ArchiveExtractor | None = None,
        activator: Activator | None = None,
    ) -> None:
        self.config = config or VermanConfig()
        self.store = store or VersionStore(self.config)
        self.fetcher = fetcher or ArtifactFetcher(self.store)
        self.extractor = extractor or ArchiveExtractor(self.store)
        self.activator = activator or Activator(self.store)

    def acquire(self, version: str) -> str:
        """Make sure ``version`` is installed; return its canonical tag."""
        tag = normalize_version(version)
        self._acquire(tag)
        return tag

    def acquire_and_activate(self, version: str) -> str:
        tag = normalize_version(version)
        self._acquire(tag)
        self.activator.activate(tag)
        return tag

    def _acquire(self, tag: str) -> None:
        platform = current_platform()
        logger.info("Resolved platform %s/%s", platform.os, platform.arch)
        archive = self.fetcher.fetch(tag, platform)
        if archive is not None:
            self.extractor.extract(archive, tag)

    def get(self, versions: Iterable[str]) -> list[str]:
        """Acquire each version in order, stopping at the first failure."""
        return [self.acquire(version) for version in versions]

    def set(self, version: str) -> str:
        tag = self.acquire_and_activate(version)
        console.print(f"🎉 [bold green]Spin has been updated to version {tag}[/bold green]")
        return tag

    def list(self) -> list[str]:
        return self.store.list_installed()

    def current(self) -> str | None:
        return self.store.active_version()

    def remove(self, target: str) -> None:
        """Remove one version, the active link (``current``) or everything (``all``).

        ``all`` is destructive; callers are expected to confirm first.
        """
        if target == REMOVE_ALL:
            self.store.remove_all()
            console.print("🗑️ [green]Removed all Spin versions[/green]")
        elif target == REMOVE_CURRENT:
            self.store.remove_active()
            console.print("🗑️ [green]Removed the active Spin version override[/green]")
        else:
            tag = normalize_version(target)
            self.store.remove_version(tag)
            console.print(f"🗑️ [green]Removed Spin version {tag}[/green]")
