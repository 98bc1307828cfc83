"""Download functions for verman."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import requests

from .errors import HTTPStatusError, NetworkError
from .utils import PlatformTag, console

if TYPE_CHECKING:
    from .store import VersionStore

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def artifact_name(tag: str, platform: PlatformTag, binary_name: str = "spin") -> str:
    """Return the release archive name, e.g. ``spin-v2.1.0-linux-amd64.tar.gz``."""
    return f"{binary_name}-{tag}-{platform.os}-{platform.arch}.tar.gz"


def release_url(base_url: str, tag: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/{tag}/{name}"


def download_file(
    url: str,
    destination: Path,
    version: str,
    timeout: float | None = 30,
) -> Path:
    """Download a file from a URL to a destination path.

    Any file already at ``destination`` is overwritten.
    """
    console.print(f"📥 [blue]Downloading from {url}[/blue]")
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            if not 200 <= response.status_code < 300:  # noqa: PLR2004
                raise HTTPStatusError(version, response.status_code, url)
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except requests.RequestException as e:
        raise NetworkError(url, e) from e

    logger.info("Saved %s to %s", url, destination)
    return destination


class ArtifactFetcher:
    """Produces a local release archive for a version that is not installed."""

    def __init__(self, store: VersionStore) -> None:
        self.store = store

    def fetch(self, tag: str, platform: PlatformTag) -> Path | None:
        """Download the archive for ``tag``.

        Returns None without touching the network when the version is
        already installed.
        """
        if self.store.is_installed(tag):
            console.print(f"✅ [green]Spin version {tag} found locally.[/green]")
            return None

        console.print(
            f"🔍 [blue]Spin version {tag} not found locally. Retrieving from source...[/blue]",
        )
        config = self.store.config
        name = artifact_name(tag, platform, config.binary_name)
        self.store.ensure_root()
        archive = download_file(
            release_url(config.release_url, tag, name),
            self.store.archive_path(name),
            tag,
            timeout=config.download_timeout,
        )
        console.print(f"✅ [green]Spin version {tag} was retrieved successfully![/green]")
        return archive
