"""Point the active slot at an installed version."""

from __future__ import annotations

import contextlib
import logging
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .errors import VerificationMismatchError
from .utils import VERSION_PREFIX, console

if TYPE_CHECKING:
    from .store import VersionStore

logger = logging.getLogger(__name__)


class VersionQuery(Protocol):
    """Asks the binary behind ``link`` which version it is."""

    def __call__(self, link: Path, version: str) -> str:
        """Return the combined output of the version query."""


class SubprocessVersionQuery:
    """Runs ``<command> --version`` as the user's shell would find it.

    ``command`` defaults to the link's file name and is resolved on PATH, so
    a successful check also proves the active slot is on PATH.
    """

    def __init__(self, command: str | None = None, flag: str = "--version") -> None:
        self.command = command
        self.flag = flag

    def __call__(self, link: Path, version: str) -> str:
        command = self.command or link.name
        executable = shutil.which(command)
        if executable is None:
            raise VerificationMismatchError(
                version,
                link.parent,
                f"{command!r} is not reachable on PATH",
            )

        logger.info("Running %s %s", executable, self.flag)
        try:
            result = subprocess.run(  # noqa: S603
                [executable, self.flag],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as e:
            raise VerificationMismatchError(
                version,
                link.parent,
                f"failed to run {executable}: {e}",
            ) from e

        if result.returncode != 0:
            raise VerificationMismatchError(
                version,
                link.parent,
                f"{executable} {self.flag} exited with status {result.returncode}",
                result.stdout,
            )
        return result.stdout


class Activator:
    """Swaps the link in the active slot and checks the result."""

    def __init__(self, store: VersionStore, query: VersionQuery | None = None) -> None:
        self.store = store
        config = store.config
        self.query = query or SubprocessVersionQuery(config.binary_name, config.version_flag)

    def activate(self, tag: str) -> Path:
        """Make installed version ``tag`` the active one."""
        config = self.store.config
        link = config.active_binary
        target = self.store.binary_path(tag)

        config.active_dir.mkdir(parents=True, exist_ok=True)
        # Removing old link, a missing one is fine
        with contextlib.suppress(FileNotFoundError):
            link.unlink()
        link.symlink_to(target.absolute())
        logger.info("Linked %s -> %s", link, target)

        if config.verify:
            self.verify(link, tag)
        return link

    def verify(self, link: Path, tag: str) -> None:
        output = self.query(link, tag)
        expected = tag.removeprefix(VERSION_PREFIX)
        if expected not in output:
            raise VerificationMismatchError(
                tag,
                link.parent,
                f"the Spin executable on PATH reports {output.strip()!r}, not {expected}",
                output,
            )
        console.print(f"✅ [green]Verified Spin {tag} is active[/green]")
