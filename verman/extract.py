"""Extract the tool binary from a release archive."""

from __future__ import annotations

import gzip
import logging
import os
import shutil
import tarfile
import zlib
from pathlib import Path
from typing import IO, TYPE_CHECKING

from .errors import ArchiveFormatError
from .utils import console

if TYPE_CHECKING:
    from .store import VersionStore

logger = logging.getLogger(__name__)

_CORRUPT_ARCHIVE_ERRORS = (tarfile.TarError, gzip.BadGzipFile, EOFError, zlib.error)


def _write_file(source: IO[bytes], path: Path, mode: int) -> None:
    """Write a stream to a file with specified permissions."""
    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as out:
        shutil.copyfileobj(source, out)
    # The umask may have stripped bits on create.
    path.chmod(mode)


class ArchiveExtractor:
    """Installs a version by pulling its binary out of a ``.tar.gz``.

    The binary is unpacked into a hidden staging directory which is then
    renamed onto ``versions/<tag>``, so the version directory only ever
    appears complete. The archive is deleted after that rename.
    """

    def __init__(self, store: VersionStore) -> None:
        self.store = store

    def _staging_dir(self, tag: str) -> Path:
        return self.store.versions_dir / f".{tag}.partial"

    def extract(self, archive: Path, tag: str) -> Path:
        """Install the binary found in ``archive`` as version ``tag``."""
        binary_name = self.store.config.binary_name
        console.print(f"📦 [blue]Extracting {binary_name} from {archive}[/blue]")

        staging = self._staging_dir(tag)
        if staging.exists():
            shutil.rmtree(staging)
        staging.mkdir(parents=True)
        try:
            found = self._extract_member(archive, binary_name, staging / binary_name)
            if not found:
                raise ArchiveFormatError(
                    archive,
                    f"no regular file named {binary_name!r} in archive",
                )
            staging.rename(self.store.version_dir(tag))
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        archive.unlink()
        binary = self.store.binary_path(tag)
        console.print(f"✅ [green]Installed {binary}[/green]")
        return binary

    @staticmethod
    def _extract_member(archive: Path, member_name: str, dest: Path) -> bool:
        """Stream through the archive, writing matching members to ``dest``."""
        found = False
        try:
            with tarfile.open(archive, mode="r|gz") as tar:
                for member in tar:
                    if not (member.isreg() and member.name == member_name):
                        logger.debug("Skipping %s", member.name)
                        continue
                    source = tar.extractfile(member)
                    if source is None:  # pragma: no cover
                        continue
                    with source:
                        _write_file(source, dest, member.mode)
                    found = True
        except _CORRUPT_ARCHIVE_ERRORS as e:
            raise ArchiveFormatError(archive, f"unreadable archive: {e}") from e
        return found
