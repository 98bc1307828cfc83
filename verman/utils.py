"""Utility functions for verman."""

from __future__ import annotations

import logging
import platform
from typing import NamedTuple

from rich.console import Console
from rich.logging import RichHandler

from .errors import InvalidVersionError, UnsupportedPlatformError

# Initialize rich console
console = Console()

VERSION_PREFIX = "v"

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}

_OS_ALIASES = {
    "linux": "linux",
    "darwin": "macos",
    "windows": "windows",
}


class PlatformTag(NamedTuple):
    """OS and architecture as spelled in release artifact names."""

    os: str
    arch: str


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure logging level based on verbosity."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def current_platform() -> PlatformTag:
    """Detect the current platform and architecture."""
    machine = platform.machine().lower()
    arch = _ARCH_ALIASES.get(machine)
    if arch is None:
        msg = f"{machine!r} is not an architecture that Spin supports"
        raise UnsupportedPlatformError(machine, msg)

    system = platform.system().lower()
    os_tag = _OS_ALIASES.get(system)
    if os_tag is None:
        msg = f"{system!r} is not an OS that this Spin plugin supports"
        raise UnsupportedPlatformError(system, msg)

    # No Windows ARM64 builds are published.
    if os_tag == "windows" and arch == "aarch64":
        msg = "windows running on arm64 is not an OS/architecture combination that Spin supports"
        raise UnsupportedPlatformError(f"{system}/{machine}", msg)

    return PlatformTag(os_tag, arch)


def normalize_version(raw: str) -> str:
    """Return the canonical tag for a version given by the user ("2.1.0" -> "v2.1.0")."""
    version = raw.strip()
    if not version or "/" in version or "\\" in version or ".." in version:
        raise InvalidVersionError(raw)
    if not version.startswith(VERSION_PREFIX):
        version = VERSION_PREFIX + version
    return version


def print_shell_setup(active_dir: object) -> None:
    """Print shell setup instructions."""
    print("\n# Add this to your shell configuration file (e.g., .bashrc, .zshrc):")
    print(f'export PATH="{active_dir}:$PATH"')
