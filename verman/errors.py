"""Exceptions raised by verman."""

from __future__ import annotations

from pathlib import Path


class VermanError(Exception):
    """Base class for all verman errors."""


class ConfigError(VermanError):
    """Invalid configuration file."""


class UnsupportedPlatformError(VermanError):
    """The host OS or architecture has no matching release artifact."""

    def __init__(self, value: str, message: str | None = None) -> None:
        """Initialize the UnsupportedPlatformError."""
        self.value = value
        super().__init__(message or f"{value!r} is not a platform that Spin supports")


class InvalidVersionError(VermanError):
    """A version string that cannot be used as a version tag."""

    def __init__(self, value: str) -> None:
        """Initialize the InvalidVersionError."""
        self.value = value
        super().__init__(f"invalid version: {value!r}")


class HTTPStatusError(VermanError):
    """The release host answered with a non-success status."""

    def __init__(self, version: str, status_code: int, url: str) -> None:
        """Initialize the HTTPStatusError."""
        self.version = version
        self.status_code = status_code
        self.url = url
        super().__init__(
            f"the version number provided is invalid: {version} "
            f"(HTTP {status_code} from {url}), please check it and try again",
        )


class NetworkError(VermanError):
    """The release could not be downloaded at all."""

    def __init__(self, url: str, reason: object) -> None:
        """Initialize the NetworkError."""
        self.url = url
        super().__init__(f"failed to download {url}: {reason}")


class ArchiveFormatError(VermanError):
    """The archive is unreadable or lacks the expected binary."""

    def __init__(self, archive: Path, reason: str) -> None:
        """Initialize the ArchiveFormatError."""
        self.archive = archive
        self.reason = reason
        super().__init__(f"{archive}: {reason}")


class VerificationMismatchError(VermanError):
    """The activated binary does not report the requested version."""

    def __init__(
        self,
        version: str,
        active_dir: Path,
        reason: str,
        output: str = "",
    ) -> None:
        """Initialize the VerificationMismatchError."""
        self.version = version
        self.active_dir = active_dir
        self.reason = reason
        self.output = output
        super().__init__(
            f"could not confirm Spin {version} is active: {reason}. "
            f"Please check to make sure {str(active_dir)!r} is prepended to your PATH",
        )
