"""Configuration for pytest fixtures used in verman tests."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path
from typing import Callable

import pytest

from verman.config import VermanConfig
from verman.store import VersionStore


def spin_script(version: str) -> bytes:
    """A stand-in Spin binary that reports ``version``."""
    return f'#!/bin/sh\necho "spin {version} (abcdef 2024-01-01)"\n'.encode()


@pytest.fixture
def create_dummy_archive() -> Callable[..., Path]:
    r"""Create a tar.gz archive for testing.

    Usage:
        archive_path = create_dummy_archive(
            tmp_path / "spin.tar.gz",
            {"spin": b"#!/bin/sh\necho test", "README.md": b"docs"},
        )

    Members named in ``dirs`` are added as directories; every regular file
    gets ``mode``.
    """

    def _create_archive(
        dest_path: Path,
        files: dict[str, bytes],
        mode: int = 0o755,
        dirs: tuple[str, ...] = (),
    ) -> Path:
        with tarfile.open(dest_path, "w:gz") as tar:
            for name in dirs:
                info = tarfile.TarInfo(name=name)
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            for name, content in files.items():
                info = tarfile.TarInfo(name=name)
                info.size = len(content)
                info.mode = mode
                tar.addfile(info, io.BytesIO(content))
        return dest_path

    return _create_archive


@pytest.fixture
def config(tmp_path: Path) -> VermanConfig:
    return VermanConfig(root_dir=tmp_path / ".spin_verman")


@pytest.fixture
def store(config: VermanConfig) -> VersionStore:
    return VersionStore(config)


@pytest.fixture
def linux_amd64(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend to run on x86-64 Linux."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setattr("platform.machine", lambda: "x86_64")


class FakeResponse:
    """Minimal streaming response returned by the fake ``requests.get``."""

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        self.status_code = status_code
        self.body = body
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> list[bytes]:
        return [
            self.body[i : i + chunk_size] for i in range(0, len(self.body), chunk_size)
        ]

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        self.closed = True


class FakeReleaseHost:
    """Serves release archives by URL and records every request."""

    def __init__(self) -> None:
        self.assets: dict[str, bytes] = {}
        self.requests: list[str] = []

    def publish(self, url: str, archive: Path) -> None:
        self.assets[url] = archive.read_bytes()

    def get(self, url: str, **_kwargs: object) -> FakeResponse:
        self.requests.append(url)
        if url in self.assets:
            return FakeResponse(200, self.assets[url])
        return FakeResponse(404, b"Not Found")


@pytest.fixture
def release_host(monkeypatch: pytest.MonkeyPatch) -> FakeReleaseHost:
    """Replace ``requests.get`` in verman.download with an in-memory host."""
    host = FakeReleaseHost()
    monkeypatch.setattr("verman.download.requests.get", host.get)
    return host


@pytest.fixture
def publish_release(
    tmp_path: Path,
    release_host: FakeReleaseHost,
    create_dummy_archive: Callable[..., Path],
) -> Callable[..., str]:
    """Publish a linux/amd64 Spin release on the fake host and return its URL."""

    def _publish(tag: str, files: dict[str, bytes] | None = None) -> str:
        name = f"spin-{tag}-linux-amd64.tar.gz"
        url = f"https://github.com/fermyon/spin/releases/download/{tag}/{name}"
        if files is None:
            files = {"spin": spin_script(tag.removeprefix("v")), "LICENSE": b"Apache-2.0"}
        archive = create_dummy_archive(tmp_path / f"published-{name}", files)
        release_host.publish(url, archive)
        return url

    return _publish
