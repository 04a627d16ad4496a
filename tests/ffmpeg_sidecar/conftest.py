"""
Shared fixtures for the ffmpeg_sidecar tests.
"""

import io
import pathlib
import tarfile
import zipfile
from typing import Dict, List, Optional

import pytest

from ffmpeg_sidecar.release_downloader.transfer import Transfer
from ffmpeg_sidecar.sidecar_utils import PlatformTarget


def build_zip(path: pathlib.Path, members: Dict[str, bytes]) -> pathlib.Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return path


def build_tar_bytes(members: Dict[str, bytes], mode: str = "w:xz") -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=mode) as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            tf.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


class FakeTransfer(Transfer):
    """Records every request instead of touching the network."""

    def __init__(
        self,
        responses: Optional[Dict[str, str]] = None,
        payload: Optional[bytes] = None,
        exit_status: int = 0,
    ):
        super().__init__()
        self.responses = responses or {}
        self.payload = payload
        self.exit_status = exit_status
        self.calls: List[tuple] = []

    def fetch_to_memory(self, url: str) -> str:
        self.calls.append(("memory", url))
        return self.responses[url]

    def fetch_to_file(self, url: str, destination: str) -> int:
        self.calls.append(("file", url, destination))
        if self.exit_status == 0 and self.payload is not None:
            pathlib.Path(destination).write_bytes(self.payload)
        return self.exit_status


@pytest.fixture
def linux_target():
    return PlatformTarget("linux", "x86_64")


@pytest.fixture
def windows_target():
    return PlatformTarget("windows", "x86_64")


@pytest.fixture
def macos_target():
    return PlatformTarget("macos", "x86_64")


@pytest.fixture
def install_dir(tmp_path):
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_tar_bytes():
    return build_tar_bytes


@pytest.fixture
def fake_transfer():
    return FakeTransfer
