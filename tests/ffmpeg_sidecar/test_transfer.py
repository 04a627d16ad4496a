"""
Tests for the transfer backends and check_latest_version.
"""

import subprocess

import pytest
import requests

from ffmpeg_sidecar.release_config import ffmpeg_manifest_url
from ffmpeg_sidecar.release_downloader.transfer import (
    CurlTransfer,
    RequestsTransfer,
    check_latest_version,
    get_transfer,
)
from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_exceptions import (
    TransferFailedError,
    UnsupportedPlatformError,
    VersionParseFailedError,
)
from ffmpeg_sidecar.sidecar_utils import PlatformTarget

URL = "https://example.com/ffmpeg/release"


class RecordingRun:
    """Stands in for subprocess.run."""

    def __init__(self, returncode=0, stdout=b"", error=None):
        self.returncode = returncode
        self.stdout = stdout
        self.error = error
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout)


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.ok = status_code < 400
        self.content = content

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class TestCurlTransfer:
    def test_fetch_to_memory_follows_redirects(self, monkeypatch):
        run = RecordingRun(stdout=b"7.0.1")
        monkeypatch.setattr(subprocess, "run", run)

        assert CurlTransfer().fetch_to_memory(URL) == "7.0.1"

        args, kwargs = run.calls[0]
        assert args == ["curl", "-L", URL]
        assert kwargs["stdout"] == subprocess.PIPE
        assert kwargs["stderr"] == subprocess.DEVNULL

    def test_fetch_to_memory_spawn_failure(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", RecordingRun(error=FileNotFoundError("curl")))
        with pytest.raises(TransferFailedError):
            CurlTransfer().fetch_to_memory(URL)

    def test_fetch_to_memory_binary_output(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", RecordingRun(stdout=b"\xff\xfe\xfa"))
        with pytest.raises(TransferFailedError):
            CurlTransfer().fetch_to_memory(URL)

    def test_fetch_to_file_returns_status(self, monkeypatch, tmp_path):
        run = RecordingRun(returncode=22)
        monkeypatch.setattr(subprocess, "run", run)
        destination = str(tmp_path / "ffmpeg.zip")

        assert CurlTransfer().fetch_to_file(URL, destination) == 22
        assert run.calls[0][0] == ["curl", "-L", URL, "-o", destination]

    def test_fetch_to_file_spawn_failure(self, monkeypatch, tmp_path):
        monkeypatch.setattr(subprocess, "run", RecordingRun(error=PermissionError("curl")))
        with pytest.raises(TransferFailedError):
            CurlTransfer().fetch_to_file(URL, str(tmp_path / "ffmpeg.zip"))


class TestRequestsTransfer:
    def test_fetch_to_memory(self):
        session = FakeSession(FakeResponse(content=b"version: 7.0.2"))
        assert RequestsTransfer(session=session).fetch_to_memory(URL) == "version: 7.0.2"
        assert session.calls[0][1]["allow_redirects"] is True

    def test_connection_error(self):
        session = FakeSession(error=requests.ConnectionError("refused"))
        with pytest.raises(TransferFailedError):
            RequestsTransfer(session=session).fetch_to_memory(URL)

    def test_fetch_to_file_writes_body(self, tmp_path):
        payload = b"x" * 5000
        session = FakeSession(FakeResponse(content=payload))
        destination = tmp_path / "ffmpeg.zip"

        assert RequestsTransfer(session=session).fetch_to_file(URL, str(destination)) == 0
        assert destination.read_bytes() == payload

    def test_fetch_to_file_http_error_is_status(self, tmp_path):
        session = FakeSession(FakeResponse(status_code=404))
        destination = tmp_path / "ffmpeg.zip"

        assert RequestsTransfer(session=session).fetch_to_file(URL, str(destination)) != 0
        assert not destination.exists()


class TestGetTransfer:
    def test_default_is_curl(self):
        assert isinstance(get_transfer(), CurlTransfer)

    def test_requests_backend(self):
        config = SidecarConfig(transfer_backend="requests")
        assert isinstance(get_transfer(config), RequestsTransfer)


class TestCheckLatestVersion:
    def test_windows_body_is_version(self, fake_transfer, windows_target):
        transfer = fake_transfer({ffmpeg_manifest_url(windows_target): "7.0.1"})
        assert check_latest_version(transfer, windows_target) == "7.0.1"

    def test_macos_json(self, fake_transfer, macos_target):
        transfer = fake_transfer(
            {ffmpeg_manifest_url(macos_target): '{"name":"ffmpeg","version":"6.0"}'}
        )
        assert check_latest_version(transfer, macos_target) == "6.0"

    def test_linux_labeled(self, fake_transfer, linux_target):
        transfer = fake_transfer(
            {ffmpeg_manifest_url(linux_target): "build: x\nversion: 5.1.1\n\ngcc: 8.3.0"}
        )
        assert check_latest_version(transfer, linux_target) == "5.1.1"
        assert transfer.calls == [("memory", ffmpeg_manifest_url(linux_target))]

    def test_parse_failure(self, fake_transfer, linux_target):
        transfer = fake_transfer({ffmpeg_manifest_url(linux_target): "<html>moved</html>"})
        with pytest.raises(VersionParseFailedError):
            check_latest_version(transfer, linux_target)

    @pytest.mark.parametrize(
        "target",
        [PlatformTarget("freebsd", "x86_64"), PlatformTarget("macos", "aarch64")],
    )
    def test_unsupported_platform_makes_no_request(self, fake_transfer, target):
        transfer = fake_transfer()
        with pytest.raises(UnsupportedPlatformError):
            check_latest_version(transfer, target)
        assert transfer.calls == []
