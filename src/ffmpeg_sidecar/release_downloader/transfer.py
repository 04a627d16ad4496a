"""
Transfer client used to fetch manifests and release archives.

Two interchangeable backends implement the same contract: CurlTransfer spawns
curl, RequestsTransfer stays in-process. Neither retries nor times out.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

import requests

from ffmpeg_sidecar.release_config import (
    ffmpeg_manifest_source,
    parse_linux_version,
    parse_macos_version,
)
from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_exceptions import (
    SidecarConfigError,
    TransferFailedError,
    VersionParseFailedError,
)
from ffmpeg_sidecar.sidecar_logger import SidecarLogger, default_logger
from ffmpeg_sidecar.sidecar_utils import PlatformTarget


_MANIFEST_PARSERS = {
    "json": parse_macos_version,
    "labeled": parse_linux_version,
}


class Transfer(ABC):
    """
    Fetches a URL, following redirects.
    """

    def __init__(self, logger: SidecarLogger = default_logger):
        self.logger = logger

    @abstractmethod
    def fetch_to_memory(self, url: str) -> str:
        """
        Download a URL and return the body as text.

        Raises:
            TransferFailedError: If the transfer cannot be started or the body is not text
        """

    @abstractmethod
    def fetch_to_file(self, url: str, destination: str) -> int:
        """
        Download a URL into destination.

        Returns:
            The exit status of the transfer; 0 means success. A non-zero status is
            returned rather than raised so the caller decides what it means.
        """


class CurlTransfer(Transfer):
    """Invokes cURL on the command line."""

    def fetch_to_memory(self, url: str) -> str:
        self.logger.log(f"curl -L {url}", logging.DEBUG)
        try:
            result = subprocess.run(
                ["curl", "-L", url],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            self.logger.log(f"Failed to spawn curl: {e}", logging.ERROR)
            raise TransferFailedError(f"Failed to spawn curl for {url}: {e}") from e

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransferFailedError(f"Response from {url} is not valid UTF-8 text") from e

    def fetch_to_file(self, url: str, destination: str) -> int:
        self.logger.log(f"curl -L {url} -o {destination}", logging.DEBUG)
        try:
            return subprocess.run(["curl", "-L", url, "-o", destination]).returncode
        except OSError as e:
            self.logger.log(f"Failed to spawn curl: {e}", logging.ERROR)
            raise TransferFailedError(f"Failed to spawn curl for {url}: {e}") from e


class RequestsTransfer(Transfer):
    """Fetches over HTTP with requests, without any external process."""

    CHUNK_SIZE = 1024 * 1024

    def __init__(self, logger: SidecarLogger = default_logger, session: Optional[requests.Session] = None):
        super().__init__(logger)
        self.session = session or requests.Session()

    def fetch_to_memory(self, url: str) -> str:
        self.logger.log(f"GET {url}", logging.DEBUG)
        try:
            response = self.session.get(url, allow_redirects=True)
        except requests.RequestException as e:
            self.logger.log(f"Request to {url} failed: {e}", logging.ERROR)
            raise TransferFailedError(f"Request to {url} failed: {e}") from e

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransferFailedError(f"Response from {url} is not valid UTF-8 text") from e

    def fetch_to_file(self, url: str, destination: str) -> int:
        self.logger.log(f"GET {url} -> {destination}", logging.DEBUG)
        try:
            with self.session.get(url, allow_redirects=True, stream=True) as response:
                if not response.ok:
                    self.logger.log(
                        f"GET {url} returned HTTP {response.status_code}", logging.WARNING
                    )
                    return 1
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                        f.write(chunk)
        except requests.RequestException as e:
            self.logger.log(f"Request to {url} failed: {e}", logging.ERROR)
            raise TransferFailedError(f"Request to {url} failed: {e}") from e
        except OSError as e:
            raise TransferFailedError(f"Failed to write {destination}: {e}") from e
        return 0


def get_transfer(config: Optional[SidecarConfig] = None, logger: SidecarLogger = default_logger) -> Transfer:
    """
    Create the transfer backend selected by the configuration.
    """
    config = config or SidecarConfig()
    if config.transfer_backend == "curl":
        return CurlTransfer(logger)
    if config.transfer_backend == "requests":
        return RequestsTransfer(logger)
    raise SidecarConfigError(f"Unknown transfer backend: {config.transfer_backend}")


def check_latest_version(
    transfer: Optional[Transfer] = None,
    target: Optional[PlatformTarget] = None,
) -> str:
    """
    Makes an HTTP request to obtain the latest version available online,
    automatically choosing the correct URL for the current platform.

    The Windows manifest body is the version itself; macOS and Linux publish
    a JSON document and a labeled text file respectively.
    """
    manifest = ffmpeg_manifest_source(target)
    transfer = transfer or CurlTransfer()
    body = transfer.fetch_to_memory(manifest.url)

    if manifest.format == "plain":
        return body

    parser = _MANIFEST_PARSERS[manifest.format]
    version = parser(body)
    if version is None:
        raise VersionParseFailedError(
            f"failed to parse version number ({manifest.format} manifest at {manifest.url})"
        )
    return version
