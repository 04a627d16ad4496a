"""
FFmpeg downloader implementation.

Checks whether FFmpeg is installed and, if not, downloads the release archive
for the current platform and installs the binaries from it.
"""

import logging
import pathlib
import posixpath
from typing import Callable, Optional, Union
from urllib.parse import urlparse

from ffmpeg_sidecar.release_config import ffmpeg_download_url
from ffmpeg_sidecar.release_downloader.extractor import get_extractor
from ffmpeg_sidecar.release_downloader.installer import ArchiveInstaller
from ffmpeg_sidecar.release_downloader.transfer import (
    Transfer,
    check_latest_version,
    get_transfer,
)
from ffmpeg_sidecar.sidecar_command import ffmpeg_is_installed
from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_exceptions import (
    DownloadFailedError,
    InstallVerificationFailedError,
)
from ffmpeg_sidecar.sidecar_logger import SidecarLogger
from ffmpeg_sidecar.sidecar_paths import sidecar_dir
from ffmpeg_sidecar.sidecar_utils import PlatformTarget, PlatformUtils


class FFmpegDownloader:
    """
    Downloads and installs FFmpeg.

    Runs check-if-installed, resolve URL, download, unpack and re-check, in
    that order, synchronously. Nothing is retried.
    """

    def __init__(
        self,
        config: Optional[SidecarConfig] = None,
        logger: Optional[SidecarLogger] = None,
        is_installed: Optional[Callable[[], bool]] = None,
        install_dir: Optional[Callable[[], pathlib.Path]] = None,
        transfer: Optional[Transfer] = None,
        target: Optional[PlatformTarget] = None,
    ):
        """
        Initialize the FFmpeg downloader.

        Args:
            config: Backend selection and install directory
            logger: Logger for progress and error messages (built from config.log_level if None; the logger level is only set when log_level is)
            is_installed: Callable telling whether FFmpeg is usable (defaults to running "ffmpeg -version")
            install_dir: Callable returning the directory to install into (defaults to sidecar_dir)
            transfer: Transfer backend (defaults to the one selected by config)
            target: Platform to install for (defaults to the current one)
        """
        self.config = config or SidecarConfig()
        self.logger = logger or SidecarLogger(
            self.config.log_level.upper() if self.config.log_level else None
        )
        self.is_installed = is_installed or (lambda: ffmpeg_is_installed(self.config))
        self.install_dir = install_dir or (lambda: sidecar_dir(self.config))
        self.transfer = transfer or get_transfer(self.config, self.logger)
        self.target = target or PlatformUtils.get_platform_target()
        self.installer = ArchiveInstaller(
            get_extractor(self.config, self.logger), self.logger, self.target
        )

    def ensure_installed(self) -> None:
        """
        Check if FFmpeg is installed, and if it's not, download and unpack it.

        If FFmpeg is already installed, returns without any network activity.

        Raises:
            UnsupportedPlatformError: If no build is published for the platform
            DownloadFailedError: If the archive download fails
            InstallVerificationFailedError: If FFmpeg is still not usable afterwards
        """
        if self.is_installed():
            self.logger.log("FFmpeg is already installed", logging.DEBUG)
            return

        download_url = ffmpeg_download_url(self.target)
        destination = self.install_dir()

        self.logger.log(f"Downloading FFmpeg from {download_url} to {destination}", logging.INFO)
        archive_path = self.download_ffmpeg_package(download_url, destination)
        self.unpack_ffmpeg(archive_path, destination)

        if not self.is_installed():
            self.logger.log("FFmpeg is still not usable after installing", logging.ERROR)
            raise InstallVerificationFailedError("FFmpeg failed to install, please install manually.")

        self.logger.log(f"Successfully installed FFmpeg to {destination}", logging.INFO)

    def download_ffmpeg_package(self, url: str, download_dir: Union[str, pathlib.Path]) -> pathlib.Path:
        """
        Download an archive (ZIP on Windows and macOS, TAR on Linux) into download_dir.

        The archive is named after the last path segment of the URL.

        Returns:
            Path of the downloaded archive
        """
        filename = posixpath.basename(urlparse(url).path)
        if not filename:
            raise DownloadFailedError(f"Failed to get filename from {url}")

        archive_path = pathlib.Path(download_dir) / filename
        exit_status = self.transfer.fetch_to_file(url, str(archive_path))

        if exit_status != 0:
            self.logger.log(
                f"Download of {url} exited with status {exit_status}", logging.ERROR
            )
            raise DownloadFailedError(f"Failed to download ffmpeg (exit status {exit_status})")

        return archive_path

    def unpack_ffmpeg(self, from_archive: Union[str, pathlib.Path], binary_folder: Union[str, pathlib.Path]) -> None:
        self.installer.unpack(pathlib.Path(from_archive), pathlib.Path(binary_folder))

    def check_latest_version(self) -> str:
        """Latest FFmpeg version published for the platform."""
        return check_latest_version(self.transfer, self.target)


def auto_download(config: Optional[SidecarConfig] = None, logger: Optional[SidecarLogger] = None) -> None:
    """
    Check if FFmpeg is installed, and if it's not, download and unpack it.
    Automatically selects the correct binaries for Windows, Linux, and macOS.
    """
    FFmpegDownloader(config, logger).ensure_installed()


def download_ffmpeg_package(
    url: str,
    download_dir: Union[str, pathlib.Path],
    config: Optional[SidecarConfig] = None,
    logger: Optional[SidecarLogger] = None,
) -> pathlib.Path:
    """
    Download an archive from a caller-provided URL, e.g. for platforms that
    have no published build. Follow with unpack_ffmpeg.
    """
    return FFmpegDownloader(config, logger).download_ffmpeg_package(url, download_dir)
