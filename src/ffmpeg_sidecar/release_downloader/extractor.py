"""
Archive extraction backends.

An archive is classified by the text after the last dot of its file name:
"zip" goes to the ZIP strategy, "tar", "xz" and "gz" go to the TAR strategy.
"""

import logging
import pathlib
import subprocess
import tarfile
import zipfile
from abc import ABC, abstractmethod
from typing import List, Optional

from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_exceptions import (
    ExtractionFailedError,
    SidecarConfigError,
    UnsupportedArchiveFormatError,
)
from ffmpeg_sidecar.sidecar_logger import SidecarLogger, default_logger


class ArchiveFormat:
    """Enumeration of extraction strategies."""

    ZIP = "zip"
    TAR = "tar"


_EXTENSION_FORMATS = {
    "zip": ArchiveFormat.ZIP,
    "tar": ArchiveFormat.TAR,
    "xz": ArchiveFormat.TAR,
    "gz": ArchiveFormat.TAR,
}


def archive_extension(archive: pathlib.Path) -> str:
    """
    Returns the extension of the archive file name, e.g. "xz" for "ffmpeg.tar.xz".
    """
    return archive.suffix[1:] if archive.suffix else ""


def archive_format(archive: pathlib.Path) -> str:
    """
    Select the extraction strategy for an archive.

    Raises:
        UnsupportedArchiveFormatError: If the extension is not zip, tar, xz or gz
    """
    extension = archive_extension(archive)
    archive_fmt = _EXTENSION_FORMATS.get(extension)
    if archive_fmt is None:
        raise UnsupportedArchiveFormatError(
            f"Unsupported archive format: {archive.name}", extension
        )
    return archive_fmt


class Extractor(ABC):
    """
    Unpacks an archive into a destination directory.
    """

    def __init__(self, logger: SidecarLogger = default_logger):
        self.logger = logger

    @abstractmethod
    def extract(self, archive: pathlib.Path, archive_fmt: str, destination: pathlib.Path) -> None:
        """
        Extract archive into destination, overwriting existing files.

        Raises:
            ExtractionFailedError: If the archive could not be unpacked
        """


class CommandExtractor(Extractor):
    """Invokes unzip or tar on the command line."""

    @staticmethod
    def command(archive: pathlib.Path, archive_fmt: str, destination: pathlib.Path) -> List[str]:
        if archive_fmt == ArchiveFormat.ZIP:
            return ["unzip", "-o", str(archive), "-d", str(destination)]
        return ["tar", "-xf", str(archive), "-C", str(destination)]

    def extract(self, archive: pathlib.Path, archive_fmt: str, destination: pathlib.Path) -> None:
        extension = archive_extension(archive)
        cmd = self.command(archive, archive_fmt, destination)
        self.logger.log(f"Running command: {' '.join(cmd)}", logging.INFO)

        try:
            status = subprocess.run(cmd).returncode
        except OSError as e:
            raise ExtractionFailedError(
                f"Failed to unpack ffmpeg ({extension}): cannot run {cmd[0]}: {e}", extension
            ) from e

        if status != 0:
            raise ExtractionFailedError(f"Failed to unpack ffmpeg ({extension})", extension)


class NativeExtractor(Extractor):
    """Unpacks with zipfile and tarfile, without any external process."""

    def extract(self, archive: pathlib.Path, archive_fmt: str, destination: pathlib.Path) -> None:
        extension = archive_extension(archive)
        self.logger.log(f"Extracting {archive} to {destination}", logging.INFO)

        try:
            if archive_fmt == ArchiveFormat.ZIP:
                with zipfile.ZipFile(archive) as zf:
                    zf.extractall(destination)
            else:
                with tarfile.open(archive) as tf:
                    if hasattr(tarfile, "data_filter"):
                        tf.extractall(destination, filter="data")
                    else:
                        tf.extractall(destination)
        except (zipfile.BadZipFile, tarfile.TarError, OSError) as e:
            raise ExtractionFailedError(f"Failed to unpack ffmpeg ({extension}): {e}", extension) from e


def get_extractor(config: Optional[SidecarConfig] = None, logger: SidecarLogger = default_logger) -> Extractor:
    """
    Create the extraction backend selected by the configuration.
    """
    config = config or SidecarConfig()
    if config.extract_backend == "command":
        return CommandExtractor(logger)
    if config.extract_backend == "native":
        return NativeExtractor(logger)
    raise SidecarConfigError(f"Unknown extract backend: {config.extract_backend}")
