"""
Archive installer.

Unpacks a downloaded FFmpeg archive into a staging folder inside the install
directory, moves the ffmpeg and ffprobe binaries up into the install
directory, and deletes the staging folder and the archive.
"""

import logging
import os
import pathlib
import shutil
import stat
from typing import List, Optional, Union

from ffmpeg_sidecar.release_downloader.extractor import (
    Extractor,
    archive_extension,
    archive_format,
    get_extractor,
)
from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_exceptions import BinaryNotFoundError, IOFailureError
from ffmpeg_sidecar.sidecar_logger import SidecarLogger, default_logger
from ffmpeg_sidecar.sidecar_utils import PlatformTarget, PlatformUtils

UNPACK_DIRNAME = "ffmpeg_release_temp"

_EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class ArchiveInstaller:
    """
    Installs the binary pair contained in a release archive.

    A run that fails while locating the binaries leaves the staging folder and
    the archive behind; the next run overwrites them.
    """

    def __init__(
        self,
        extractor: Extractor,
        logger: SidecarLogger = default_logger,
        target: Optional[PlatformTarget] = None,
    ):
        """
        Args:
            extractor: Backend that unpacks the archive
            logger: Logger for progress and error messages
            target: Platform whose binary names are expected (current platform if None)
        """
        self.extractor = extractor
        self.logger = logger
        self.target = target or PlatformUtils.get_platform_target()

    def unpack(self, from_archive: pathlib.Path, binary_folder: pathlib.Path) -> None:
        """
        Unpack from_archive and move the binaries into binary_folder.

        Raises:
            IOFailureError: If the staging folder cannot be created or listed
            UnsupportedArchiveFormatError: If the archive extension is not recognized
            ExtractionFailedError: If unpacking fails
            BinaryNotFoundError: If ffmpeg or ffprobe is not in the archive
        """
        from_archive = pathlib.Path(from_archive)
        binary_folder = pathlib.Path(binary_folder)
        temp_folder = binary_folder / UNPACK_DIRNAME

        self.logger.log(f"Unpacking ffmpeg from {from_archive} to {temp_folder}", logging.INFO)
        # Leftovers of an earlier failed run must not be installed
        if temp_folder.exists():
            self.logger.log(f"Removing stale temp folder {temp_folder}", logging.INFO)
            try:
                shutil.rmtree(temp_folder)
            except OSError as e:
                raise IOFailureError(f"Failed to remove stale {temp_folder}: {e}") from e
        try:
            temp_folder.mkdir(parents=True)
        except OSError as e:
            raise IOFailureError(f"Failed to create {temp_folder}: {e}") from e

        extension = archive_extension(from_archive)
        archive_fmt = archive_format(from_archive)
        self.logger.log(f"Extension: {extension}", logging.DEBUG)

        self.logger.log(f"Files: {self._list_folder(temp_folder)}", logging.DEBUG)

        self.extractor.extract(from_archive, archive_fmt, temp_folder)

        binaries = [
            self._find_binary(temp_folder, name)
            for name in PlatformUtils.binary_names(self.target)
        ]
        for binary in binaries:
            self._move_binary(binary, binary_folder)

        self._cleanup(temp_folder, from_archive)

    def _list_folder(self, folder: pathlib.Path) -> List[str]:
        try:
            return sorted(str(p) for p in folder.iterdir())
        except OSError as e:
            raise IOFailureError(f"Failed to list {folder}: {e}") from e

    def _find_binary(self, temp_folder: pathlib.Path, name: str) -> pathlib.Path:
        """
        Returns the binary at the top of the unpacked tree, or else the first
        match further down (upstream builds keep them under <release>/bin).
        """
        path = temp_folder / name
        if path.is_file():
            return path

        nested = sorted(p for p in temp_folder.rglob(name) if p.is_file())
        if nested:
            self.logger.log(f"Found {name} at {nested[0]}", logging.DEBUG)
            return nested[0]

        self.logger.log(f"Expected binary not found: {path}", logging.ERROR)
        raise BinaryNotFoundError(f"Binary not found: {path}", str(path))

    def _move_binary(self, path: pathlib.Path, binary_folder: pathlib.Path) -> None:
        destination = binary_folder / path.name
        try:
            os.replace(path, destination)
            if not self.target.is_windows():
                mode = destination.stat().st_mode
                os.chmod(destination, mode | _EXECUTABLE_BITS)
        except OSError as e:
            raise IOFailureError(f"Failed to move {path} to {destination}: {e}") from e
        self.logger.log(f"Installed {destination}", logging.INFO)

    def _cleanup(self, temp_folder: pathlib.Path, from_archive: pathlib.Path) -> None:
        if temp_folder.is_dir():
            self.logger.log(f"Removing temp folder {temp_folder}", logging.INFO)
            try:
                shutil.rmtree(temp_folder)
            except OSError as e:
                self.logger.log(f"Failed to remove temp folder {temp_folder}: {e}", logging.WARNING)
        else:
            self.logger.log(f"Temp folder not found or not a directory: {temp_folder}", logging.INFO)

        if from_archive.exists():
            self.logger.log(f"Removing archive {from_archive}", logging.INFO)
            try:
                from_archive.unlink()
            except OSError as e:
                self.logger.log(f"Failed to remove archive {from_archive}: {e}", logging.WARNING)
        else:
            self.logger.log(f"Archive file not found: {from_archive}", logging.INFO)


def unpack_ffmpeg(
    from_archive: Union[str, pathlib.Path],
    binary_folder: Union[str, pathlib.Path],
    config: Optional[SidecarConfig] = None,
    logger: SidecarLogger = default_logger,
) -> None:
    """
    After downloading, unpacks the archive to a folder, moves the binaries to
    their final location, and deletes the archive and temporary folder.
    """
    installer = ArchiveInstaller(get_extractor(config, logger), logger)
    installer.unpack(pathlib.Path(from_archive), pathlib.Path(binary_folder))
