"""
Locations of the installed FFmpeg binaries.
"""

import os
import pathlib
from pathlib import PurePath
from typing import Optional

from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_exceptions import IOFailureError
from ffmpeg_sidecar.sidecar_utils import PlatformTarget, PlatformUtils


def resolve_sidecar_dir(config: Optional[SidecarConfig] = None) -> pathlib.Path:
    """
    The directory the binaries are installed into: config.install_dir if set,
    otherwise the "static" folder of this package. Nothing is created.
    """
    if config is not None and config.install_dir:
        return pathlib.Path(config.install_dir)
    return pathlib.Path(
        PurePath(os.path.abspath(os.path.dirname(__file__)), "static")
    )


def sidecar_dir(config: Optional[SidecarConfig] = None) -> pathlib.Path:
    """
    Same as resolve_sidecar_dir, creating the directory if missing.
    """
    directory = resolve_sidecar_dir(config)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailureError(f"Failed to create install directory {directory}: {e}") from e
    return directory


def _sidecar_binary(index: int, config: Optional[SidecarConfig], target: Optional[PlatformTarget]) -> pathlib.Path:
    target = target or PlatformUtils.get_platform_target()
    name = PlatformUtils.binary_names(target)[index]
    path = resolve_sidecar_dir(config) / name
    if path.is_file():
        return path
    return pathlib.Path(name)


def ffmpeg_path(config: Optional[SidecarConfig] = None, target: Optional[PlatformTarget] = None) -> pathlib.Path:
    """
    The installed ffmpeg binary, or the bare "ffmpeg" name so that the
    system PATH is searched when nothing is installed next to the package.
    """
    return _sidecar_binary(0, config, target)


def ffprobe_path(config: Optional[SidecarConfig] = None, target: Optional[PlatformTarget] = None) -> pathlib.Path:
    return _sidecar_binary(1, config, target)
