"""
This module exports the FFmpeg acquisition entry points.
"""

from .release_downloader import (
    FFmpegDownloader,
    auto_download,
    check_latest_version,
    download_ffmpeg_package,
    unpack_ffmpeg,
)
from .sidecar_command import ffmpeg_is_installed
from .sidecar_config import SidecarConfig
from .sidecar_logger import SidecarLogger
from .sidecar_paths import ffmpeg_path, ffprobe_path, sidecar_dir

__all__ = [
    "FFmpegDownloader",
    "SidecarConfig",
    "SidecarLogger",
    "auto_download",
    "check_latest_version",
    "download_ffmpeg_package",
    "ffmpeg_is_installed",
    "ffmpeg_path",
    "ffprobe_path",
    "sidecar_dir",
    "unpack_ffmpeg",
]
