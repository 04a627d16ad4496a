"""
FFmpeg release downloader.

This package handles:
1. Fetching manifests and archives
2. Extracting archives
3. Installing the ffmpeg and ffprobe binaries
4. Verifying the installation
"""

from .downloader import FFmpegDownloader, auto_download, download_ffmpeg_package
from .installer import UNPACK_DIRNAME, ArchiveInstaller, unpack_ffmpeg
from .transfer import check_latest_version

__all__ = [
    "ArchiveInstaller",
    "FFmpegDownloader",
    "UNPACK_DIRNAME",
    "auto_download",
    "check_latest_version",
    "download_ffmpeg_package",
    "unpack_ffmpeg",
]
