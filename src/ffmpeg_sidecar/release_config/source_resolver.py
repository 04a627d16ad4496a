"""
Resolves where FFmpeg is published for a platform.

Both lookups are pure: they read the bundled release source table and the
platform target, nothing else.
"""

from typing import Optional

from ffmpeg_sidecar.release_models import DownloadSource, ManifestSource, load_release_sources
from ffmpeg_sidecar.sidecar_exceptions import UnsupportedPlatformError
from ffmpeg_sidecar.sidecar_utils import X86_64, PlatformTarget, PlatformUtils


def ffmpeg_manifest_source(target: Optional[PlatformTarget] = None) -> ManifestSource:
    """
    Returns the latest-release manifest for the platform.

    Raises:
        UnsupportedPlatformError: For non-x86_64 architectures, or an operating
            system other than windows, macos and linux
    """
    target = target or PlatformUtils.get_platform_target()

    if target.cpu_architecture != X86_64:
        raise UnsupportedPlatformError(
            "Downloads must be manually provided for non-x86_64 architectures"
        )

    manifest = load_release_sources().get_manifest(target.operating_system)
    if manifest is None:
        raise UnsupportedPlatformError(f"Unsupported platform: {target.operating_system}")
    return manifest


def ffmpeg_manifest_url(target: Optional[PlatformTarget] = None) -> str:
    """
    URL of a manifest file containing the latest published build of FFmpeg.
    """
    return ffmpeg_manifest_source(target).url


def ffmpeg_download_source(target: Optional[PlatformTarget] = None) -> DownloadSource:
    target = target or PlatformUtils.get_platform_target()

    download = load_release_sources().get_download(target.key)
    if download is None:
        raise UnsupportedPlatformError(
            f"Unsupported platform ({target.key}); you can provide your own URL "
            "instead and call download_ffmpeg_package directly."
        )
    return download


def ffmpeg_download_url(target: Optional[PlatformTarget] = None) -> str:
    """
    URL for the latest published FFmpeg release archive.

    Supported: windows/x86_64, linux/x86_64, macos/x86_64 and macos/aarch64.
    """
    return ffmpeg_download_source(target).url
