"""
Release source resolution.

This package handles:
1. Resolving the manifest and archive URLs for the current platform
2. Parsing the latest published version out of a manifest
"""

from .manifest_parser import parse_linux_version, parse_macos_version
from .source_resolver import (
    ffmpeg_download_source,
    ffmpeg_download_url,
    ffmpeg_manifest_source,
    ffmpeg_manifest_url,
)

__all__ = [
    "ffmpeg_download_source",
    "ffmpeg_download_url",
    "ffmpeg_manifest_source",
    "ffmpeg_manifest_url",
    "parse_linux_version",
    "parse_macos_version",
]
