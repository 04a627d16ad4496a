"""
Release source models.

This package provides Pydantic data models for the table of places FFmpeg
builds and their latest-release manifests are published.
"""

from .release_sources import (
    ReleaseSourcesConfig,
    ManifestSource,
    DownloadSource,
    load_release_sources,
)

__all__ = [
    "ReleaseSourcesConfig",
    "ManifestSource",
    "DownloadSource",
    "load_release_sources",
]
