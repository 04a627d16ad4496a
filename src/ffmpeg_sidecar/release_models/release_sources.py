"""
Pydantic data models for release_sources.json.

The file is the lookup table of where FFmpeg builds are published: one
latest-release manifest per operating system and one prebuilt archive per
supported operating system/architecture pair. The table is loaded once and
never mutated.
"""

import json
import pathlib
from functools import lru_cache
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field

RELEASE_SOURCES_PATH = pathlib.Path(__file__).parent / "release_sources.json"


class ManifestSource(BaseModel):
    """
    A remote text resource describing the latest published FFmpeg release.

    format tells how the version is encoded in the body:
    "plain" (the body is the version), "json" (a "version": key) or
    "labeled" (a "version:" line).
    """

    url: str = Field(..., description="URL of the manifest")
    format: Literal["plain", "json", "labeled"] = Field(..., description="Manifest body format")

    class Config:
        frozen = True
        extra = "forbid"


class DownloadSource(BaseModel):
    """A prebuilt archive containing the ffmpeg and ffprobe binaries."""

    url: str = Field(..., description="URL to download from")
    archive_type: str = Field(
        ..., alias="archiveType", description="Archive type: zip, tar.xz, tar.gz or tar"
    )
    description: Optional[str] = Field(None, alias="_description", description="Description")

    class Config:
        frozen = True
        extra = "forbid"
        populate_by_name = True


class ReleaseSourcesConfig(BaseModel):
    """
    Complete release source table.

    Structure:
    {
      "_description": "...",
      "manifests": {"<os>": ManifestSource, ...},
      "downloads": {"<os>-<arch>": DownloadSource, ...}
    }
    """

    description: Optional[str] = Field(None, alias="_description")
    manifests: Dict[str, ManifestSource] = Field(default_factory=dict)
    downloads: Dict[str, DownloadSource] = Field(default_factory=dict)

    class Config:
        frozen = True
        extra = "forbid"
        populate_by_name = True

    def get_manifest(self, operating_system: str) -> Optional[ManifestSource]:
        return self.manifests.get(operating_system)

    def get_download(self, platform_key: str) -> Optional[DownloadSource]:
        """
        Get the archive published for a platform.

        Args:
            platform_key: "<os>-<arch>", e.g. "linux-x86_64"

        Returns:
            DownloadSource or None if no build is published for the platform
        """
        return self.downloads.get(platform_key)

    @classmethod
    def from_file(cls, path: pathlib.Path) -> "ReleaseSourcesConfig":
        with open(path, "r") as f:
            return cls(**json.load(f))


@lru_cache(maxsize=None)
def load_release_sources() -> ReleaseSourcesConfig:
    """Load the release source table bundled with the package."""
    return ReleaseSourcesConfig.from_file(RELEASE_SOURCES_PATH)
