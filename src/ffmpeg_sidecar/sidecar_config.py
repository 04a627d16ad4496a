"""
Configuration parameters for the FFmpeg acquisition pipeline.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from ffmpeg_sidecar.sidecar_exceptions import SidecarConfigError

TRANSFER_BACKENDS = ("curl", "requests")
EXTRACT_BACKENDS = ("command", "native")


@dataclass
class SidecarConfig:
    """
    Configuration for downloading and installing FFmpeg.

    install_dir overrides the directory the binaries are placed in. The
    backends select how archives are fetched ("curl" spawns curl, "requests"
    stays in-process) and how they are unpacked ("command" spawns unzip/tar,
    "native" uses zipfile/tarfile).
    """

    install_dir: Optional[str] = None
    transfer_backend: str = "curl"
    extract_backend: str = "command"
    log_level: Optional[str] = None

    def __post_init__(self):
        if self.log_level is not None and not isinstance(
            logging.getLevelName(str(self.log_level).upper()), int
        ):
            raise SidecarConfigError(f"Unknown log level: {self.log_level}")
        if self.transfer_backend not in TRANSFER_BACKENDS:
            raise SidecarConfigError(
                f"Unknown transfer backend: {self.transfer_backend} "
                f"(expected one of {', '.join(TRANSFER_BACKENDS)})"
            )
        if self.extract_backend not in EXTRACT_BACKENDS:
            raise SidecarConfigError(
                f"Unknown extract backend: {self.extract_backend} "
                f"(expected one of {', '.join(EXTRACT_BACKENDS)})"
            )

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "SidecarConfig":
        """
        Create a SidecarConfig instance from a dictionary
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(env) - known
        if unknown:
            raise SidecarConfigError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**env)

    @classmethod
    def from_toml(cls, path: str) -> "SidecarConfig":
        """
        Load the [sidecar] table of a TOML file.

        A file without a [sidecar] table yields the defaults.
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise SidecarConfigError(f"Failed to load {path}: {e}") from e

        section = toml_dict.get("sidecar", {})
        if not isinstance(section, dict):
            raise SidecarConfigError(f"[sidecar] in {path} must be a table")
        return cls.from_dict(section)
