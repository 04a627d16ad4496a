"""
This file contains platform utilities used across the FFmpeg acquisition pipeline.
"""

import dataclasses
import platform
from typing import Optional

WINDOWS = "windows"
MACOS = "macos"
LINUX = "linux"

X86_64 = "x86_64"
AARCH64 = "aarch64"

_SYSTEM_NAMES = {
    "windows": WINDOWS,
    "darwin": MACOS,
    "linux": LINUX,
}

_MACHINE_NAMES = {
    "x86_64": X86_64,
    "amd64": X86_64,
    "x64": X86_64,
    "aarch64": AARCH64,
    "arm64": AARCH64,
}


@dataclasses.dataclass(frozen=True)
class PlatformTarget:
    """
    The operating system and CPU architecture the binaries are acquired for.

    Values outside the known set are kept as reported by the host so that
    source lookups fail on them instead of silently matching another platform.
    """

    operating_system: str
    cpu_architecture: str

    @property
    def key(self) -> str:
        return f"{self.operating_system}-{self.cpu_architecture}"

    def is_windows(self) -> bool:
        return self.operating_system == WINDOWS


class PlatformUtils:
    """
    This class provides utilities for platform detection and identification.
    """

    _current: Optional[PlatformTarget] = None

    @staticmethod
    def normalize(system: str, machine: str) -> PlatformTarget:
        """
        Map the names reported by the platform module onto a PlatformTarget.
        """
        system = system.lower()
        machine = machine.lower()
        return PlatformTarget(
            operating_system=_SYSTEM_NAMES.get(system, system),
            cpu_architecture=_MACHINE_NAMES.get(machine, machine),
        )

    @classmethod
    def get_platform_target(cls) -> PlatformTarget:
        """
        Returns the platform target for the current system, resolved once per process.
        """
        if cls._current is None:
            cls._current = cls.normalize(platform.system(), platform.machine())
        return cls._current

    @staticmethod
    def binary_names(target: PlatformTarget):
        """
        Returns the (ffmpeg, ffprobe) file names for the given target.
        """
        if target.is_windows():
            return "ffmpeg.exe", "ffprobe.exe"
        return "ffmpeg", "ffprobe"
