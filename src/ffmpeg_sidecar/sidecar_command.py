"""
Checks for a usable FFmpeg installation.
"""

import subprocess
from typing import Optional

from ffmpeg_sidecar.sidecar_config import SidecarConfig
from ffmpeg_sidecar.sidecar_paths import ffmpeg_path


def ffmpeg_is_installed(config: Optional[SidecarConfig] = None) -> bool:
    """
    Returns True if "ffmpeg -version" runs and exits successfully.
    """
    try:
        result = subprocess.run(
            [str(ffmpeg_path(config)), "-version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        return False
    return result.returncode == 0
