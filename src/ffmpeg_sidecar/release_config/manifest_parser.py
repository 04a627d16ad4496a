"""
Version extraction from the latest-release manifests.

Both parsers accept arbitrary text and return None when the version cannot
be found.
"""

from typing import Optional


def parse_macos_version(version: str) -> Optional[str]:
    """
    Parse the macOS version number from a JSON string manifest file.

    Example input: https://evermeet.cx/ffmpeg/info/ffmpeg/release

    >>> parse_macos_version('{"name":"ffmpeg","type":"release","version":"6.0"}')
    '6.0'
    """
    sections = version.split('"version":')
    if len(sections) < 2:
        return None

    quoted = sections[1].strip().split('"')
    if len(quoted) < 2:
        return None
    return quoted[1]


def parse_linux_version(version: str) -> Optional[str]:
    """
    Parse the Linux version number from a long manifest text file.

    Example input: https://johnvansickle.com/ffmpeg/release-readme.txt

    >>> parse_linux_version("build: ffmpeg-5.1.1-amd64-static.tar.xz\\nversion: 5.1.1\\n\\ngcc: 8.3.0")
    '5.1.1'
    """
    sections = version.split("version:")
    if len(sections) < 2:
        return None

    tokens = sections[1].split()
    return tokens[0] if tokens else None
