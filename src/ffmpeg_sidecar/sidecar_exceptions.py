"""
This file contains the exceptions raised by the ffmpeg acquisition pipeline.
"""

from typing import Optional


class SidecarException(Exception):
    """
    Base exception for all errors raised while acquiring FFmpeg.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SidecarConfigError(SidecarException):
    """Raised when a SidecarConfig value is invalid."""


class UnsupportedPlatformError(SidecarException):
    """
    Raised when the OS/architecture pair has no known download source.

    Not retryable; the caller has to provide its own URL and call
    download_ffmpeg_package directly.
    """


class TransferFailedError(SidecarException):
    """Raised when the transfer process cannot be spawned or its output is unreadable."""


class DownloadFailedError(SidecarException):
    """Raised when the archive download finished with a non-zero status."""


class VersionParseFailedError(SidecarException):
    """Raised when the release manifest does not contain a version number."""


class UnsupportedArchiveFormatError(SidecarException):
    """Raised when the archive extension is neither zip nor tar/xz/gz."""

    def __init__(self, message: str, extension: str):
        super().__init__(message)
        self.extension = extension


class ExtractionFailedError(SidecarException):
    """Raised when unpacking the archive fails."""

    def __init__(self, message: str, extension: str):
        super().__init__(message)
        self.extension = extension


class BinaryNotFoundError(SidecarException):
    """Raised when an expected binary is missing from the extracted archive."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class IOFailureError(SidecarException):
    """Raised when a directory cannot be created or listed."""


class InstallVerificationFailedError(SidecarException):
    """Raised when FFmpeg is still not usable after an install run."""
