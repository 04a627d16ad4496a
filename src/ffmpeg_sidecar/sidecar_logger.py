"""
Multi-line structured logger for the FFmpeg acquisition pipeline.
"""

import inspect
import logging
from typing import Optional, Union

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the log
    """

    caller_file: str
    caller_name: str
    caller_line: int
    level: str
    message: str


class SidecarLogger:
    """
    Logger class
    """

    def __init__(self, level: Optional[Union[int, str]] = None) -> None:
        """
        Wraps the shared "ffmpeg_sidecar" logger. Its level is left to the host
        application unless one is given here.
        """
        self.logger = logging.getLogger("ffmpeg_sidecar")
        if level is not None:
            self.logger.setLevel(level)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the message at the given level, tagged with the caller's location.
        """
        debug_message = debug_message.replace("\n", " ")

        # Collect details about the caller
        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller_file = calframe[1][1].replace("\\", "/").split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        debug_log_line = LogLine(
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            level=logging.getLevelName(level),
            message=debug_message,
        )

        self.logger.log(level=level, msg=debug_log_line.model_dump_json())


default_logger = SidecarLogger()
