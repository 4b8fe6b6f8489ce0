"""Constants and enums shared across file-excluder modules."""

import os
from enum import Enum

CONFIG_FILENAME = ".file-excluder.yml"
LOG_LEVEL_ENV = "FILE_EXCLUDER_LOG_LEVEL"
CHARACTER_LIMIT = 25000  # Maximum response size in characters

SEPARATOR = "/"
WILDCARD_CHARS = ("*", "?", "[")


class PlatformConvention(str, Enum):
    """Path separator and case-sensitivity convention."""
    WINDOWS_STYLE = "windows"
    POSIX_STYLE = "posix"

    @classmethod
    def current(cls) -> "PlatformConvention":
        """Convention of the running host."""
        return cls.WINDOWS_STYLE if os.name == "nt" else cls.POSIX_STYLE


class ResponseFormat(str, Enum):
    """Output format for tool responses."""
    MARKDOWN = "markdown"
    JSON = "json"
