"""Path normalization for comparison against exclude patterns."""

import re

from file_excluder_mcp.constants import SEPARATOR, PlatformConvention

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def normalize(path: str, convention: PlatformConvention) -> str:
    """Return the comparison form of a path or pattern.

    Under the Windows convention backslashes become forward slashes and the
    string is lower-cased. Under POSIX the string is returned as-is, so a
    backslash stays an ordinary character. Nothing else is collapsed or
    resolved.

    Args:
        path: Raw path or pattern string (may be empty)
        convention: Convention to normalize for

    Returns:
        Normalized string
    """
    if convention == PlatformConvention.WINDOWS_STYLE:
        return path.replace("\\", SEPARATOR).lower()
    return path


def is_anchored(normalized: str, convention: PlatformConvention) -> bool:
    """Check whether a normalized string is rooted at the filesystem root."""
    if normalized.startswith(SEPARATOR):
        return True
    if convention == PlatformConvention.WINDOWS_STYLE:
        return _DRIVE_PREFIX.match(normalized) is not None
    return False
