"""File exclusion filtering for analysis pipelines.

Decides whether a discovered file path must be skipped, given a list of
user-authored exclude patterns and a backward-compatibility flag.
"""

from file_excluder_mcp.constants import PlatformConvention
from file_excluder_mcp.core import (
    ExcludePattern,
    PathExclusionFilter,
    compile_pattern,
    normalize,
)
from file_excluder_mcp.errors import ExcluderError, PatternSyntaxError

__version__ = "1.0.0"

__all__ = [
    "ExcludePattern",
    "ExcluderError",
    "PathExclusionFilter",
    "PatternSyntaxError",
    "PlatformConvention",
    "compile_pattern",
    "normalize",
]
