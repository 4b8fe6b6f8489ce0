"""Core matching logic: normalization, pattern compilation and filtering."""

from file_excluder_mcp.core.excluder import PathExclusionFilter, build_exclusion_filter
from file_excluder_mcp.core.normalize import is_anchored, normalize
from file_excluder_mcp.core.patterns import (
    ExcludePattern,
    compile_pattern,
    has_wildcard_meta,
    translate,
)

__all__ = [
    "ExcludePattern",
    "PathExclusionFilter",
    "build_exclusion_filter",
    "compile_pattern",
    "has_wildcard_meta",
    "is_anchored",
    "normalize",
    "translate",
]
