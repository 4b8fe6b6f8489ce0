"""Exclusion filter over a compiled set of exclude patterns."""

import logging
from collections.abc import Iterable
from pathlib import Path

from file_excluder_mcp.constants import PlatformConvention
from file_excluder_mcp.core.normalize import normalize
from file_excluder_mcp.core.patterns import ExcludePattern, compile_pattern

logger = logging.getLogger(__name__)


class PathExclusionFilter:
    """Decides whether file paths are excluded from analysis.

    Patterns are compiled once at construction; afterwards the filter is
    read-only and can be shared between threads.

    Args:
        patterns: Raw exclude patterns in configured order
        legacy_implicit_wildcard: True for legacy matching, where literal
            patterns behave as if followed by a wildcard
        convention: Path convention; defaults to the host's

    Raises:
        PatternSyntaxError: If any pattern is malformed
    """

    def __init__(
        self,
        patterns: Iterable[str],
        legacy_implicit_wildcard: bool = True,
        convention: PlatformConvention | None = None,
    ):
        self._convention = convention or PlatformConvention.current()
        self._legacy_implicit_wildcard = legacy_implicit_wildcard
        self._patterns = tuple(
            compile_pattern(pattern, self._convention, legacy_implicit_wildcard)
            for pattern in patterns
        )
        logger.debug(
            "Compiled %d exclude patterns (%d wildcard) for %s convention, legacy=%s",
            len(self._patterns),
            sum(1 for p in self._patterns if p.has_wildcard_meta),
            self._convention.value,
            legacy_implicit_wildcard,
        )

    @property
    def patterns(self) -> tuple[ExcludePattern, ...]:
        return self._patterns

    @property
    def convention(self) -> PlatformConvention:
        return self._convention

    @property
    def legacy_implicit_wildcard(self) -> bool:
        return self._legacy_implicit_wildcard

    def find_matching_pattern(self, path: str | Path) -> ExcludePattern | None:
        """Return the first pattern excluding the path, or None."""
        normalized = normalize(str(path), self._convention)
        for pattern in self._patterns:
            if pattern.matches(normalized):
                return pattern
        return None

    def is_excluded(self, path: str | Path) -> bool:
        """Check if a path is excluded by any configured pattern.

        Args:
            path: File path as produced by file discovery

        Returns:
            True if the path must be skipped, False otherwise
        """
        return self.find_matching_pattern(path) is not None

    def filter_paths(self, paths: Iterable[str]) -> list[str]:
        """Keep only the paths that are not excluded, in their original order."""
        return [path for path in paths if not self.is_excluded(path)]

    def __repr__(self) -> str:
        raw = [pattern.raw for pattern in self._patterns]
        return (
            f"PathExclusionFilter(patterns={raw!r}, "
            f"legacy_implicit_wildcard={self._legacy_implicit_wildcard}, "
            f"convention={self._convention.value!r})"
        )


def build_exclusion_filter(
    project_path: Path,
    extra_patterns: Iterable[str] | None = None,
    *,
    legacy_implicit_wildcard: bool | None = None,
    convention: PlatformConvention | None = None,
) -> PathExclusionFilter:
    """Build an exclusion filter from project config and extra patterns.

    Configured patterns are evaluated first, then extra patterns. Explicit
    keyword arguments override the configured mode and convention.

    Args:
        project_path: Project root directory holding .file-excluder.yml
        extra_patterns: Patterns appended after the configured ones
        legacy_implicit_wildcard: Matching mode override
        convention: Path convention override

    Returns:
        Compiled PathExclusionFilter

    Raises:
        PatternSyntaxError: If any pattern is malformed
        pydantic.ValidationError: If the configuration file is invalid
    """
    from file_excluder_mcp.utils import load_config

    config = load_config(project_path)

    patterns: list[str] = []
    if config is not None:
        patterns.extend(config.exclude)
    patterns.extend(extra_patterns or [])

    if legacy_implicit_wildcard is None:
        legacy_implicit_wildcard = config.legacy_implicit_wildcard if config is not None else True
    if convention is None and config is not None:
        convention = config.convention

    return PathExclusionFilter(patterns, legacy_implicit_wildcard, convention)
