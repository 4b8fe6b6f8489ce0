"""Pattern compilation for file exclusion.

This module turns user-authored exclude patterns into reusable predicates over
normalized paths. Two kinds of pattern are supported:

- wildcard patterns containing `*`, `?` or a `[...]` bracket set, matched
  against the whole path (`*` and `?` also match path separators)
- literal patterns, matched as a directory root whose boundary rules depend
  on the legacy implicit-wildcard flag

Patterns are compiled once and dispatched by the stored kind afterwards.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from file_excluder_mcp.constants import SEPARATOR, WILDCARD_CHARS, PlatformConvention
from file_excluder_mcp.core.normalize import is_anchored, normalize
from file_excluder_mcp.errors import PatternSyntaxError

logger = logging.getLogger(__name__)

PathPredicate = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class ExcludePattern:
    """A compiled exclude pattern.

    Attributes:
        raw: Pattern as configured
        normalized: Pattern after normalization for the filter's convention
        has_wildcard_meta: Whether the raw pattern contains `*`, `?` or `[`
        anchored: Whether the pattern is rooted (`/...` or a drive letter)
        matcher: Predicate over normalized paths
    """
    raw: str
    normalized: str
    has_wildcard_meta: bool
    anchored: bool
    matcher: PathPredicate = field(repr=False, compare=False)

    def matches(self, normalized_path: str) -> bool:
        return self.matcher(normalized_path)


def has_wildcard_meta(pattern: str) -> bool:
    """Check if a pattern uses any wildcard metacharacter."""
    return any(char in pattern for char in WILDCARD_CHARS)


def translate(pattern: str, raw: str | None = None) -> str:
    """Translate a glob pattern into an equivalent regular expression.

    The result is meant for `re.fullmatch` with `re.DOTALL`. Unlike
    `fnmatch.translate`, backslash is never an escape character and an
    unterminated `[` is an error instead of a literal.

    Args:
        pattern: Glob pattern using forward-slash separators
        raw: Pattern as configured, used in error messages

    Returns:
        Regular expression source

    Raises:
        PatternSyntaxError: If a bracket expression is unterminated or
            contains a reversed range
    """
    raw = pattern if raw is None else raw
    parts: list[str] = []
    i, n = 0, len(pattern)

    while i < n:
        char = pattern[i]
        i += 1
        if char == "*":
            # Consecutive stars are equivalent to one
            if not parts or parts[-1] != ".*":
                parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "[":
            end = i
            # A leading ] is a member of the set
            if end < n and pattern[end] == "]":
                end += 1
            end = pattern.find("]", end)
            if end == -1:
                raise PatternSyntaxError(raw, "unterminated bracket expression")
            parts.append(_translate_bracket(pattern[i:end], raw))
            i = end + 1
        else:
            parts.append(re.escape(char))

    return "".join(parts)


def _translate_bracket(members: str, raw: str) -> str:
    items: list[str] = []
    k = 0
    while k < len(members):
        if k + 2 < len(members) and members[k + 1] == "-":
            low, high = members[k], members[k + 2]
            if low > high:
                raise PatternSyntaxError(raw, f"invalid range {low}-{high} in bracket expression")
            items.append(f"{re.escape(low)}-{re.escape(high)}")
            k += 3
        else:
            items.append(re.escape(members[k]))
            k += 1
    return "[" + "".join(items) + "]"


def _wildcard_matcher(pattern: str, convention: PlatformConvention) -> PathPredicate:
    source, flags = pattern, re.DOTALL
    if convention == PlatformConvention.WINDOWS_STYLE:
        # Bracket ranges keep their configured case; folding is left to the regex
        source = pattern.replace("\\", SEPARATOR)
        flags |= re.IGNORECASE
    regex = re.compile(translate(source, pattern), flags)
    return lambda path: regex.fullmatch(path) is not None


def _legacy_literal_matcher(normalized: str, anchored: bool) -> PathPredicate:
    # Implicit trailing wildcard: "/etc/phpstan" also covers "/etc/phpstan-test"
    if anchored:
        return lambda path: path.startswith(normalized)

    # Relative fragments may also start at any separator inside the path
    fragment = SEPARATOR + normalized
    return lambda path: path.startswith(normalized) or fragment in path


def _strict_literal_matcher(normalized: str) -> PathPredicate:
    if not normalized:
        return lambda path: path == normalized
    prefix = normalized if normalized.endswith(SEPARATOR) else normalized + SEPARATOR
    return lambda path: path == normalized or path.startswith(prefix)


def _never(path: str) -> bool:
    return False


def compile_pattern(
    pattern: str,
    convention: PlatformConvention,
    legacy_implicit_wildcard: bool,
) -> ExcludePattern:
    """Compile one exclude pattern.

    Args:
        pattern: Raw pattern as configured (e.g., "/etc/app/", "C:/temp/*", "tests")
        convention: Path convention the pattern is matched under
        legacy_implicit_wildcard: True to widen literal patterns with an implicit
            trailing wildcard, False for exact/directory-boundary matching

    Returns:
        Compiled ExcludePattern

    Raises:
        PatternSyntaxError: If the pattern is malformed
    """
    normalized = normalize(pattern, convention)
    wildcard = has_wildcard_meta(pattern)
    anchored = is_anchored(normalized, convention)

    if not normalized and legacy_implicit_wildcard:
        logger.debug("Empty exclude pattern never matches in legacy mode")
        matcher = _never
    elif wildcard:
        matcher = _wildcard_matcher(pattern, convention)
    elif legacy_implicit_wildcard:
        matcher = _legacy_literal_matcher(normalized, anchored)
    else:
        matcher = _strict_literal_matcher(normalized)

    return ExcludePattern(
        raw=pattern,
        normalized=normalized,
        has_wildcard_meta=wildcard,
        anchored=anchored,
        matcher=matcher,
    )
