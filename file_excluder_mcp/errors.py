"""Exceptions raised by the exclusion filter."""


class ExcluderError(Exception):
    """Base class for file-excluder errors."""


class PatternSyntaxError(ExcluderError, ValueError):
    """An exclude pattern could not be compiled.

    Raised at filter construction time, never while answering queries.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid exclude pattern {pattern!r}: {reason}")
