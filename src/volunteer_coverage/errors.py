from __future__ import annotations


class CoverageEngineError(Exception):
    """Base class for errors raised by the coverage engine."""


class InvalidTimeZoneId(CoverageEngineError, ValueError):
    """The timezone identifier is not a known IANA key."""

    def __init__(self, tz_id: object) -> None:
        super().__init__(f"Unknown timezone identifier: {tz_id!r}")
        self.tz_id = tz_id


class MalformedDateOrTimeString(CoverageEngineError, ValueError):
    """A date, time or instant value failed structural parsing."""

    def __init__(self, value: object, expected: str) -> None:
        super().__init__(f"Expected {expected}, got {value!r}")
        self.value = value
        self.expected = expected


class NothingToReviewError(CoverageEngineError):
    """dismiss/undismiss was called from a state that does not allow it."""


class AmbiguousLocalTimeResolved(UserWarning):
    """
    A local wall-clock time was skipped or repeated by a DST transition and the
    resolution policy picked an instant for it. Informational only.
    """
