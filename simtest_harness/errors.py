"""Exception hierarchy for simtest_harness."""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base exception for all simtest_harness errors."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.hint = hint


class ResultLookupError(HarnessError):
    """A parameter or signal could not be recovered from a test result.

    These point at a misconfigured test (nothing logged, parameter never
    overridden, unsupported test type), so callers are expected to fail the
    test rather than retry.
    """


class NotFoundError(ResultLookupError):
    """Name absent from every location searched."""

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.name = name


class NoLoggedDataError(ResultLookupError):
    """The result carries no logged signals at all."""


class UnsupportedModeError(ResultLookupError):
    """The test type produces two result sets; the lookup is ambiguous."""


class SignalStructureError(ResultLookupError):
    """A nested signal structure has no leaf series within reach."""


class ResultFormatError(HarnessError):
    """An exported result file does not match the expected layout."""


class IterationOverrideMissingWarning(UserWarning):
    """Parameter not overridden by the iteration; top-level value used."""


__all__ = [
    "HarnessError",
    "IterationOverrideMissingWarning",
    "NoLoggedDataError",
    "NotFoundError",
    "ResultFormatError",
    "ResultLookupError",
    "SignalStructureError",
    "UnsupportedModeError",
]
