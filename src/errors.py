"""
Centralized, typed exceptions for sha-calc.

Every failure the CLI reports maps to exactly one of these types, so the
entrypoint can print a single `sha-calc: <message>` line and pick the exit
code without inspecting messages.
"""

from __future__ import annotations

from typing import Optional


class ShaCalcError(Exception):
    """Base class for all custom errors in sha-calc."""


class ConfigLoadError(ShaCalcError):
    """Raised when a configuration file or env override is missing or invalid."""


class InputAccessError(ShaCalcError):
    """Raised when an input unit (file or stdin) cannot be opened or read."""

    def __init__(self, label: str, action: str, cause: Optional[BaseException] = None):
        self.label = label
        self.action = action
        self.cause = cause
        reason = _describe(cause) if cause is not None else ""
        message = f"{label}: {action}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PatternError(ShaCalcError):
    """Raised for a glob pattern that cannot be expanded."""


class NoManifestError(ShaCalcError):
    """Raised when check mode is started without any hash files."""


class MalformedLineError(ShaCalcError):
    """Raised when a manifest line lacks the two-space separator."""

    def __init__(self, line_no: int):
        self.line_no = line_no
        super().__init__(f"line {line_no}: improperly formatted")


class InternalError(ShaCalcError):
    """Raised for unexpected internal failures to be reported gracefully."""


def _describe(exc: BaseException) -> str:
    # OSError carries a clean strerror; str() would repeat the filename.
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or exc.__class__.__name__
