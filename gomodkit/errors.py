"""Exceptions raised by gomodkit."""


class GomodkitError(Exception):
    """Base class for all gomodkit errors."""


class GoOutputError(GomodkitError):
    """A line of Go toolchain output reported a failure.

    Attributes:
        reason: What the toolchain reported (e.g. "404 Not Found").
        module: The module path the failure refers to, when captured.
    """

    def __init__(self, message: str, reason: str | None = None, module: str | None = None):
        super().__init__(message)
        self.reason = reason
        self.module = module


class PatternCompileError(GomodkitError, ValueError):
    """An output pattern could not be compiled."""


class SumFileError(GomodkitError, OSError):
    """go.sum could not be read, removed or written."""
