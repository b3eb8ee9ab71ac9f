"""
Exception types for dupescan.

Only configuration and traversal problems are raised; per-file failures are
reported as HashFailure values so a run can continue past them.
"""


class DupeScanError(Exception):
    """Base class for fatal dupescan errors."""


class ConfigurationError(DupeScanError):
    """Invalid run configuration (unknown hash method, missing directory, ...)."""


class TraversalError(DupeScanError):
    """The directory tree could not be walked."""

    def __init__(self, path, cause=None):
        self.path = str(path)
        self.cause = cause
        message = f"Cannot traverse {self.path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


__all__ = ['DupeScanError', 'ConfigurationError', 'TraversalError']
