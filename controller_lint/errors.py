"""
Exception hierarchy for controller-lint.

Only routing-file and configuration failures are fatal. Controller-level
failures are absorbed by the pipeline and reported as skips.
"""

from __future__ import annotations


class ControllerLintError(Exception):
    """Base class for all controller-lint errors."""


class RoutesFileError(ControllerLintError):
    """The routing declaration file is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read routes file {path}: {reason}")


class ConfigError(ControllerLintError):
    """The configuration file is unreadable or invalid."""


class ControllerFileError(ControllerLintError):
    """A controller source file exists but could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read controller file {path}: {reason}")
