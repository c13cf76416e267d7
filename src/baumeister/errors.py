"""Custom exception types raised by the baumeister generator."""

from __future__ import annotations


class BaumeisterError(RuntimeError):
    """Base class for fatal generator errors."""


class ConfigurationError(BaumeisterError):
    """Raised when answers or a persisted configuration cannot form a context.

    ``field`` names the offending template variable when it is known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InstallError(BaumeisterError):
    """Raised when installing the generated project's dependencies fails."""


__all__ = ["BaumeisterError", "ConfigurationError", "InstallError"]
