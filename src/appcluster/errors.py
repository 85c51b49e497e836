"""
Error types for cluster topology composition.
"""

from __future__ import annotations


class AppClusterError(Exception):
    """Base exception for all appcluster errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidConfigurationError(AppClusterError):
    """
    Raised when an AppClusterSpec cannot be composed.

    Raised before any resource is declared, so no partial graph escapes.

    Examples:
    - Empty public or private subnet list
    - Non-positive container memory
    - Non-positive or inverted scaling bounds
    - Duplicate managed policy references
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")


class DuplicateResourceError(AppClusterError):
    """Raised when a logical resource is declared more than once."""

    def __init__(self, logical_id: str):
        self.logical_id = logical_id
        super().__init__(f"Resource '{logical_id}' is already declared")


class BootstrapRenderError(AppClusterError):
    """
    Raised when an instance bootstrap script fails to render.

    Examples:
    - Template references an undefined variable
    - Template syntax errors
    """

    pass


__all__ = [
    "AppClusterError",
    "InvalidConfigurationError",
    "DuplicateResourceError",
    "BootstrapRenderError",
]
