"""
Utilities module: Exceptions, validators, time helpers.
"""

from shared.utils.exceptions import (
    AppException,
    InvalidArgumentError,
    NotFoundError,
    PriceNotFoundError,
    ConflictError,
    VersionConflictError,
    DuplicateEntityError,
    DependencyFailureError,
)

__all__ = [
    "AppException",
    "InvalidArgumentError",
    "NotFoundError",
    "PriceNotFoundError",
    "ConflictError",
    "VersionConflictError",
    "DuplicateEntityError",
    "DependencyFailureError",
]
