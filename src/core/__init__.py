"""Core module - configuration and utilities."""

from src.core.config import settings
from src.core.exceptions import (
    AppException,
    BackendUnavailable,
    ConfigurationError,
    ConstraintViolation,
    DuplicateClaim,
    EventCapacityReached,
    EventNotFound,
    InvalidReference,
    TokenClaimNotFound,
)

__all__ = [
    "settings",
    "AppException",
    "BackendUnavailable",
    "ConfigurationError",
    "ConstraintViolation",
    "DuplicateClaim",
    "EventCapacityReached",
    "EventNotFound",
    "InvalidReference",
    "TokenClaimNotFound",
]
