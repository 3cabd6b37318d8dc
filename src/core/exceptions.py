"""Custom exceptions for the application."""

from typing import Any


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(AppException):
    """Raised when there's a configuration problem."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class EventNotFound(AppException):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            f"Event not found: {event_id}",
            code="EVENT_NOT_FOUND",
            details={"event_id": event_id},
        )


class TokenClaimNotFound(AppException):
    """Raised when a token claim is not found."""

    def __init__(self, claim_id: str) -> None:
        super().__init__(
            f"Token claim not found: {claim_id}",
            code="TOKEN_CLAIM_NOT_FOUND",
            details={"claim_id": claim_id},
        )


class ConstraintViolation(AppException):
    """Raised when input breaks a storage constraint."""

    def __init__(
        self,
        message: str,
        code: str = "CONSTRAINT_VIOLATION",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class InvalidReference(ConstraintViolation):
    """Raised when a claim references an event id the backend cannot parse."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            f"Invalid event reference: {event_id!r}",
            code="INVALID_REFERENCE",
            details={"event_id": event_id},
        )


class EventCapacityReached(ConstraintViolation):
    """Raised when an event has handed out all of its tokens."""

    def __init__(self, event_id: str, max_attendees: int) -> None:
        super().__init__(
            f"Event {event_id} has reached its limit of {max_attendees} attendees",
            code="EVENT_CAPACITY_REACHED",
            details={"event_id": event_id, "max_attendees": max_attendees},
        )


class DuplicateClaim(AppException):
    """Raised when a wallet has already claimed the token of an event."""

    def __init__(self, event_id: str, wallet_address: str) -> None:
        super().__init__(
            f"Wallet {wallet_address} has already claimed a token for event {event_id}",
            code="DUPLICATE_CLAIM",
            details={"event_id": event_id, "wallet_address": wallet_address},
        )


class BackendUnavailable(AppException):
    """Raised when the storage backend cannot be reached."""

    def __init__(self, message: str, backend: str | None = None) -> None:
        super().__init__(
            message,
            code="BACKEND_UNAVAILABLE",
            details={"backend": backend} if backend else {},
        )
