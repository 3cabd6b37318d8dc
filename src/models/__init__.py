"""Data models for the application."""

from src.models.claim import ClaimedToken, TokenClaim, TokenClaimCreate
from src.models.event import Event, EventCreate, utcnow

__all__ = [
    # Event
    "Event",
    "EventCreate",
    # Claim
    "TokenClaim",
    "TokenClaimCreate",
    "ClaimedToken",
    "utcnow",
]
