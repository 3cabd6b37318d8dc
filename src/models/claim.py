"""Token claim models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.event import Event, utcnow


class TokenClaimCreate(BaseModel):
    """Fields supplied by the caller when a wallet claims an event token."""

    event_id: str = Field(..., min_length=1, description="Event being claimed")
    wallet_address: str = Field(..., min_length=1, description="Attendee wallet")
    transaction_signature: str = Field(..., min_length=1)


class TokenClaim(TokenClaimCreate):
    """A stored token claim."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Backend-assigned identifier")
    claimed_at: datetime = Field(default_factory=utcnow)


class ClaimedToken(BaseModel):
    """A claim together with the event it belongs to."""

    claim: TokenClaim
    event: Event
