"""Event models for proof-of-participation tokens."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class EventCreate(BaseModel):
    """Fields supplied by the caller when an event is created."""

    name: str = Field(..., min_length=1, description="Event display name")
    description: str = Field(..., min_length=1)
    date: datetime = Field(..., description="When the event takes place")
    creator: str = Field(..., min_length=1, description="Wallet address of the issuer")

    # Handle to the externally minted token family, one per event
    token_mint_address: str = Field(..., min_length=1)

    # Opaque value the claim link is built from
    qr_code_data: str = Field(..., min_length=1)

    # Optional
    max_attendees: int | None = Field(default=None, gt=0)
    image_url: str | None = None

    @field_validator("date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Dates without a timezone are taken as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Event(EventCreate):
    """A stored event. Never modified after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Backend-assigned identifier")
    created_at: datetime = Field(default_factory=utcnow)
