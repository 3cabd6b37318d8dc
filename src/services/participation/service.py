"""Participation service - issuing events and handing out their tokens."""

from datetime import datetime
from uuid import uuid4

import structlog
from pydantic import ValidationError

from src.core.config import settings
from src.core.exceptions import ConstraintViolation, DuplicateClaim, EventCapacityReached
from src.models import ClaimedToken, Event, EventCreate, TokenClaim, TokenClaimCreate
from src.storage import StorageBackend, get_storage

logger = structlog.get_logger()


def generate_qr_code_data() -> str:
    """Short unique value the claim QR code is built from."""
    return f"pop-{uuid4().hex[:8]}"


def _validation_details(error: ValidationError) -> dict:
    return {
        "errors": [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in error.errors()
        ]
    }


class ParticipationService:
    """Workflow around the storage contract.

    The storage layer only guarantees one claim per wallet per event. Checks
    that need other records (the event exists, the mint address is unused,
    the attendee cap is not reached) live here.
    """

    def __init__(
        self,
        storage: StorageBackend | None = None,
        claim_base_url: str | None = None,
    ) -> None:
        self.storage = storage or get_storage()
        self.claim_base_url = (claim_base_url or settings.claim_base_url).rstrip("/")

    async def create_event(
        self,
        *,
        name: str,
        description: str,
        date: datetime | str,
        creator: str,
        token_mint_address: str,
        max_attendees: int | None = None,
        image_url: str | None = None,
        qr_code_data: str | None = None,
    ) -> Event:
        """Validate and store a new event.

        Raises:
            ConstraintViolation: invalid input, or the mint address is taken.
        """
        try:
            data = EventCreate(
                name=name,
                description=description,
                date=date,
                creator=creator,
                token_mint_address=token_mint_address,
                qr_code_data=qr_code_data or generate_qr_code_data(),
                max_attendees=max_attendees,
                image_url=image_url,
            )
        except ValidationError as e:
            raise ConstraintViolation("Invalid event data", details=_validation_details(e)) from e

        # Check-then-act: concurrent creations with one mint address can both pass
        existing = await self.storage.get_event_by_mint_address(data.token_mint_address)
        if existing is not None:
            raise ConstraintViolation(
                f"Token mint address already belongs to event {existing.id}",
                details={"token_mint_address": data.token_mint_address, "event_id": existing.id},
            )

        return await self.storage.create_event(data)

    async def claim_token(
        self,
        event_id: str,
        wallet_address: str,
        transaction_signature: str,
    ) -> TokenClaim:
        """Record that a wallet claimed the token of an event.

        Raises:
            EventNotFound: no such event.
            DuplicateClaim: the wallet already claimed this event.
            EventCapacityReached: max_attendees claims already exist.
            ConstraintViolation: empty wallet address or signature.
        """
        event = await self.storage.require_event(event_id)

        try:
            data = TokenClaimCreate(
                event_id=event.id,
                wallet_address=wallet_address,
                transaction_signature=transaction_signature,
            )
        except ValidationError as e:
            raise ConstraintViolation("Invalid claim data", details=_validation_details(e)) from e

        if await self.storage.has_wallet_claimed_token(event.id, data.wallet_address):
            raise DuplicateClaim(event.id, data.wallet_address)

        if event.max_attendees is not None:
            claims = await self.storage.get_token_claims_by_event(event.id)
            if len(claims) >= event.max_attendees:
                logger.info("Event is full", event_id=event.id, max_attendees=event.max_attendees)
                raise EventCapacityReached(event.id, event.max_attendees)

        return await self.storage.create_token_claim(data)

    async def has_claimed(self, event_id: str, wallet_address: str) -> bool:
        """Check whether a wallet already holds the token of an event."""
        return await self.storage.has_wallet_claimed_token(event_id, wallet_address)

    async def get_wallet_tokens(self, wallet_address: str) -> list[ClaimedToken]:
        """Claims of a wallet joined with their events, newest first."""
        tokens = []
        events: dict[str, Event | None] = {}
        for claim in await self.storage.get_token_claims_by_wallet(wallet_address):
            if claim.event_id not in events:
                events[claim.event_id] = await self.storage.get_event(claim.event_id)
            event = events[claim.event_id]
            if event is None:
                logger.warning(
                    "Claim references missing event",
                    claim_id=claim.id,
                    event_id=claim.event_id,
                )
                continue
            tokens.append(ClaimedToken(claim=claim, event=event))
        return tokens

    def claim_url(self, event: Event) -> str:
        """Link attendees open to claim the event token."""
        return f"{self.claim_base_url}/claim/{event.id}"


# Singleton instance
_participation_service: ParticipationService | None = None


def get_participation_service() -> ParticipationService:
    """Get or create the participation service singleton."""
    global _participation_service
    if _participation_service is None:
        _participation_service = ParticipationService()
    return _participation_service


def reset_participation_service() -> None:
    """Drop the singleton (for testing)."""
    global _participation_service
    _participation_service = None
