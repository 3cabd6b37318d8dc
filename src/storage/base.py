"""Abstract base class for storage backends."""

from abc import ABC, abstractmethod

from src.core.exceptions import EventNotFound, TokenClaimNotFound
from src.models import Event, EventCreate, TokenClaim, TokenClaimCreate


class StorageBackend(ABC):
    """Abstract storage backend interface.

    Identifiers are strings at this boundary. An identifier the backend cannot
    parse behaves exactly like one that does not exist: lookups return None,
    filters return nothing.
    """

    name: str = "base"

    # ==================== Event Operations ====================

    @abstractmethod
    async def create_event(self, data: EventCreate) -> Event:
        """Store a new event, assigning its id and creation time."""
        ...

    @abstractmethod
    async def get_event(self, event_id: str) -> Event | None:
        """Get an event by ID."""
        ...

    @abstractmethod
    async def get_event_by_mint_address(self, token_mint_address: str) -> Event | None:
        """Get the event whose token was minted at the given address."""
        ...

    @abstractmethod
    async def get_events(self) -> list[Event]:
        """List all events, newest first."""
        ...

    @abstractmethod
    async def get_events_by_creator(self, creator_address: str) -> list[Event]:
        """List events issued by a wallet, newest first."""
        ...

    # ==================== TokenClaim Operations ====================

    @abstractmethod
    async def create_token_claim(self, data: TokenClaimCreate) -> TokenClaim:
        """Store a new claim, assigning its id and claim time.

        Raises:
            InvalidReference: the event id is not parseable by this backend.
            DuplicateClaim: the wallet already holds a claim for the event.
        """
        ...

    @abstractmethod
    async def get_token_claim(self, claim_id: str) -> TokenClaim | None:
        """Get a claim by ID."""
        ...

    @abstractmethod
    async def get_token_claims_by_event(self, event_id: str) -> list[TokenClaim]:
        """List claims for an event, newest first."""
        ...

    @abstractmethod
    async def get_token_claims_by_wallet(self, wallet_address: str) -> list[TokenClaim]:
        """List claims made by a wallet, newest first."""
        ...

    @abstractmethod
    async def has_wallet_claimed_token(self, event_id: str, wallet_address: str) -> bool:
        """Check whether a claim exists for this exact (event, wallet) pair."""
        ...

    # ==================== Health Check ====================

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage is healthy."""
        ...

    # ==================== Strict Lookups ====================

    async def require_event(self, event_id: str) -> Event:
        """Get an event or raise EventNotFound."""
        event = await self.get_event(event_id)
        if event is None:
            raise EventNotFound(str(event_id))
        return event

    async def require_token_claim(self, claim_id: str) -> TokenClaim:
        """Get a claim or raise TokenClaimNotFound."""
        claim = await self.get_token_claim(claim_id)
        if claim is None:
            raise TokenClaimNotFound(str(claim_id))
        return claim
