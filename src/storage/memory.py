"""In-memory storage backend for development and testing."""

import structlog

from src.core.exceptions import DuplicateClaim, InvalidReference
from src.models import Event, EventCreate, TokenClaim, TokenClaimCreate, utcnow
from src.storage.base import StorageBackend
from src.storage.identifiers import parse_int_id

logger = structlog.get_logger()


class InMemoryStorage(StorageBackend):
    """In-memory storage implementation for development.

    Records live in insertion-ordered dicts keyed by auto-incrementing integers
    and are lost when the process exits. Every mutation runs without awaiting,
    so concurrent handlers on one event loop cannot interleave inside it. Not
    safe to share across threads.
    """

    name = "memory"

    def __init__(self) -> None:
        self._events: dict[int, Event] = {}
        self._token_claims: dict[int, TokenClaim] = {}
        # (event_id, wallet_address) -> claim id
        self._claim_index: dict[tuple[int, str], int] = {}
        self._event_next_id = 1
        self._token_claim_next_id = 1

    # ==================== Event Operations ====================

    async def create_event(self, data: EventCreate) -> Event:
        event_id = self._event_next_id
        self._event_next_id += 1

        event = Event(**data.model_dump(), id=str(event_id), created_at=utcnow())
        self._events[event_id] = event
        logger.info("Event created", event_id=event.id, creator=event.creator)
        return event

    async def get_event(self, event_id: str) -> Event | None:
        key = parse_int_id(event_id)
        if key is None:
            return None
        return self._events.get(key)

    async def get_event_by_mint_address(self, token_mint_address: str) -> Event | None:
        for event in self._events.values():
            if event.token_mint_address == token_mint_address:
                return event
        return None

    async def get_events(self) -> list[Event]:
        return self._newest_first(self._events)

    async def get_events_by_creator(self, creator_address: str) -> list[Event]:
        return [e for e in self._newest_first(self._events) if e.creator == creator_address]

    # ==================== TokenClaim Operations ====================

    async def create_token_claim(self, data: TokenClaimCreate) -> TokenClaim:
        event_key = parse_int_id(data.event_id)
        if event_key is None:
            raise InvalidReference(data.event_id)

        pair = (event_key, data.wallet_address)
        if pair in self._claim_index:
            logger.warning(
                "Duplicate claim rejected",
                event_id=str(event_key),
                wallet_address=data.wallet_address,
            )
            raise DuplicateClaim(str(event_key), data.wallet_address)

        claim_id = self._token_claim_next_id
        self._token_claim_next_id += 1

        claim = TokenClaim(
            id=str(claim_id),
            event_id=str(event_key),
            wallet_address=data.wallet_address,
            transaction_signature=data.transaction_signature,
            claimed_at=utcnow(),
        )
        self._token_claims[claim_id] = claim
        self._claim_index[pair] = claim_id
        logger.info(
            "Token claimed",
            claim_id=claim.id,
            event_id=claim.event_id,
            wallet_address=claim.wallet_address,
        )
        return claim

    async def get_token_claim(self, claim_id: str) -> TokenClaim | None:
        key = parse_int_id(claim_id)
        if key is None:
            return None
        return self._token_claims.get(key)

    async def get_token_claims_by_event(self, event_id: str) -> list[TokenClaim]:
        key = parse_int_id(event_id)
        if key is None:
            return []
        wanted = str(key)
        return [c for c in self._newest_first(self._token_claims) if c.event_id == wanted]

    async def get_token_claims_by_wallet(self, wallet_address: str) -> list[TokenClaim]:
        return [
            c for c in self._newest_first(self._token_claims)
            if c.wallet_address == wallet_address
        ]

    async def has_wallet_claimed_token(self, event_id: str, wallet_address: str) -> bool:
        key = parse_int_id(event_id)
        if key is None:
            return False
        return (key, wallet_address) in self._claim_index

    # ==================== Health Check ====================

    async def health_check(self) -> bool:
        return True

    # ==================== Helpers ====================

    @staticmethod
    def _newest_first(records: dict) -> list:
        """Sort by timestamp descending; later ids win ties."""
        def sort_key(item):
            record_id, record = item
            stamp = record.created_at if isinstance(record, Event) else record.claimed_at
            return stamp, record_id

        return [record for _, record in sorted(records.items(), key=sort_key, reverse=True)]

    # ==================== Development Helpers ====================

    async def clear_all(self) -> None:
        """Clear all data (for testing). Counters keep counting."""
        self._events.clear()
        self._token_claims.clear()
        self._claim_index.clear()
