"""Firestore storage backend for production."""

import os
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

import structlog
from google.api_core import exceptions as gcp_exceptions

from src.core.exceptions import BackendUnavailable, DuplicateClaim, InvalidReference
from src.models import Event, EventCreate, TokenClaim, TokenClaimCreate, utcnow
from src.storage.base import StorageBackend
from src.storage.identifiers import claim_key, is_valid_document_id

logger = structlog.get_logger()

# Transport failures that mean the backend is unreachable for this request
_UNAVAILABLE_ERRORS = (
    gcp_exceptions.ServiceUnavailable,
    gcp_exceptions.DeadlineExceeded,
    gcp_exceptions.RetryError,
)


def to_datetime(value: Any) -> datetime:
    """Convert a stored timestamp to a plain timezone-aware datetime."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        raise TypeError(f"Unsupported timestamp value: {value!r}")
    return datetime(
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        value.second,
        value.microsecond,
        tzinfo=value.tzinfo or timezone.utc,
    )


class FirestoreStorage(StorageBackend):
    """Firestore storage implementation for production.

    Collection structure:
    - events/{event_id}
    - token_claims/{claim_id}
    - token_claim_keys/{sha256(event_id, wallet_address)}

    Document ids are generated by Firestore. The key collection holds one
    document per (event, wallet) pair and is written in the same batch as the
    claim with create(), so a second claim for the pair fails atomically.

    Filtered listings order by timestamp and need composite indexes on
    (creator, created_at), (event_id, claimed_at) and (wallet_address, claimed_at).

    The client library only reads the emulator address from the environment, so
    a configured ``emulator_host`` is exported as FIRESTORE_EMULATOR_HOST for the
    whole process when the client is first built. A value already set wins.
    """

    name = "firestore"

    def __init__(
        self,
        project_id: str | None = None,
        client: Any | None = None,
        emulator_host: str | None = None,
        events_collection: str = "events",
        claims_collection: str = "token_claims",
        claim_keys_collection: str = "token_claim_keys",
    ) -> None:
        self._project_id = project_id
        self._emulator_host = emulator_host
        self._db = client
        self._initialized = client is not None
        self._events_collection = events_collection
        self._claims_collection = claims_collection
        self._claim_keys_collection = claim_keys_collection

    async def _ensure_initialized(self) -> None:
        """Lazy initialization of Firestore client."""
        if self._initialized:
            return

        try:
            from google.cloud import firestore

            if self._emulator_host:
                # Process-wide; other clients in this process see it too
                os.environ.setdefault("FIRESTORE_EMULATOR_HOST", self._emulator_host)
            if os.environ.get("FIRESTORE_EMULATOR_HOST"):
                logger.info("Using Firestore emulator")

            self._db = firestore.AsyncClient(project=self._project_id)
            self._initialized = True
            logger.info("Firestore client initialized", project=self._project_id)
        except Exception as e:
            logger.error("Failed to initialize Firestore", error=str(e))
            raise BackendUnavailable(
                f"Could not initialize Firestore: {e}", backend=self.name
            ) from e

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Re-raise transport failures as BackendUnavailable."""
        try:
            yield
        except _UNAVAILABLE_ERRORS as e:
            logger.error("Firestore unavailable", operation=operation, error=str(e))
            raise BackendUnavailable(
                f"Firestore unavailable during {operation}", backend=self.name
            ) from e

    def _events(self):
        return self._db.collection(self._events_collection)

    def _claims(self):
        return self._db.collection(self._claims_collection)

    def _claim_keys(self):
        return self._db.collection(self._claim_keys_collection)

    # ==================== Event Operations ====================

    async def create_event(self, data: EventCreate) -> Event:
        await self._ensure_initialized()
        ref = self._events().document()
        payload = {**data.model_dump(), "created_at": utcnow()}

        with self._translate_errors("create_event"):
            await ref.set(payload)

        logger.info("Event created", event_id=ref.id, creator=data.creator)
        return Event(**payload, id=ref.id)

    async def get_event(self, event_id: str) -> Event | None:
        if not is_valid_document_id(event_id):
            return None

        await self._ensure_initialized()
        with self._translate_errors("get_event"):
            doc = await self._events().document(event_id).get()
        if not doc.exists:
            return None
        return self._to_event(doc)

    async def get_event_by_mint_address(self, token_mint_address: str) -> Event | None:
        await self._ensure_initialized()
        query = (
            self._events()
            .where("token_mint_address", "==", token_mint_address)
            .limit(1)
        )

        with self._translate_errors("get_event_by_mint_address"):
            docs = await query.get()
        for doc in docs:
            return self._to_event(doc)
        return None

    async def get_events(self) -> list[Event]:
        await self._ensure_initialized()
        query = self._events().order_by("created_at", direction="DESCENDING")

        with self._translate_errors("get_events"):
            docs = await query.get()
        return [self._to_event(doc) for doc in docs]

    async def get_events_by_creator(self, creator_address: str) -> list[Event]:
        await self._ensure_initialized()
        query = (
            self._events()
            .where("creator", "==", creator_address)
            .order_by("created_at", direction="DESCENDING")
        )

        with self._translate_errors("get_events_by_creator"):
            docs = await query.get()
        return [self._to_event(doc) for doc in docs]

    # ==================== TokenClaim Operations ====================

    async def create_token_claim(self, data: TokenClaimCreate) -> TokenClaim:
        if not is_valid_document_id(data.event_id):
            raise InvalidReference(data.event_id)

        await self._ensure_initialized()
        claim_ref = self._claims().document()
        key_ref = self._claim_keys().document(claim_key(data.event_id, data.wallet_address))
        payload = {**data.model_dump(), "claimed_at": utcnow()}

        batch = self._db.batch()
        batch.create(claim_ref, payload)
        batch.create(key_ref, {
            "claim_id": claim_ref.id,
            "event_id": data.event_id,
            "wallet_address": data.wallet_address,
        })

        try:
            with self._translate_errors("create_token_claim"):
                await batch.commit()
        except gcp_exceptions.AlreadyExists as e:
            logger.warning(
                "Duplicate claim rejected",
                event_id=data.event_id,
                wallet_address=data.wallet_address,
            )
            raise DuplicateClaim(data.event_id, data.wallet_address) from e

        logger.info(
            "Token claimed",
            claim_id=claim_ref.id,
            event_id=data.event_id,
            wallet_address=data.wallet_address,
        )
        return TokenClaim(**payload, id=claim_ref.id)

    async def get_token_claim(self, claim_id: str) -> TokenClaim | None:
        if not is_valid_document_id(claim_id):
            return None

        await self._ensure_initialized()
        with self._translate_errors("get_token_claim"):
            doc = await self._claims().document(claim_id).get()
        if not doc.exists:
            return None
        return self._to_token_claim(doc)

    async def get_token_claims_by_event(self, event_id: str) -> list[TokenClaim]:
        if not is_valid_document_id(event_id):
            return []

        await self._ensure_initialized()
        query = (
            self._claims()
            .where("event_id", "==", event_id)
            .order_by("claimed_at", direction="DESCENDING")
        )

        with self._translate_errors("get_token_claims_by_event"):
            docs = await query.get()
        return [self._to_token_claim(doc) for doc in docs]

    async def get_token_claims_by_wallet(self, wallet_address: str) -> list[TokenClaim]:
        await self._ensure_initialized()
        query = (
            self._claims()
            .where("wallet_address", "==", wallet_address)
            .order_by("claimed_at", direction="DESCENDING")
        )

        with self._translate_errors("get_token_claims_by_wallet"):
            docs = await query.get()
        return [self._to_token_claim(doc) for doc in docs]

    async def has_wallet_claimed_token(self, event_id: str, wallet_address: str) -> bool:
        if not is_valid_document_id(event_id):
            return False

        await self._ensure_initialized()
        with self._translate_errors("has_wallet_claimed_token"):
            doc = await self._claim_keys().document(claim_key(event_id, wallet_address)).get()
        return doc.exists

    # ==================== Health Check ====================

    async def health_check(self) -> bool:
        try:
            await self._ensure_initialized()
            # Simple health check - try to access a collection
            await self._db.collection("_health").document("check").get()
            return True
        except Exception as e:
            logger.error("Firestore health check failed", error=str(e))
            return False

    # ==================== Document Mapping ====================

    @staticmethod
    def _to_event(doc) -> Event:
        data = doc.to_dict()
        return Event(
            id=doc.id,
            name=data["name"],
            description=data["description"],
            date=to_datetime(data["date"]),
            creator=data["creator"],
            token_mint_address=data["token_mint_address"],
            qr_code_data=data["qr_code_data"],
            max_attendees=data.get("max_attendees"),
            image_url=data.get("image_url"),
            created_at=to_datetime(data["created_at"]),
        )

    @staticmethod
    def _to_token_claim(doc) -> TokenClaim:
        data = doc.to_dict()
        return TokenClaim(
            id=doc.id,
            event_id=str(data["event_id"]),
            wallet_address=data["wallet_address"],
            transaction_signature=data["transaction_signature"],
            claimed_at=to_datetime(data["claimed_at"]),
        )
