"""Tests for the in-memory storage backend."""

import asyncio

import pytest

from src.core.exceptions import DuplicateClaim, EventNotFound, InvalidReference, TokenClaimNotFound
from src.models import TokenClaim, TokenClaimCreate


def claim_data(event_id: str, wallet: str, signature: str = "sig") -> TokenClaimCreate:
    return TokenClaimCreate(
        event_id=event_id,
        wallet_address=wallet,
        transaction_signature=signature,
    )


@pytest.mark.asyncio
async def test_create_and_get_event(storage, event_data):
    """Created events come back unchanged with id and created_at."""
    data = event_data(max_attendees=50, image_url="https://img.test/e.png")
    event = await storage.create_event(data)

    assert event.id == "1"
    assert event.created_at is not None
    assert event.model_dump(exclude={"id", "created_at"}) == data.model_dump()

    retrieved = await storage.get_event(event.id)
    assert retrieved == event


@pytest.mark.asyncio
async def test_event_ids_increment(storage, event_data):
    """Each event gets the next counter value."""
    first = await storage.create_event(event_data(token_mint_address="m1"))
    second = await storage.create_event(event_data(token_mint_address="m2"))
    assert (first.id, second.id) == ("1", "2")

    await storage.clear_all()
    third = await storage.create_event(event_data(token_mint_address="m3"))
    assert third.id == "3"


@pytest.mark.asyncio
async def test_get_event_accepts_int_id(storage, hack_night):
    """Integer ids resolve like their string form."""
    assert await storage.get_event(int(hack_night.id)) == hack_night


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["abc", "", "-1", "0", "1.5", " 1", "١", "99"])
async def test_malformed_or_unknown_event_id_is_not_found(storage, hack_night, bad_id):
    """Ids the backend cannot parse are treated as missing."""
    assert await storage.get_event(bad_id) is None


@pytest.mark.asyncio
async def test_events_newest_first(storage, event_data):
    """Listings are sorted by created_at, newest first."""
    for i in range(5):
        await storage.create_event(event_data(token_mint_address=f"mint-{i}"))

    events = await storage.get_events()
    assert [e.id for e in events] == ["5", "4", "3", "2", "1"]
    stamps = [e.created_at for e in events]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_events_by_creator(storage, hack_night, event_data):
    """Creator filter returns only that creator's events."""
    assert await storage.get_events_by_creator("Wallet-A") == [hack_night]
    assert await storage.get_events_by_creator("Wallet-B") == []

    later = await storage.create_event(event_data(token_mint_address="mint-2"))
    assert await storage.get_events_by_creator("Wallet-A") == [later, hack_night]


@pytest.mark.asyncio
async def test_event_by_mint_address(storage, hack_night):
    """Mint address lookup finds exactly the matching event."""
    assert await storage.get_event_by_mint_address("mint-hack-night") == hack_night
    assert await storage.get_event_by_mint_address("never-minted") is None


@pytest.mark.asyncio
async def test_claim_flow(storage, hack_night):
    """A claim flips has_wallet_claimed_token and shows up in wallet listings."""
    assert await storage.has_wallet_claimed_token(hack_night.id, "Wallet-C") is False

    claim = await storage.create_token_claim(claim_data(hack_night.id, "Wallet-C", "sig1"))
    assert claim.id == "1"
    assert claim.event_id == hack_night.id
    assert claim.transaction_signature == "sig1"

    assert await storage.has_wallet_claimed_token(hack_night.id, "Wallet-C") is True
    assert await storage.get_token_claims_by_wallet("Wallet-C") == [claim]
    assert await storage.get_token_claim(claim.id) == claim
    assert await storage.get_token_claims_by_event(hack_night.id) == [claim]


@pytest.mark.asyncio
async def test_claim_is_scoped_to_event_and_wallet(storage, hack_night, event_data):
    """Claiming one event does not mark other pairs as claimed."""
    other = await storage.create_event(event_data(token_mint_address="mint-2"))
    await storage.create_token_claim(claim_data(hack_night.id, "Wallet-C"))

    assert await storage.has_wallet_claimed_token(other.id, "Wallet-C") is False
    assert await storage.has_wallet_claimed_token(hack_night.id, "Wallet-D") is False


@pytest.mark.asyncio
async def test_duplicate_claim_rejected(storage, hack_night):
    """The second claim for a pair fails and the first one stays."""
    first = await storage.create_token_claim(claim_data(hack_night.id, "Wallet-C", "sig1"))

    with pytest.raises(DuplicateClaim) as exc_info:
        await storage.create_token_claim(claim_data(hack_night.id, "Wallet-C", "sig2"))

    assert exc_info.value.code == "DUPLICATE_CLAIM"
    assert await storage.get_token_claims_by_wallet("Wallet-C") == [first]
    assert await storage.has_wallet_claimed_token(hack_night.id, "Wallet-C") is True


@pytest.mark.asyncio
async def test_concurrent_claims_only_one_succeeds(storage, hack_night):
    """Two simultaneous claims for the same pair: one wins, one is rejected."""
    results = await asyncio.gather(
        storage.create_token_claim(claim_data(hack_night.id, "Wallet-D", "sig-a")),
        storage.create_token_claim(claim_data(hack_night.id, "Wallet-D", "sig-b")),
        return_exceptions=True,
    )

    claims = [r for r in results if isinstance(r, TokenClaim)]
    errors = [r for r in results if isinstance(r, DuplicateClaim)]
    assert len(claims) == 1
    assert len(errors) == 1
    assert len(await storage.get_token_claims_by_event(hack_night.id)) == 1


@pytest.mark.asyncio
async def test_claim_with_malformed_event_id_rejected(storage):
    """No placeholder reference is invented for an unparseable event id."""
    with pytest.raises(InvalidReference):
        await storage.create_token_claim(claim_data("not-a-number", "Wallet-C"))

    assert await storage.get_token_claims_by_wallet("Wallet-C") == []


@pytest.mark.asyncio
async def test_claim_lookups_with_malformed_ids(storage, hack_night):
    """Malformed ids never raise from read operations."""
    await storage.create_token_claim(claim_data(hack_night.id, "Wallet-C"))

    assert await storage.get_token_claim("xyz") is None
    assert await storage.get_token_claims_by_event("xyz") == []
    assert await storage.has_wallet_claimed_token("xyz", "Wallet-C") is False


@pytest.mark.asyncio
async def test_claims_newest_first(storage, hack_night, event_data):
    """Claims for an event and for a wallet are listed newest first."""
    other = await storage.create_event(event_data(token_mint_address="mint-2"))
    for wallet in ("W1", "W2", "W3"):
        await storage.create_token_claim(claim_data(hack_night.id, wallet))
    await storage.create_token_claim(claim_data(other.id, "W1"))

    by_event = await storage.get_token_claims_by_event(hack_night.id)
    assert [c.wallet_address for c in by_event] == ["W3", "W2", "W1"]

    by_wallet = await storage.get_token_claims_by_wallet("W1")
    assert [c.event_id for c in by_wallet] == [other.id, hack_night.id]


@pytest.mark.asyncio
async def test_require_helpers(storage, hack_night):
    """Strict lookups raise the not-found errors."""
    assert await storage.require_event(hack_night.id) == hack_night

    with pytest.raises(EventNotFound):
        await storage.require_event("nope")
    with pytest.raises(TokenClaimNotFound):
        await storage.require_token_claim("42")


@pytest.mark.asyncio
async def test_health_check(storage):
    assert await storage.health_check() is True
