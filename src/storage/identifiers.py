"""Identifier translation between backends and the rest of the application.

Record identifiers are plain strings everywhere outside the storage layer. Each
backend decides which strings it can parse; anything it cannot parse is treated
as an identifier that matches nothing.
"""

import hashlib
import re

# Firestore document id limits
MAX_DOCUMENT_ID_BYTES = 1500
_RESERVED_DOCUMENT_ID = re.compile(r"^__.*__$")


def parse_int_id(value: str | int) -> int | None:
    """Parse an auto-increment id, returning None for anything malformed."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if not isinstance(value, str) or not value.isascii() or not value.isdigit():
        return None
    parsed = int(value)
    return parsed if parsed > 0 else None


def is_valid_document_id(value: str) -> bool:
    """Check whether a string can be used as a Firestore document id."""
    if not isinstance(value, str) or not value:
        return False
    if len(value.encode("utf-8")) > MAX_DOCUMENT_ID_BYTES:
        return False
    if "/" in value or value in (".", ".."):
        return False
    return not _RESERVED_DOCUMENT_ID.match(value)


def claim_key(event_id: str, wallet_address: str) -> str:
    """Deterministic key for the (event, wallet) pair a claim belongs to."""
    raw = f"{event_id}\x00{wallet_address}".encode("utf-8")
    return hashlib.sha256(raw).hexdigest()
