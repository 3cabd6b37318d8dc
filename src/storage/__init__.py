"""Storage layer - Firestore and in-memory implementations."""

from src.storage.base import StorageBackend
from src.storage.factory import create_storage, get_storage, reset_storage
from src.storage.memory import InMemoryStorage

__all__ = [
    "StorageBackend",
    "InMemoryStorage",
    "create_storage",
    "get_storage",
    "reset_storage",
]
