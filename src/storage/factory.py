"""Selection of the active storage backend."""

import structlog

from src.core.config import Settings, settings as default_settings
from src.core.exceptions import ConfigurationError
from src.storage.base import StorageBackend
from src.storage.memory import InMemoryStorage

logger = structlog.get_logger()

# Storage singleton
_storage: StorageBackend | None = None


def create_storage(settings: Settings) -> StorageBackend:
    """Build the backend named by the settings."""
    if settings.storage_backend == "firestore":
        if not settings.gcp_project_id:
            raise ConfigurationError(
                "GCP_PROJECT_ID is required for the firestore storage backend",
                details={"storage_backend": settings.storage_backend},
            )
        from src.storage.firestore import FirestoreStorage

        return FirestoreStorage(
            project_id=settings.gcp_project_id,
            emulator_host=settings.firestore_emulator_host,
            events_collection=settings.firestore_events_collection,
            claims_collection=settings.firestore_claims_collection,
            claim_keys_collection=settings.firestore_claim_keys_collection,
        )
    return InMemoryStorage()


def get_storage(settings: Settings | None = None) -> StorageBackend:
    """Get the storage backend singleton.

    The backend is chosen on first call and stays fixed for the life of the
    process.
    """
    global _storage
    if _storage is None:
        settings = settings or default_settings
        _storage = create_storage(settings)
        logger.info(
            "Storage backend selected",
            backend=_storage.name,
            environment=settings.app_env,
        )
        if settings.is_production and isinstance(_storage, InMemoryStorage):
            logger.warning("In-memory storage in production, data is lost on restart")
    return _storage


def reset_storage() -> None:
    """Drop the singleton (for testing)."""
    global _storage
    _storage = None
