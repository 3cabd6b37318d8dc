"""Tests for settings, backend selection and logging setup."""

import pytest
import structlog

from src.core.config import Settings
from src.core.exceptions import ConfigurationError
from src.core.logging import configure_logging
from src.storage import InMemoryStorage, create_storage, get_storage, reset_storage
from src.storage.firestore import FirestoreStorage


class TestBackendSelection:
    """The active backend comes from settings, once."""

    def setup_method(self):
        """Reset singleton before each test."""
        reset_storage()

    def teardown_method(self):
        reset_storage()

    def test_memory_is_default(self):
        assert isinstance(create_storage(Settings(_env_file=None)), InMemoryStorage)

    def test_firestore_selected(self):
        settings = Settings(
            _env_file=None,
            storage_backend="firestore",
            gcp_project_id="demo-project",
            firestore_events_collection="pop_events",
        )
        storage = create_storage(settings)
        assert isinstance(storage, FirestoreStorage)
        assert storage._events_collection == "pop_events"

    def test_firestore_requires_project(self):
        with pytest.raises(ConfigurationError):
            create_storage(Settings(_env_file=None, storage_backend="firestore", gcp_project_id=""))

    def test_singleton_is_fixed(self):
        first = get_storage(Settings(_env_file=None))
        second = get_storage(
            Settings(_env_file=None, storage_backend="firestore", gcp_project_id="x")
        )
        assert first is second
        assert isinstance(second, InMemoryStorage)

    def test_env_selects_backend(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "firestore")
        monkeypatch.setenv("GCP_PROJECT_ID", "from-env")
        settings = Settings(_env_file=None)
        assert settings.storage_backend == "firestore"
        assert settings.gcp_project_id == "from-env"


@pytest.mark.parametrize("log_format", ["json", "text"])
def test_configure_logging(log_format):
    configure_logging(Settings(_env_file=None, log_format=log_format, log_level="debug"))
    logger = structlog.get_logger("test")
    logger.info("configured", log_format=log_format)
    assert structlog.is_configured()
    structlog.reset_defaults()
