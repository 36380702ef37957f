"""Pytest configuration and shared fixtures."""

from unittest.mock import patch

import pytest

from fakes import ANON_KEY, SERVICE_KEY, STORE_URL, make_store_client


@pytest.fixture
def store_settings(monkeypatch):
    """Configure both Supabase keys and a short attempt timeout."""
    from charityhub.core.config import settings

    monkeypatch.setattr(settings, "SUPABASE_URL", STORE_URL)
    monkeypatch.setattr(settings, "SUPABASE_ANON_KEY", ANON_KEY)
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", SERVICE_KEY)
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_KEY", "")
    monkeypatch.setattr(settings, "DEFAULT_UPLOAD_BUCKET", "images")
    monkeypatch.setattr(settings, "DEFAULT_UPLOAD_FOLDER", "uploads")
    monkeypatch.setattr(settings, "STORAGE_ATTEMPT_TIMEOUT_SECONDS", 2.0)
    return settings


@pytest.fixture
def unconfigured_settings(monkeypatch):
    """Remove every Supabase credential."""
    from charityhub.core.config import settings

    monkeypatch.setattr(settings, "SUPABASE_URL", "")
    monkeypatch.setattr(settings, "SUPABASE_ANON_KEY", "")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", "")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_KEY", "")
    return settings


@pytest.fixture
def store_clients():
    """Patch client creation so each key gets its own fake client.

    Tests change behavior by replacing entries of the returned dict
    before making a request.
    """
    clients = {
        SERVICE_KEY: make_store_client(),
        ANON_KEY: make_store_client(),
    }

    def fake_create_client(url, key, options=None):
        return clients[key]

    with patch(
        "charityhub.storage.supabase_store.create_client",
        side_effect=fake_create_client,
    ):
        yield clients
