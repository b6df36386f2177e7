"""Pytest fixtures for the barbershop booking API tests."""

import os

# Keep test runs from writing app.log or serving a local build
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("PUBLIC_DIR", os.path.join(os.path.dirname(__file__), "no_public_dir"))

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from barberbook.infrastructure.config.settings import GoogleOAuthCredentials
from barberbook.infrastructure.persistence.supabase_service import SupabaseService
from barberbook.main import app
from barberbook.presentation.api.dependencies import get_google_oauth, get_store


@pytest.fixture
def shop_row():
    """Shop as returned by the barbearias table."""
    return {
        "id": "shop-1",
        "nome": "Barbearia do Zé",
        "intervalo": 30,
        "fuso_horario": "America/Sao_Paulo",
    }


@pytest.fixture
def mock_store(shop_row):
    """A SupabaseService double whose async methods are AsyncMocks."""
    store = MagicMock(spec=SupabaseService)
    store.get_shop.return_value = shop_row
    store.list_shops.return_value = [shop_row]
    store.get_opening_hours.return_value = []
    store.find_overlapping_appointments.return_value = []
    store.find_client_by_email.return_value = None
    store.create_client.return_value = {"id": 7}
    store.insert_appointment.side_effect = lambda data: {"id": 99, **data}
    store.get_google_tokens.return_value = None
    return store


@pytest.fixture
def google_oauth():
    return GoogleOAuthCredentials(
        client_id="mock_client_id",
        client_secret="mock_client_secret",
        redirect_uri="http://localhost:5000/api/auth/google/callback",
    )


@pytest.fixture
def client(mock_store, google_oauth):
    app.dependency_overrides[get_store] = lambda: mock_store
    app.dependency_overrides[get_google_oauth] = lambda: google_oauth
    yield TestClient(app)
    app.dependency_overrides.clear()
