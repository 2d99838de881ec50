# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase singleton for an in-memory fake for every test
# - Provides helpers for signing up users and building auth headers
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-secret-key-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from lib.supabase_client import SupabaseClient
from tests.fake_supabase import FakeSupabaseClient


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fake_db():
    """In-memory database installed as the Supabase singleton."""
    db = FakeSupabaseClient()
    SupabaseClient._instance = db
    yield db
    SupabaseClient.reset_client()


@pytest.fixture
def settings():
    """The cached application settings."""
    return get_settings()


@pytest.fixture
def client():
    """TestClient for the app. Server exceptions are returned, not raised."""
    from app.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def user_payload():
    """Valid signup body."""
    return {
        "name": "Al",
        "avatar": "http://x.com/a.png",
        "email": "a@a.com",
        "password": "password1",
    }


@pytest.fixture
def signup(client):
    """Sign up a user and return the response body."""

    def _signup(**overrides):
        body = {
            "name": "Al",
            "avatar": "http://x.com/a.png",
            "email": "a@a.com",
            "password": "password1",
            **overrides,
        }
        response = client.post("/signup", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _signup


@pytest.fixture
def login(client, signup):
    """Sign up (if needed) and sign in; returns (user_id, auth headers)."""

    def _login(email="a@a.com", password="password1", name="Al"):
        signup(email=email, password=password, name=name)
        response = client.post("/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return body["_id"], {"Authorization": f"Bearer {body['token']}"}

    return _login


@pytest.fixture
def item_payload():
    """Valid clothing item body."""
    return {
        "name": "Beanie",
        "weather": "cold",
        "imageUrl": "https://example.com/beanie.png",
    }
