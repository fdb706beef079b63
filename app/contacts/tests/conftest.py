"""
Test configuration and fixtures for contacts tests.

This module provides:
- Three users (alice owns contacts, bob and carol are targets)
- API clients authenticated as alice and bob
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory


@pytest.fixture
def alice(db):
    return UserFactory(name="alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    return UserFactory(name="bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    return UserFactory(name="carol", email="carol@example.com")


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def alice_client(alice):
    """API client authenticated as alice."""
    return _client_for(alice)


@pytest.fixture
def bob_client(bob):
    """API client authenticated as bob."""
    return _client_for(bob)


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()
