"""
Test configuration and fixtures for messaging tests.

This module provides:
- Two users with an existing conversation partner relationship (alice, bob)
- API client helpers for authenticated requests
- Helpers for moving a message's created_at into the past

Usage:
    def test_example(alice_client, bob):
        response = alice_client.get(f"/api/v1/messaging/conversations/{bob.id}/messages/")
        assert response.status_code == 200
"""

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from messaging.models import Message


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    """Create the user who usually sends messages."""
    return UserFactory(name="alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    """Create the user who usually receives messages."""
    return UserFactory(name="bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    """Create a third user with no part in alice and bob's conversation."""
    return UserFactory(name="carol", email="carol@example.com")


# =============================================================================
# API Client Fixtures
# =============================================================================


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


# =============================================================================
# Time Helpers
# =============================================================================


@pytest.fixture
def age_message():
    """
    Move a message's created_at into the past.

    Usage:
        age_message(message, seconds=301)
    """

    def _age(message, seconds):
        created_at = timezone.now() - timedelta(seconds=seconds)
        Message.objects.filter(pk=message.pk).update(created_at=created_at)
        message.refresh_from_db()
        return message

    return _age
