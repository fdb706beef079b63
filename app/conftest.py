"""
App-level pytest configuration.

This module applies test-only settings overrides, auto-marks tests by
file name, and provides fixtures shared by every app:
- Channel layer, cache and password hasher swapped for in-process versions
- published_events: records realtime publishes without a channel layer
"""

import pytest
from django.conf import settings


def pytest_configure():
    """Apply test-only settings after Django is set up."""
    # Disable throttling during tests to prevent rate limit failures
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    # Use fast password hasher for tests (PBKDF2 is too slow with 870K iterations)
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]

    # Test client speaks plain HTTP
    settings.SECURE_SSL_REDIRECT = False

    # No Redis in tests
    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
    }
    settings.SESSION_ENGINE = "django.contrib.sessions.backends.db"
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
    }


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full user journey workflows)
    - test_views.py, test_services.py, test_consumers.py, etc. → integration
    - test_models.py, test_authorization.py, test_managers.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_consumers.py",
        "test_middleware.py",
        "test_chat_list.py",
        "test_hub.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_managers.py",
        "test_authorization.py",
        "test_groups.py",
        "test_exceptions.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = item.path.name

        # Check patterns in priority order
        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)


def _patch_postgresql_flush_for_cascade():
    """
    Patch PostgreSQL flush to always use CASCADE.

    Transactional tests (WebSocket consumers) flush the database with
    TRUNCATE, which fails on foreign key constraints without CASCADE.
    """
    from django.db.backends.postgresql import operations

    original_sql_flush = operations.DatabaseOperations.sql_flush

    def sql_flush_with_cascade(
        self, style, tables, *, reset_sequences=False, allow_cascade=False
    ):
        # Force CASCADE for PostgreSQL to handle FK constraints
        return original_sql_flush(
            self, style, tables, reset_sequences=reset_sequences, allow_cascade=True
        )

    operations.DatabaseOperations.sql_flush = sql_flush_with_cascade


# Apply the patch when conftest is loaded
_patch_postgresql_flush_for_cascade()


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_channel_layers():
    """Drop in-memory channel layer state between tests."""
    from channels.layers import channel_layers

    yield
    channel_layers.backends.clear()


class PublishedEvents(list):
    """Realtime publishes recorded as (group, event, data) tuples."""

    def for_group(self, group):
        return [(event, data) for g, event, data in self if g == group]

    def names(self):
        return [event for _, event, _ in self]


@pytest.fixture
def published_events(mocker):
    """
    Record every realtime publish instead of sending it.

    Patches the channel layer seen by realtime.hub with a mock whose
    group_send appends to the returned list.

    Usage:
        def test_send(published_events, django_capture_on_commit_callbacks):
            with django_capture_on_commit_callbacks(execute=True):
                MessageService.send_message(alice, bob.id, "hi")
            assert published_events.names() == ["newMessage", "newMessage"]
    """
    events = PublishedEvents()

    async def group_send(group, message):
        events.append((group, message["event"], message["data"]))

    layer = mocker.MagicMock()
    layer.group_send = group_send
    mocker.patch("realtime.hub.get_channel_layer", return_value=layer)
    return events
