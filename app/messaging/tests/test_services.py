"""
Tests for MessageService.

This module tests:
- send_message: validation, receiver resolution, persistence, newMessage event
- edit_message: sender-only, window, text replacement, messageUpdated event
- delete_message: sender-only, window, hard delete, messageDeleted event
- Concurrent edit/delete on one message (PostgreSQL only)
- list_between: both directions, newest first, fixed page size, page clamping
- mark_read: counts, idempotency, messagesRead event

Testing Philosophy:
    Tests focus on observable behavior:
    - Returned values and raised error codes
    - Database state after the call
    - Realtime events recorded by the published_events fixture
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest
from django.db import connection
from django.utils import timezone

from core.exceptions import AuthorizationError, NotFoundError, ValidationError
from messaging.exceptions import ExpiredWindowError
from messaging.models import Message
from messaging.services import MessageService
from messaging.tests.factories import MessageFactory


# =============================================================================
# send_message
# =============================================================================


class TestSendMessage:
    """Tests for MessageService.send_message()."""

    def test_creates_unread_message(self, alice, bob):
        before = timezone.now()

        message = MessageService.send_message(alice, bob.id, "hi")

        assert message.pk is not None
        assert message.sender_id == alice.id
        assert message.receiver_id == bob.id
        assert message.text == "hi"
        assert message.read is False
        assert before <= message.created_at <= timezone.now()

    def test_new_message_is_first_in_conversation(self, alice, bob):
        MessageFactory(sender=bob, receiver=alice)

        message = MessageService.send_message(alice, bob.id, "latest")

        assert MessageService.list_between(alice, bob.id, 1)[0].id == message.id

    def test_keeps_text_exactly_as_sent(self, alice, bob):
        message = MessageService.send_message(alice, bob.id, "  indented\n")

        message.refresh_from_db()
        assert message.text == "  indented\n"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_text_is_rejected(self, alice, bob, text):
        with pytest.raises(ValidationError) as exc_info:
            MessageService.send_message(alice, bob.id, text)

        assert exc_info.value.error_code == "EMPTY_TEXT"
        assert Message.objects.count() == 0

    def test_text_at_limit_is_accepted(self, alice, bob):
        message = MessageService.send_message(alice, bob.id, "x" * 1000)

        assert len(message.text) == 1000

    def test_text_over_limit_is_rejected(self, alice, bob):
        with pytest.raises(ValidationError) as exc_info:
            MessageService.send_message(alice, bob.id, "x" * 1001)

        assert exc_info.value.error_code == "TEXT_TOO_LONG"

    def test_padding_counts_toward_limit(self, alice, bob):
        with pytest.raises(ValidationError) as exc_info:
            MessageService.send_message(alice, bob.id, " " + "x" * 1000 + " ")

        assert exc_info.value.error_code == "TEXT_TOO_LONG"
        assert Message.objects.count() == 0

    def test_unknown_receiver_is_rejected(self, alice):
        with pytest.raises(ValidationError) as exc_info:
            MessageService.send_message(alice, 999999, "hi")

        assert exc_info.value.error_code == "RECEIVER_NOT_FOUND"

    def test_message_to_self_is_rejected(self, alice):
        with pytest.raises(ValidationError) as exc_info:
            MessageService.send_message(alice, alice.id, "hi")

        assert exc_info.value.error_code == "SELF_MESSAGE"

    def test_publishes_new_message_to_both_parties(
        self, alice, bob, published_events, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            message = MessageService.send_message(alice, bob.id, "hi")

        expected = {
            "id": message.id,
            "senderId": alice.id,
            "receiverId": bob.id,
            "text": "hi",
            "createdAt": message.created_at.isoformat(),
            "read": False,
        }
        assert published_events.for_group(f"identity.{alice.id}") == [
            ("newMessage", expected)
        ]
        assert published_events.for_group(f"identity.{bob.id}") == [
            ("newMessage", expected)
        ]

    def test_rejected_send_publishes_nothing(
        self, alice, published_events, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(ValidationError):
                MessageService.send_message(alice, 999999, "hi")

        assert published_events == []

    def test_channel_layer_failure_does_not_fail_send(
        self, alice, bob, mocker, django_capture_on_commit_callbacks
    ):
        layer = mocker.MagicMock()
        layer.group_send = mocker.AsyncMock(side_effect=ConnectionError("redis down"))
        mocker.patch("realtime.hub.get_channel_layer", return_value=layer)

        with django_capture_on_commit_callbacks(execute=True):
            message = MessageService.send_message(alice, bob.id, "hi")

        assert Message.objects.filter(pk=message.pk).exists()
        assert layer.group_send.await_count == 2


# =============================================================================
# edit_message
# =============================================================================


class TestEditMessage:
    """Tests for MessageService.edit_message()."""

    @pytest.fixture
    def message(self, alice, bob):
        return MessageFactory(sender=alice, receiver=bob, text="original")

    def test_sender_can_edit_within_window(self, alice, message):
        edited = MessageService.edit_message(alice, message.id, "changed")

        message.refresh_from_db()
        assert edited.text == "changed"
        assert message.text == "changed"

    def test_edit_keeps_created_at_and_read(self, alice, message):
        Message.objects.filter(pk=message.pk).update(read=True)
        message.refresh_from_db()
        created_at = message.created_at

        MessageService.edit_message(alice, message.id, "changed")

        message.refresh_from_db()
        assert message.created_at == created_at
        assert message.read is True

    def test_receiver_cannot_edit(self, bob, message):
        with pytest.raises(AuthorizationError):
            MessageService.edit_message(bob, message.id, "hijack")

        message.refresh_from_db()
        assert message.text == "original"

    def test_edit_at_window_boundary_succeeds(self, alice, message):
        now = message.created_at + timedelta(seconds=300)

        edited = MessageService.edit_message(alice, message.id, "just in time", now=now)

        assert edited.text == "just in time"

    def test_edit_after_window_fails_and_keeps_text(
        self, alice, message, published_events, django_capture_on_commit_callbacks
    ):
        now = message.created_at + timedelta(seconds=301)

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(ExpiredWindowError):
                MessageService.edit_message(alice, message.id, "too late", now=now)

        message.refresh_from_db()
        assert message.text == "original"
        assert published_events == []

    def test_missing_message_raises_not_found(self, alice):
        with pytest.raises(NotFoundError) as exc_info:
            MessageService.edit_message(alice, 999999, "text")

        assert exc_info.value.error_code == "MESSAGE_NOT_FOUND"

    def test_blank_text_is_rejected(self, alice, message):
        with pytest.raises(ValidationError):
            MessageService.edit_message(alice, message.id, "   ")

    def test_edited_text_is_kept_exactly_as_sent(self, alice, message):
        MessageService.edit_message(alice, message.id, "\tchanged \n")

        message.refresh_from_db()
        assert message.text == "\tchanged \n"

    def test_edited_padding_counts_toward_limit(self, alice, message):
        with pytest.raises(ValidationError) as exc_info:
            MessageService.edit_message(alice, message.id, "x" * 1000 + "\n")

        assert exc_info.value.error_code == "TEXT_TOO_LONG"
        message.refresh_from_db()
        assert message.text == "original"

    def test_publishes_message_updated(
        self, alice, bob, message, published_events, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            MessageService.edit_message(alice, message.id, "changed")

        assert published_events.names() == ["messageUpdated", "messageUpdated"]
        _, data = published_events.for_group(f"identity.{bob.id}")[0]
        assert data["text"] == "changed"
        assert data["id"] == message.id


# =============================================================================
# delete_message
# =============================================================================


class TestDeleteMessage:
    """Tests for MessageService.delete_message()."""

    @pytest.fixture
    def message(self, alice, bob):
        return MessageFactory(sender=alice, receiver=bob)

    def test_sender_can_delete_within_window(self, alice, message):
        MessageService.delete_message(alice, message.id)

        assert not Message.objects.filter(pk=message.pk).exists()

    def test_receiver_cannot_delete(self, bob, message):
        with pytest.raises(AuthorizationError):
            MessageService.delete_message(bob, message.id)

        assert Message.objects.filter(pk=message.pk).exists()

    def test_delete_after_window_fails(self, alice, message):
        now = message.created_at + timedelta(seconds=301)

        with pytest.raises(ExpiredWindowError):
            MessageService.delete_message(alice, message.id, now=now)

        assert Message.objects.filter(pk=message.pk).exists()

    def test_deleting_twice_raises_not_found(self, alice, message):
        MessageService.delete_message(alice, message.id)

        with pytest.raises(NotFoundError):
            MessageService.delete_message(alice, message.id)

    def test_editing_deleted_message_raises_not_found(self, alice, message):
        MessageService.delete_message(alice, message.id)

        with pytest.raises(NotFoundError) as exc_info:
            MessageService.edit_message(alice, message.id, "too late")

        assert exc_info.value.error_code == "MESSAGE_NOT_FOUND"

    def test_publishes_message_deleted(
        self, alice, bob, message, published_events, django_capture_on_commit_callbacks
    ):
        message_id = message.id

        with django_capture_on_commit_callbacks(execute=True):
            MessageService.delete_message(alice, message_id)

        payload = {"messageId": message_id, "senderId": alice.id, "receiverId": bob.id}
        assert published_events.for_group(f"identity.{alice.id}") == [
            ("messageDeleted", payload)
        ]
        assert published_events.for_group(f"identity.{bob.id}") == [
            ("messageDeleted", payload)
        ]


@pytest.mark.django_db(transaction=True)
@pytest.mark.skipif(
    connection.vendor != "postgresql",
    reason="Row locks from select_for_update need PostgreSQL",
)
class TestConcurrentMutation:
    """
    Tests for edit and delete racing on the same message.

    Each thread uses its own connection and starts together with the
    other on a barrier, so both compete for the row lock.
    """

    @staticmethod
    def _run_together(*calls):
        barrier = threading.Barrier(len(calls))

        def run(call):
            connection.close()  # Force new connection for thread
            try:
                barrier.wait(timeout=5)
                call()
                return None
            except NotFoundError as exc:
                return exc
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=len(calls)) as executor:
            futures = [executor.submit(run, call) for call in calls]
            return [future.result() for future in futures]

    def test_two_deletes_one_succeeds_other_not_found(self, alice, bob):
        message = MessageFactory(sender=alice, receiver=bob)

        outcomes = self._run_together(
            lambda: MessageService.delete_message(alice, message.id),
            lambda: MessageService.delete_message(alice, message.id),
        )

        assert sorted(o is None for o in outcomes) == [False, True]
        [error] = [o for o in outcomes if o is not None]
        assert error.error_code == "MESSAGE_NOT_FOUND"
        assert not Message.objects.filter(pk=message.pk).exists()

    def test_edit_racing_delete_never_resurrects_message(self, alice, bob):
        message = MessageFactory(sender=alice, receiver=bob, text="original")

        delete_outcome, edit_outcome = self._run_together(
            lambda: MessageService.delete_message(alice, message.id),
            lambda: MessageService.edit_message(alice, message.id, "changed"),
        )

        # Delete always wins eventually; edit either ran first or found no row
        assert delete_outcome is None
        assert edit_outcome is None or edit_outcome.error_code == "MESSAGE_NOT_FOUND"
        assert not Message.objects.filter(pk=message.pk).exists()


# =============================================================================
# list_between
# =============================================================================


class TestListBetween:
    """Tests for MessageService.list_between()."""

    def test_includes_both_directions_newest_first(self, alice, bob):
        first = MessageFactory(sender=alice, receiver=bob)
        second = MessageFactory(sender=bob, receiver=alice)
        third = MessageFactory(sender=alice, receiver=bob)

        messages = MessageService.list_between(alice, bob.id)

        assert [m.id for m in messages] == [third.id, second.id, first.id]

    def test_excludes_other_conversations(self, alice, bob, carol):
        MessageFactory(sender=alice, receiver=carol)
        MessageFactory(sender=carol, receiver=bob)
        own = MessageFactory(sender=bob, receiver=alice)

        messages = MessageService.list_between(alice, bob.id)

        assert [m.id for m in messages] == [own.id]

    def test_thirty_messages_split_into_25_and_5(self, alice, bob):
        created = [MessageFactory(sender=alice, receiver=bob) for _ in range(30)]

        page_1 = MessageService.list_between(alice, bob.id, page=1)
        page_2 = MessageService.list_between(alice, bob.id, page=2)

        assert len(page_1) == 25
        assert len(page_2) == 5
        ids = [m.id for m in page_1 + page_2]
        assert ids == [m.id for m in reversed(created)]

    def test_page_past_end_is_empty(self, alice, bob):
        MessageFactory(sender=alice, receiver=bob)

        assert MessageService.list_between(alice, bob.id, page=2) == []

    @pytest.mark.parametrize("page", [0, -3, "abc", None])
    def test_invalid_page_is_treated_as_first(self, alice, bob, page):
        message = MessageFactory(sender=alice, receiver=bob)

        assert [m.id for m in MessageService.list_between(alice, bob.id, page)] == [
            message.id
        ]

    def test_ties_on_created_at_break_by_id(self, alice, bob):
        first = MessageFactory(sender=alice, receiver=bob)
        second = MessageFactory(sender=bob, receiver=alice)
        Message.objects.filter(pk__in=[first.pk, second.pk]).update(
            created_at=timezone.now()
        )

        messages = MessageService.list_between(alice, bob.id)

        assert [m.id for m in messages] == [second.id, first.id]


# =============================================================================
# mark_read
# =============================================================================


class TestMarkRead:
    """Tests for MessageService.mark_read()."""

    def test_marks_partner_messages_to_reader(self, alice, bob):
        MessageFactory(sender=alice, receiver=bob)
        MessageFactory(sender=alice, receiver=bob)

        count = MessageService.mark_read(bob, alice.id)

        assert count == 2
        assert not Message.objects.filter(receiver=bob, read=False).exists()

    def test_does_not_touch_readers_own_messages(self, alice, bob):
        own = MessageFactory(sender=bob, receiver=alice)

        MessageService.mark_read(bob, alice.id)

        own.refresh_from_db()
        assert own.read is False

    def test_does_not_touch_other_partners(self, alice, bob, carol):
        other = MessageFactory(sender=carol, receiver=bob)

        MessageService.mark_read(bob, alice.id)

        other.refresh_from_db()
        assert other.read is False

    def test_is_idempotent(self, alice, bob):
        MessageFactory(sender=alice, receiver=bob)

        assert MessageService.mark_read(bob, alice.id) == 1
        assert MessageService.mark_read(bob, alice.id) == 0

    def test_publishes_messages_read_to_both(
        self, alice, bob, published_events, django_capture_on_commit_callbacks
    ):
        MessageFactory(sender=alice, receiver=bob)

        with django_capture_on_commit_callbacks(execute=True):
            MessageService.mark_read(bob, alice.id)

        payload = {"by": bob.id, "count": 1}
        assert published_events.for_group(f"identity.{bob.id}") == [
            ("messagesRead", payload)
        ]
        assert published_events.for_group(f"identity.{alice.id}") == [
            ("messagesRead", payload)
        ]

    def test_nothing_to_read_publishes_nothing(
        self, alice, bob, published_events, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            assert MessageService.mark_read(bob, alice.id) == 0

        assert published_events == []
