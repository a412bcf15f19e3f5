"""
Unit tests for DevEmailAdapter and the email port models.

Tests cover:
1. send() with EmailMessage
2. Status is SKIPPED (not SENT)
3. Email storage for test assertions
4. Simulated failures
5. Message validation
"""

import logging

import pytest

from src.adapters.dev_email import (
    DevEmailAdapter,
    SentEmail,
    create_dev_email_adapter,
)
from src.core.ports.email import (
    EmailAddress,
    EmailMessage,
    EmailResult,
    EmailStatus,
    EmailValidationError,
)


def _message(
    recipient: str = "user@example.com",
    subject: str = "Test Subject",
    body_text: str = "Text body",
    body_html: str = "<p>HTML body</p>",
    sender: EmailAddress | None = None,
) -> EmailMessage:
    return EmailMessage(
        recipient=EmailAddress(recipient),
        subject=subject,
        body_html=body_html,
        body_text=body_text,
        sender=sender,
    )


class TestDevEmailAdapterSend:
    """Tests for send()."""

    def test_send_returns_skipped_status(self) -> None:
        adapter = DevEmailAdapter()

        result = adapter.send(_message())

        assert isinstance(result, EmailResult)
        assert result.status == EmailStatus.SKIPPED
        assert result.ok is True

    def test_send_includes_message_id(self) -> None:
        adapter = DevEmailAdapter()

        result = adapter.send(_message())

        assert result.message_id is not None
        assert result.message_id.startswith("dev-")

    def test_send_includes_recipient_and_dev_reason(self) -> None:
        adapter = DevEmailAdapter()

        result = adapter.send(_message())

        assert result.recipient == "user@example.com"
        assert result.error is not None
        assert "dev" in result.error.lower()

    def test_send_stores_email(self) -> None:
        adapter = DevEmailAdapter()

        adapter.send(_message())

        assert len(adapter.sent_emails) == 1
        email = adapter.sent_emails[0]
        assert isinstance(email, SentEmail)
        assert email.recipient == "user@example.com"
        assert email.subject == "Test Subject"
        assert email.body_html == "<p>HTML body</p>"
        assert email.body_text == "Text body"

    def test_send_uses_message_sender(self) -> None:
        adapter = DevEmailAdapter(default_sender=EmailAddress("noreply@example.com"))

        adapter.send(_message(sender=EmailAddress("team@example.com", "Team")))

        email = adapter.get_last_email()
        assert email is not None
        assert email.sender == '"Team" <team@example.com>'

    def test_send_falls_back_to_default_sender(self) -> None:
        adapter = DevEmailAdapter(default_sender=EmailAddress("noreply@example.com"))

        adapter.send(_message())

        email = adapter.get_last_email()
        assert email is not None
        assert email.sender == "noreply@example.com"

    def test_send_without_any_sender(self) -> None:
        adapter = DevEmailAdapter()

        adapter.send(_message())

        email = adapter.get_last_email()
        assert email is not None
        assert email.sender is None

    def test_simulated_failure(self) -> None:
        adapter = DevEmailAdapter(fail_for={"bounce@example.com"})

        result = adapter.send(_message(recipient="bounce@example.com"))

        assert result.status == EmailStatus.FAILED
        assert result.ok is False
        assert adapter.email_count == 0


class TestDevEmailAdapterStorage:
    def test_get_last_email_empty(self) -> None:
        adapter = DevEmailAdapter()
        assert adapter.get_last_email() is None

    def test_get_emails_to_recipient(self) -> None:
        adapter = DevEmailAdapter()

        adapter.send(_message(recipient="a@example.com"))
        adapter.send(_message(recipient="b@example.com"))
        adapter.send(_message(recipient="a@example.com", subject="Second"))

        emails = adapter.get_emails_to("a@example.com")
        assert [e.subject for e in emails] == ["Test Subject", "Second"]

    def test_clear_emails(self) -> None:
        adapter = DevEmailAdapter()
        adapter.send(_message())
        adapter.send(_message())

        assert adapter.email_count == 2
        adapter.clear()
        assert adapter.email_count == 0

    def test_storage_is_bounded(self) -> None:
        adapter = DevEmailAdapter(max_stored=3)

        for i in range(50):
            adapter.send(_message(subject=f"Invite {i}"))

        assert adapter.email_count == 3
        assert [e.subject for e in adapter.sent_emails] == ["Invite 47", "Invite 48", "Invite 49"]

    def test_zero_max_stored_keeps_nothing(self) -> None:
        adapter = create_dev_email_adapter(max_stored=0)

        result = adapter.send(_message())

        assert result.status == EmailStatus.SKIPPED
        assert adapter.email_count == 0
        assert adapter.get_last_email() is None


class TestDevEmailAdapterLogging:
    def test_logs_email_at_configured_level(self, caplog: pytest.LogCaptureFixture) -> None:
        adapter = DevEmailAdapter(log_level=logging.WARNING)

        with caplog.at_level(logging.WARNING, logger="src.adapters.dev_email"):
            adapter.send(_message())

        assert "EMAIL (dev)" in caplog.text
        assert "user@example.com" in caplog.text

    def test_logs_truncated_text_preview(self, caplog: pytest.LogCaptureFixture) -> None:
        adapter = DevEmailAdapter(body_preview_length=10)

        with caplog.at_level(logging.INFO, logger="src.adapters.dev_email"):
            adapter.send(_message(body_text="0123456789abcdef"))

        assert "Body=0123456789..." in caplog.text
        assert "abcdef" not in caplog.text

    def test_logs_without_body(self, caplog: pytest.LogCaptureFixture) -> None:
        adapter = create_dev_email_adapter(log_body=False)

        with caplog.at_level(logging.INFO, logger="src.adapters.dev_email"):
            adapter.send(_message(body_text="secret-ish body"))

        assert "secret-ish body" not in caplog.text


class TestEmailMessageValidation:
    def test_recipient_required(self) -> None:
        with pytest.raises(EmailValidationError) as exc_info:
            _message(recipient="")
        assert exc_info.value.field == "recipient"

    def test_subject_required(self) -> None:
        with pytest.raises(EmailValidationError):
            _message(subject="")

    def test_some_body_required(self) -> None:
        with pytest.raises(ValueError):
            _message(body_text="", body_html="")

    def test_address_formatting_escapes_quotes(self) -> None:
        address = EmailAddress("ada@example.com", 'Ada "The Countess"')
        assert str(address) == '"Ada \\"The Countess\\"" <ada@example.com>'
