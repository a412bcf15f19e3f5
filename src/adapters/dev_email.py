"""
Dev Email Adapter.

Logs emails instead of sending them. Used for local development, the CLI
and tests.

Key behaviors:
- Logs recipient, subject and a body preview
- Returns SKIPPED status (not SENT)
- Keeps the most recent emails in memory for test assertions (bounded)
- Can simulate delivery failure for selected recipients
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from src.core.ports.email import EmailAddress, EmailMessage, EmailResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_STORED = 100


@dataclass
class SentEmail:
    """Record of a logged email for test assertions."""

    id: str
    recipient: str
    subject: str
    body_html: str
    body_text: str
    sender: str | None
    logged_at: datetime


@dataclass
class DevEmailAdapter:
    """
    Dev email adapter that logs instead of sending.

    Implements EmailPort.
    """

    default_sender: EmailAddress | None = None
    log_level: int = logging.INFO
    log_body: bool = True
    body_preview_length: int = 100
    # Recipients whose sends report FAILED
    fail_for: set[str] = field(default_factory=set)
    # Oldest records are dropped beyond this; 0 keeps nothing
    max_stored: int = DEFAULT_MAX_STORED

    sent_emails: deque[SentEmail] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.sent_emails = deque(maxlen=self.max_stored)

    def send(self, message: EmailMessage) -> EmailResult:
        recipient = message.recipient.email
        if recipient in self.fail_for:
            logger.warning("EMAIL (dev): simulated failure for %s", recipient)
            return EmailResult.failed(recipient, "Simulated delivery failure")

        sender = message.sender or self.default_sender
        message_id = f"dev-{uuid4().hex[:12]}"

        self.sent_emails.append(
            SentEmail(
                id=message_id,
                recipient=recipient,
                subject=message.subject,
                body_html=message.body_html,
                body_text=message.body_text,
                sender=str(sender) if sender else None,
                logged_at=datetime.now(UTC),
            )
        )
        self._log_email(message, message_id, sender)

        return EmailResult.skipped(recipient, message_id=message_id)

    def _log_email(
        self,
        message: EmailMessage,
        message_id: str,
        sender: EmailAddress | None,
    ) -> None:
        parts = [
            f"EMAIL (dev): To={message.recipient}",
            f"Subject={message.subject}",
        ]

        if sender:
            parts.append(f"From={sender}")

        body = message.body_text or message.body_html
        if self.log_body and body:
            preview = body[: self.body_preview_length]
            if len(body) > self.body_preview_length:
                preview += "..."
            parts.append(f"Body={preview}")

        parts.append(f"MessageID={message_id}")
        logger.log(self.log_level, ", ".join(parts))

    # --- Test Helper Methods ---

    def get_last_email(self) -> SentEmail | None:
        return self.sent_emails[-1] if self.sent_emails else None

    def get_emails_to(self, recipient: str) -> list[SentEmail]:
        return [e for e in self.sent_emails if e.recipient == recipient]

    def clear(self) -> None:
        self.sent_emails.clear()

    @property
    def email_count(self) -> int:
        return len(self.sent_emails)


def create_dev_email_adapter(
    default_sender: EmailAddress | None = None,
    log_level: int = logging.INFO,
    log_body: bool = True,
    max_stored: int = DEFAULT_MAX_STORED,
) -> DevEmailAdapter:
    return DevEmailAdapter(
        default_sender=default_sender,
        log_level=log_level,
        log_body=log_body,
        max_stored=max_stored,
    )
