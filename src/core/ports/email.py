"""
Email Adapter Interface.

Protocol-based "send message" collaborator used to deliver invitation
emails. Rendering of the message happens before it reaches this port;
delivery happens behind it.

Key requirements:
- Stateless send operation
- Support HTML and plain text body
- Never raise on delivery problems; report them in EmailResult

Implementation strategies:
1. DevEmailAdapter: Logs emails and keeps them in memory (dev/test)
2. SMTP / provider API adapters: deployment specific, not shipped here
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EmailStatus(Enum):
    """Email send result status."""

    SENT = "sent"
    QUEUED = "queued"  # Accepted by provider, not delivered yet
    FAILED = "failed"
    SKIPPED = "skipped"  # Dev adapter or dry-run


# --- Error Types ---


class EmailError(Exception):
    """Base exception for email-related errors."""


class EmailValidationError(EmailError, ValueError):
    """Invalid email address or message format."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


@dataclass(frozen=True)
class EmailAddress:
    """
    Email address with optional display name.

    Examples:
        EmailAddress("user@example.com")
        EmailAddress("user@example.com", "Ada Lovelace")
    """

    email: str
    name: str | None = None

    def __str__(self) -> str:
        """Format as RFC 5322 address."""
        if self.name:
            safe_name = self.name.replace('"', '\\"')
            return f'"{safe_name}" <{self.email}>'
        return self.email


@dataclass(frozen=True)
class EmailMessage:
    """Rendered email message ready to hand to a transport."""

    recipient: EmailAddress
    subject: str
    body_html: str
    body_text: str
    sender: EmailAddress | None = None  # None = use default sender

    def __post_init__(self) -> None:
        if not self.recipient.email or "@" not in self.recipient.email:
            raise EmailValidationError("Recipient email is required", field="recipient")
        if not self.subject:
            raise EmailValidationError("Subject is required", field="subject")
        if not self.body_html and not self.body_text:
            raise EmailValidationError(
                "At least one of body_html or body_text is required", field="body"
            )


@dataclass
class EmailResult:
    """Result of an email send attempt."""

    status: EmailStatus
    message_id: str | None = None  # Provider's message ID
    error: str | None = None
    recipient: str = ""

    @property
    def ok(self) -> bool:
        return self.status != EmailStatus.FAILED

    @classmethod
    def skipped(
        cls,
        recipient: str,
        message_id: str | None = None,
        reason: str = "Dev mode - email logged, not sent",
    ) -> EmailResult:
        return cls(
            status=EmailStatus.SKIPPED,
            message_id=message_id,
            recipient=recipient,
            error=reason,
        )

    @classmethod
    def failed(cls, recipient: str, error: str) -> EmailResult:
        return cls(
            status=EmailStatus.FAILED,
            recipient=recipient,
            error=error,
        )


class EmailPort(Protocol):
    """
    Email sending interface.

    Implementations:
    - DevEmailAdapter: Logs to console (dev/test)
    """

    def send(self, message: EmailMessage) -> EmailResult:
        """
        Send an email message.

        Args:
            message: Complete email message

        Returns:
            EmailResult with send outcome

        Notes:
            - Must not raise exceptions; return failed status instead
        """
        ...
