from typing import Protocol

from src.core.ports.email import EmailMessage, EmailResult

from .models import InviteMessage


class InviteePort(Protocol):
    def get_key(self) -> object: ...
    def get_email_for_verification(self) -> str: ...


class LinkBuilderPort(Protocol):
    """Strategy for building the URL placed in the invitation."""

    def build_link(self, invitee: InviteePort, ttl_seconds: int | None = None) -> str: ...


class MessageBuilderPort(Protocol):
    """Strategy for building the invitation content around the URL."""

    def build_message(self, invitee: InviteePort, url: str) -> InviteMessage: ...


class EmailSenderPort(Protocol):
    def send(self, message: EmailMessage) -> EmailResult: ...
