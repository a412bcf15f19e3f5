"""
Invite component - Invitation email carrying a signed acceptance link.
"""

from .component import (
    ACTION_TEXT,
    INTRO_LINE,
    OUTRO_LINE,
    SUBJECT,
    DefaultInviteMessageBuilder,
    SignedInviteLinkBuilder,
    email_hash,
    render_email,
    run,
    run_accept_invite,
    run_send_invite,
)
from .models import (
    AcceptInviteInput,
    AcceptInviteOutput,
    Invitee,
    InviteMessage,
    SendInviteInput,
    SendInviteOutput,
)
from .ports import (
    EmailSenderPort,
    InviteePort,
    LinkBuilderPort,
    MessageBuilderPort,
)

__all__ = [
    # Entry points
    "run",
    "run_send_invite",
    "run_accept_invite",
    # Default strategies
    "SignedInviteLinkBuilder",
    "DefaultInviteMessageBuilder",
    "render_email",
    "email_hash",
    # Wording
    "SUBJECT",
    "INTRO_LINE",
    "ACTION_TEXT",
    "OUTRO_LINE",
    # Models
    "Invitee",
    "InviteMessage",
    "SendInviteInput",
    "SendInviteOutput",
    "AcceptInviteInput",
    "AcceptInviteOutput",
    # Ports
    "InviteePort",
    "LinkBuilderPort",
    "MessageBuilderPort",
    "EmailSenderPort",
]
