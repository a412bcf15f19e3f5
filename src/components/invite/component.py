"""
Invite component - Invitation email with a signed, expiring acceptance link.

Link and message construction are strategies injected by the caller;
the defaults sign {id, hash} with the SignedLinkService and produce the
standard invitation wording.

Key behaviors:
- hash is the SHA-1 hex digest of the invitee's email
- Email delivery problems are reported in the output, never raised
- Acceptance failures carry the specific verification error code
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from collections.abc import Callable

from src.components.signed_links import SignedLinkError, SignedLinkService
from src.core.ports.email import EmailAddress, EmailMessage

from .models import (
    AcceptInviteInput,
    AcceptInviteOutput,
    Invitee,
    InviteMessage,
    SendInviteInput,
    SendInviteOutput,
)
from .ports import EmailSenderPort, InviteePort, LinkBuilderPort, MessageBuilderPort

logger = logging.getLogger(__name__)

SUBJECT = "You have a new invitation."
INTRO_LINE = "Please click the button below to confirm the invitation."
ACTION_TEXT = "Accept the Invitation"
OUTRO_LINE = "If you did not want to accept the invitation, no further action is required."

EMAIL_MISMATCH = "email_mismatch"


def email_hash(email: str) -> str:
    return hashlib.sha1(email.encode()).hexdigest()


def _identity(text: str) -> str:
    return text


# --- Default Strategies ---


class SignedInviteLinkBuilder:
    """Builds {id, hash} links signed by the SignedLinkService."""

    def __init__(self, service: SignedLinkService, ttl_seconds: int | None = None) -> None:
        self.service = service
        self.ttl_seconds = ttl_seconds

    def build_link(self, invitee: InviteePort, ttl_seconds: int | None = None) -> str:
        params = {
            "id": str(invitee.get_key()),
            "hash": email_hash(invitee.get_email_for_verification()),
        }
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        return self.service.generate(params, ttl)


class DefaultInviteMessageBuilder:
    """Standard invitation wording; translate maps each text to the reader's language."""

    def __init__(self, translate: Callable[[str], str] | None = None) -> None:
        self.translate = translate or _identity

    def build_message(self, invitee: InviteePort, url: str) -> InviteMessage:
        t = self.translate
        return InviteMessage(
            subject=t(SUBJECT),
            intro_lines=(t(INTRO_LINE),),
            action_text=t(ACTION_TEXT),
            action_url=url,
            outro_lines=(t(OUTRO_LINE),),
        )


def render_email(
    invitee: Invitee,
    message: InviteMessage,
    sender: EmailAddress | None = None,
) -> EmailMessage:
    return EmailMessage(
        recipient=EmailAddress(invitee.email, invitee.name),
        subject=message.subject,
        body_html=message.render_html(),
        body_text=message.render_text(),
        sender=sender,
    )


# --- Entry Points ---


def run_send_invite(
    inp: SendInviteInput,
    *,
    link_builder: LinkBuilderPort,
    message_builder: MessageBuilderPort,
    email: EmailSenderPort,
    sender: EmailAddress | None = None,
) -> SendInviteOutput:
    """
    Build the acceptance link and the invitation message, then send it.

    Link generation errors (e.g. a reserved parameter) propagate; they are
    programming errors, not delivery outcomes.
    """
    url = link_builder.build_link(inp.invitee, inp.ttl_seconds)
    message = message_builder.build_message(inp.invitee, url)
    result = email.send(render_email(inp.invitee, message, sender))

    if not result.ok:
        logger.warning("Invitation to invitee %s not delivered: %s", inp.invitee.id, result.error)
        return SendInviteOutput(
            url=url,
            status=result.status,
            success=False,
            error=result.error or "Email delivery failed",
        )

    logger.info("Invitation sent to invitee %s", inp.invitee.id)
    return SendInviteOutput(
        url=url,
        message_id=result.message_id,
        status=result.status,
        success=True,
    )


def run_accept_invite(inp: AcceptInviteInput, *, service: SignedLinkService) -> AcceptInviteOutput:
    try:
        params = service.verify(inp.url)
    except SignedLinkError as e:
        return AcceptInviteOutput(success=False, error=e.message, error_code=e.code)

    invitee_id = params.get("id")
    presented_hash = params.get("hash")
    if not invitee_id or not presented_hash:
        return AcceptInviteOutput(
            success=False,
            error="Invitation link is missing the invitee",
            error_code="invalid_parameter",
        )

    if inp.expected_email is not None:
        expected = email_hash(inp.expected_email)
        if not hmac.compare_digest(expected.encode(), presented_hash.encode()):
            return AcceptInviteOutput(
                success=False,
                error="Invitation was issued for a different email address",
                error_code=EMAIL_MISMATCH,
            )

    return AcceptInviteOutput(
        invitee_id=invitee_id,
        email_hash=presented_hash,
        params=params,
        success=True,
    )


def run(
    inp: SendInviteInput | AcceptInviteInput,
    *,
    service: SignedLinkService,
    email: EmailSenderPort | None = None,  # Only needed for send
    link_builder: LinkBuilderPort | None = None,
    message_builder: MessageBuilderPort | None = None,
    sender: EmailAddress | None = None,
) -> SendInviteOutput | AcceptInviteOutput:
    if isinstance(inp, SendInviteInput):
        assert email
        return run_send_invite(
            inp,
            link_builder=link_builder or SignedInviteLinkBuilder(service),
            message_builder=message_builder or DefaultInviteMessageBuilder(),
            email=email,
            sender=sender,
        )

    elif isinstance(inp, AcceptInviteInput):
        return run_accept_invite(inp, service=service)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
