"""
Invitation Routes.

Sends invitation emails and checks the signed links they carry.

Key behaviors:
- Verification failures map to distinct HTTP statuses:
  400 malformed / missing expiration, 403 invalid signature, 410 expired
- Error bodies carry a stable code: {"detail": {"code", "message"}}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import get_config, get_email_adapter, get_link_service
from src.api.schemas import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    InviteRequest,
    InviteResponse,
    VerifyLinkRequest,
    VerifyLinkResponse,
)
from src.components.invite import (
    AcceptInviteInput,
    DefaultInviteMessageBuilder,
    Invitee,
    SendInviteInput,
    SignedInviteLinkBuilder,
    run_accept_invite,
    run_send_invite,
)
from src.components.signed_links import (
    InvalidParameterError,
    SignedLinkService,
    VerifyLinkInput,
    run_verify,
)
from src.core.ports.email import EmailPort
from src.rules.models import LinkConfig

router = APIRouter()

ERROR_STATUS = {
    "malformed_url": status.HTTP_400_BAD_REQUEST,
    "missing_expiration": status.HTTP_400_BAD_REQUEST,
    "invalid_parameter": status.HTTP_400_BAD_REQUEST,
    "invalid_signature": status.HTTP_403_FORBIDDEN,
    "email_mismatch": status.HTTP_403_FORBIDDEN,
    "link_expired": status.HTTP_410_GONE,
}


def _error(code: str | None, message: str | None) -> HTTPException:
    code = code or "invalid_link"
    return HTTPException(
        status_code=ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST),
        detail={"code": code, "message": message or "Invalid link"},
    )


@router.post("", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
def send_invitation(
    body: InviteRequest,
    service: SignedLinkService = Depends(get_link_service),
    email: EmailPort = Depends(get_email_adapter),
    config: LinkConfig = Depends(get_config),
) -> InviteResponse:
    """Email an invitation carrying a signed acceptance link."""
    invitee = Invitee(id=body.invitee_id, email=body.email, name=body.name)

    try:
        out = run_send_invite(
            SendInviteInput(invitee=invitee, ttl_seconds=body.ttl_seconds),
            link_builder=SignedInviteLinkBuilder(service),
            message_builder=DefaultInviteMessageBuilder(),
            email=email,
            sender=config.mail.sender(),
        )
    except InvalidParameterError as e:
        raise _error(e.code, e.message) from e

    if not out.success or out.url is None or out.status is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "delivery_failed", "message": out.error or "Email delivery failed"},
        )

    return InviteResponse(url=out.url, status=out.status, message_id=out.message_id)


@router.post("/verify", response_model=VerifyLinkResponse)
def verify_link(
    body: VerifyLinkRequest,
    service: SignedLinkService = Depends(get_link_service),
) -> VerifyLinkResponse:
    """Check a presented link's signature and expiry."""
    out = run_verify(VerifyLinkInput(url=body.url), service)
    if not out.success or out.params is None:
        raise _error(out.error_code, out.error)

    return VerifyLinkResponse(params=out.params)


@router.post("/accept", response_model=AcceptInviteResponse)
def accept_invitation(
    body: AcceptInviteRequest,
    service: SignedLinkService = Depends(get_link_service),
) -> AcceptInviteResponse:
    """Verify an invitation link, optionally binding it to the accepting email."""
    out = run_accept_invite(
        AcceptInviteInput(url=body.url, expected_email=body.email),
        service=service,
    )
    if not out.success or out.invitee_id is None or out.email_hash is None:
        raise _error(out.error_code, out.error)

    return AcceptInviteResponse(invitee_id=out.invitee_id, email_hash=out.email_hash)
