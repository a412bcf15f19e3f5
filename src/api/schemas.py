from pydantic import BaseModel, Field

from src.core.ports.email import EmailStatus


# --- Invitations ---
class InviteRequest(BaseModel):
    invitee_id: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = None
    ttl_seconds: int | None = Field(default=None, gt=0)


class InviteResponse(BaseModel):
    url: str
    status: EmailStatus
    message_id: str | None = None


# --- Link Verification ---
class VerifyLinkRequest(BaseModel):
    url: str


class VerifyLinkResponse(BaseModel):
    params: dict[str, str]


class AcceptInviteRequest(BaseModel):
    url: str
    email: str | None = None


class AcceptInviteResponse(BaseModel):
    invitee_id: str
    email_hash: str


class ErrorDetail(BaseModel):
    code: str
    message: str
