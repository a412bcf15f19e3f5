from __future__ import annotations

import html
from dataclasses import dataclass, field

from src.core.ports.email import EmailStatus


@dataclass(frozen=True)
class Invitee:
    """Someone being invited: an identifier and the address the link goes to."""

    id: str
    email: str
    name: str | None = None

    def get_key(self) -> str:
        return self.id

    def get_email_for_verification(self) -> str:
        return self.email


@dataclass(frozen=True)
class InviteMessage:
    """Invitation mail content: intro lines, one action button, outro lines."""

    subject: str
    action_text: str
    action_url: str
    intro_lines: tuple[str, ...] = ()
    outro_lines: tuple[str, ...] = ()

    def render_text(self) -> str:
        parts = [*self.intro_lines, f"{self.action_text}: {self.action_url}", *self.outro_lines]
        return "\n\n".join(parts)

    def render_html(self) -> str:
        paragraphs = [f"<p>{html.escape(line)}</p>" for line in self.intro_lines]
        paragraphs.append(
            f'<p><a href="{html.escape(self.action_url, quote=True)}">'
            f"{html.escape(self.action_text)}</a></p>"
        )
        paragraphs.extend(f"<p>{html.escape(line)}</p>" for line in self.outro_lines)
        return "\n".join(paragraphs)


@dataclass(frozen=True)
class SendInviteInput:
    invitee: Invitee
    ttl_seconds: int | None = None


@dataclass(frozen=True)
class AcceptInviteInput:
    url: str
    expected_email: str | None = None


@dataclass
class SendInviteOutput:
    url: str | None = None
    message_id: str | None = None
    status: EmailStatus | None = None
    success: bool = False
    error: str | None = None


@dataclass
class AcceptInviteOutput:
    invitee_id: str | None = None
    email_hash: str | None = None
    params: dict[str, str] = field(default_factory=dict)
    success: bool = False
    error: str | None = None
    error_code: str | None = None
