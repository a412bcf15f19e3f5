from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from src.components.signed_links import SignedLinkSettings
from src.core.ports.email import EmailAddress


class MailRules(BaseModel):
    from_address: str | None = None
    from_name: str | None = None

    def sender(self) -> EmailAddress | None:
        if not self.from_address:
            return None
        return EmailAddress(self.from_address, self.from_name)


class LinkConfig(BaseModel):
    """Process-wide link signing configuration, loaded once at startup."""

    model_config = ConfigDict(extra="forbid")

    secret_key: SecretStr
    previous_secret_keys: list[SecretStr] = Field(default_factory=list)
    frontend_url: str
    invitation_path: str = "/invitation"
    expire_minutes: int = Field(default=60, gt=0)
    mail: MailRules = Field(default_factory=MailRules)

    @field_validator("secret_key")
    @classmethod
    def _secret_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("secret_key must not be empty")
        return v

    @field_validator("previous_secret_keys")
    @classmethod
    def _previous_not_empty(cls, v: list[SecretStr]) -> list[SecretStr]:
        return [key for key in v if key.get_secret_value()]

    @field_validator("frontend_url")
    @classmethod
    def _absolute_http_url(cls, v: str) -> str:
        parts = urlsplit(v.strip())
        if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
            raise ValueError("frontend_url must be an absolute http(s) URL")
        if parts.query or parts.fragment:
            raise ValueError("frontend_url must not carry a query or fragment")
        # Verification rebuilds the base from a parsed URL, which lowercases the scheme
        return f"{parts.scheme.lower()}://{parts.netloc}{parts.path}".rstrip("/")

    @field_validator("invitation_path")
    @classmethod
    def _path_has_leading_slash(cls, v: str) -> str:
        if not v.startswith("/") or "?" in v or "#" in v:
            raise ValueError("invitation_path must start with '/' and carry no query")
        return v

    @property
    def base_url(self) -> str:
        return f"{self.frontend_url}{self.invitation_path}"

    @property
    def default_ttl_seconds(self) -> int:
        return self.expire_minutes * 60

    def to_link_settings(self) -> SignedLinkSettings:
        return SignedLinkSettings(
            base_url=self.base_url,
            secret_key=self.secret_key.get_secret_value().encode(),
            default_ttl_seconds=self.default_ttl_seconds,
            previous_keys=tuple(
                key.get_secret_value().encode() for key in self.previous_secret_keys
            ),
        )
