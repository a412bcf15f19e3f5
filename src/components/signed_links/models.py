"""
Signed links component - Data models.

Parameters, the immutable signed link value, service settings and the
error taxonomy surfaced by verification.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Types ---

LinkParameters = dict[str, str]

EXPIRES_KEY = "expires"
SIGNATURE_KEY = "signature"
RESERVED_KEYS = frozenset({EXPIRES_KEY, SIGNATURE_KEY})

DEFAULT_TTL_SECONDS = 60 * 60


# --- Errors ---


class SignedLinkError(Exception):
    """Base exception for signed link generation and verification."""

    code = "signed_link_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidParameterError(SignedLinkError):
    """Caller supplied a reserved key or an unusable parameter."""

    code = "invalid_parameter"

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class MalformedURLError(SignedLinkError):
    """URL or query string cannot be parsed, or carries no signature."""

    code = "malformed_url"


class MissingExpirationError(SignedLinkError):
    """The expires parameter is absent or not an integer."""

    code = "missing_expiration"


class InvalidSignatureError(SignedLinkError):
    """Signature does not match: tampered link or wrong secret."""

    code = "invalid_signature"


class LinkExpiredError(SignedLinkError):
    """The link's expiration timestamp has passed."""

    code = "link_expired"

    def __init__(self, expires: int, now: int) -> None:
        self.expires = expires
        self.now = now
        super().__init__(f"Link expired at {expires}")


# --- Settings ---


@dataclass(frozen=True)
class SignedLinkSettings:
    """
    Configuration injected into SignedLinkService.

    secret_key signs new links. previous_keys are only accepted during
    verification, so a rotated key keeps outstanding links valid until
    they expire.
    """

    base_url: str
    secret_key: bytes = field(repr=False)
    default_ttl_seconds: int = DEFAULT_TTL_SECONDS
    previous_keys: tuple[bytes, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("Secret key is required")
        if not self.base_url:
            raise ValueError("Base URL is required")
        if self.default_ttl_seconds <= 0:
            raise ValueError("Default TTL must be positive")

    @property
    def verification_keys(self) -> tuple[bytes, ...]:
        return (self.secret_key, *self.previous_keys)


# --- Values ---


@dataclass(frozen=True)
class ExpiringLink:
    """A signed link: parameters, expiration and signature over both."""

    base_url: str
    params: LinkParameters
    expires: int
    signature: str
    canonical_query: str

    @property
    def url(self) -> str:
        return f"{self.base_url}?{self.canonical_query}&{SIGNATURE_KEY}={self.signature}"


# --- Input Models ---


@dataclass(frozen=True)
class GenerateLinkInput:
    """Input for generating a signed link."""

    params: LinkParameters
    ttl_seconds: int | None = None


@dataclass(frozen=True)
class VerifyLinkInput:
    """Input for verifying a presented link."""

    url: str


# --- Output Models ---


@dataclass
class GenerateLinkOutput:
    url: str | None = None
    expires: int | None = None
    success: bool = False
    error: str | None = None
    error_code: str | None = None


@dataclass
class VerifyLinkOutput:
    params: LinkParameters | None = None
    success: bool = False
    error: str | None = None
    error_code: str | None = None

    @property
    def is_expired(self) -> bool:
        return self.error_code == LinkExpiredError.code

    @property
    def is_tampered(self) -> bool:
        return self.error_code == InvalidSignatureError.code
