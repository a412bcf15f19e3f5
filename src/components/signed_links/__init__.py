"""
Signed links component - Tamper-evident, expiring URLs.
"""

from ._impl import (
    SignedLinkService,
    canonical_query,
    compute_signature,
    split_link,
)
from .component import (
    run,
    run_generate,
    run_verify,
)
from .models import (
    DEFAULT_TTL_SECONDS,
    EXPIRES_KEY,
    RESERVED_KEYS,
    SIGNATURE_KEY,
    ExpiringLink,
    GenerateLinkInput,
    GenerateLinkOutput,
    InvalidParameterError,
    InvalidSignatureError,
    LinkExpiredError,
    LinkParameters,
    MalformedURLError,
    MissingExpirationError,
    SignedLinkError,
    SignedLinkSettings,
    VerifyLinkInput,
    VerifyLinkOutput,
)
from .ports import ClockPort

__all__ = [
    # Service
    "SignedLinkService",
    # Entry points
    "run",
    "run_generate",
    "run_verify",
    # Pure functions
    "canonical_query",
    "compute_signature",
    "split_link",
    # Constants
    "DEFAULT_TTL_SECONDS",
    "EXPIRES_KEY",
    "RESERVED_KEYS",
    "SIGNATURE_KEY",
    # Models
    "ExpiringLink",
    "LinkParameters",
    "SignedLinkSettings",
    "GenerateLinkInput",
    "GenerateLinkOutput",
    "VerifyLinkInput",
    "VerifyLinkOutput",
    # Errors
    "SignedLinkError",
    "InvalidParameterError",
    "MalformedURLError",
    "MissingExpirationError",
    "InvalidSignatureError",
    "LinkExpiredError",
    # Ports
    "ClockPort",
]
