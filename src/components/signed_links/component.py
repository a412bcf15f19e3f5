"""
Signed links component - Generate and verify signed, expiring URLs.

Shell Layer - converts service errors into output models.

Verification failures are reported by their specific code so callers can
tell "expired, ask for a resend" apart from "tampered".
"""

from __future__ import annotations

from ._impl import SignedLinkService
from .models import (
    GenerateLinkInput,
    GenerateLinkOutput,
    SignedLinkError,
    VerifyLinkInput,
    VerifyLinkOutput,
)


def run_generate(inp: GenerateLinkInput, service: SignedLinkService) -> GenerateLinkOutput:
    try:
        link = service.sign(inp.params, inp.ttl_seconds)
    except SignedLinkError as e:
        return GenerateLinkOutput(success=False, error=e.message, error_code=e.code)

    return GenerateLinkOutput(url=link.url, expires=link.expires, success=True)


def run_verify(inp: VerifyLinkInput, service: SignedLinkService) -> VerifyLinkOutput:
    try:
        params = service.verify(inp.url)
    except SignedLinkError as e:
        return VerifyLinkOutput(success=False, error=e.message, error_code=e.code)

    return VerifyLinkOutput(params=params, success=True)


def run(
    inp: GenerateLinkInput | VerifyLinkInput,
    *,
    service: SignedLinkService,
) -> GenerateLinkOutput | VerifyLinkOutput:
    if isinstance(inp, GenerateLinkInput):
        return run_generate(inp, service)

    elif isinstance(inp, VerifyLinkInput):
        return run_verify(inp, service)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
