"""
SignedLinkService - Signed, expiring URLs.

Functional Core - canonicalization, HMAC signing and verification.

Wire format:
    <base_url>?<k1>=<v1>&...&expires=<ts>&signature=<hex>

Invariants:
- Signed content is base_url + "?" + canonical query (keys sorted by UTF-8 bytes)
- signature is always the last parameter and never part of the signed content
- Signatures are compared in constant time
- now == expires is still valid; the link expires once now > expires
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
from datetime import UTC, datetime
from urllib.parse import parse_qsl, urlencode, urlsplit

from .models import (
    EXPIRES_KEY,
    RESERVED_KEYS,
    SIGNATURE_KEY,
    ExpiringLink,
    InvalidParameterError,
    InvalidSignatureError,
    LinkExpiredError,
    LinkParameters,
    MalformedURLError,
    MissingExpirationError,
    SignedLinkError,
    SignedLinkSettings,
)
from .ports import ClockPort

logger = logging.getLogger(__name__)

# Unix seconds; longer digit runs are rejected before int() conversion
_TIMESTAMP_RE = re.compile(r"[0-9]{1,18}")


# --- Pure Functions ---


def canonical_query(params: LinkParameters) -> str:
    """
    Encode parameters as a deterministic query string.

    Entries are sorted by key in byte-lexicographic order so the result does
    not depend on insertion order.
    """
    items = sorted(params.items(), key=lambda kv: kv[0].encode("utf-8"))
    return urlencode(items)


def compute_signature(secret_key: bytes, base_url: str, query: str) -> str:
    """HMAC-SHA256 over base_url?query, lowercase hex."""
    message = f"{base_url}?{query}".encode()
    return hmac.new(secret_key, message, hashlib.sha256).hexdigest()


def signatures_match(expected: str, presented: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), presented.encode("utf-8"))


def validate_parameters(params: LinkParameters) -> None:
    """Raise InvalidParameterError for reserved, non-string or unencodable entries."""
    if not isinstance(params, dict):
        raise InvalidParameterError("Link parameters must be a mapping")

    for key, value in params.items():
        if not isinstance(key, str) or not key:
            raise InvalidParameterError(f"Invalid parameter key: {key!r}")
        if key in RESERVED_KEYS:
            raise InvalidParameterError(f"Parameter '{key}' is reserved", key=key)
        if not isinstance(value, str):
            raise InvalidParameterError(
                f"Parameter '{key}' must be a string, got {type(value).__name__}",
                key=key,
            )
        try:
            key.encode("utf-8")
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidParameterError(
                f"Parameter {key!r} is not valid UTF-8 text", key=key
            ) from e


def split_link(url: str) -> tuple[str, LinkParameters]:
    """
    Split a presented URL into its base and query parameters.

    Raises:
        MalformedURLError: unparseable URL or query, missing host,
            or a parameter repeated more than once
    """
    try:
        parts = urlsplit(url)
    except (ValueError, TypeError) as e:
        raise MalformedURLError("URL cannot be parsed") from e

    if not parts.scheme or not parts.netloc:
        raise MalformedURLError("URL must be absolute")
    if not parts.query:
        raise MalformedURLError("URL has no query string")

    try:
        pairs = parse_qsl(
            parts.query,
            keep_blank_values=True,
            strict_parsing=True,
            errors="strict",
        )
    except ValueError as e:
        raise MalformedURLError("Query string cannot be parsed") from e

    params: LinkParameters = {}
    for key, value in pairs:
        if key in params:
            raise MalformedURLError(f"Parameter '{key}' appears more than once")
        params[key] = value

    base_url = f"{parts.scheme}://{parts.netloc}{parts.path}"
    return base_url, params


def parse_expires(raw: str | None) -> int:
    if raw is None:
        raise MissingExpirationError("Link has no expiration")
    if not _TIMESTAMP_RE.fullmatch(raw):
        raise MissingExpirationError("Link expiration is not an integer timestamp")
    return int(raw)


def to_timestamp(moment: datetime) -> int:
    """Whole Unix seconds; naive datetimes are treated as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(moment.timestamp())


# --- Service ---


class SignedLinkService:
    """
    Generates and verifies signed, expiring links.

    Stateless apart from the injected settings and clock; safe to share
    between threads.
    """

    def __init__(self, settings: SignedLinkSettings, clock: ClockPort) -> None:
        self.settings = settings
        self.clock = clock

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def sign(
        self,
        params: LinkParameters,
        ttl_seconds: int | None = None,
    ) -> ExpiringLink:
        """
        Build a signed link for params that expires ttl_seconds from now.

        Raises:
            InvalidParameterError: reserved key, non-string entry or ttl <= 0
        """
        validate_parameters(params)

        ttl = self.settings.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
            raise InvalidParameterError(f"TTL must be a positive integer, got {ttl!r}")

        expires = to_timestamp(self.clock.now_utc()) + ttl
        signed_params = {**params, EXPIRES_KEY: str(expires)}
        query = canonical_query(signed_params)
        signature = compute_signature(self.settings.secret_key, self.base_url, query)

        logger.debug(
            "Signed link generated: keys=%s expires=%d",
            sorted(params),
            expires,
        )

        return ExpiringLink(
            base_url=self.base_url,
            params=dict(params),
            expires=expires,
            signature=signature,
            canonical_query=query,
        )

    def generate(self, params: LinkParameters, ttl_seconds: int | None = None) -> str:
        """Build the signed URL for params."""
        return self.sign(params, ttl_seconds).url

    def verify(self, url: str) -> LinkParameters:
        """
        Verify a presented link and return its parameters.

        The signature is recomputed over the presented URL's base and the
        canonical form of its remaining parameters, so the order of the
        presented query does not matter.

        Raises:
            MalformedURLError: unparseable URL, or no signature
            MissingExpirationError: expires absent or not an integer
            InvalidSignatureError: signature does not match any accepted key
            LinkExpiredError: current time is past expires
        """
        try:
            params = self._verify(url)
        except SignedLinkError as e:
            logger.warning("Signed link rejected: %s", e.code)
            raise

        logger.info("Signed link verified: keys=%s", sorted(params))
        return params

    def is_valid(self, url: str) -> bool:
        try:
            self.verify(url)
        except SignedLinkError:
            return False
        return True

    def _verify(self, url: str) -> LinkParameters:
        base_url, params = split_link(url)

        presented = params.pop(SIGNATURE_KEY, None)
        if not presented:
            raise MalformedURLError("Link has no signature")

        expires = parse_expires(params.get(EXPIRES_KEY))

        query = canonical_query(params)
        matched = False
        for key in self.settings.verification_keys:
            expected = compute_signature(key, base_url, query)
            if signatures_match(expected, presented):
                matched = True
        if not matched:
            raise InvalidSignatureError("Link signature is invalid")

        now = to_timestamp(self.clock.now_utc())
        if now > expires:
            raise LinkExpiredError(expires=expires, now=now)

        del params[EXPIRES_KEY]
        return params
