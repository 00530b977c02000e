"""HMAC-SHA256 signature verification for incoming webhooks."""

from __future__ import annotations

import enum
import hashlib
import hmac
import logging
import re

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-super-signature"
ALGORITHM_PREFIX = "sha256"

_HEADER_RE = re.compile(r"(sha256)=([0-9a-fA-F]+)")


class VerificationStatus(str, enum.Enum):
    SKIPPED = "skipped"
    PASSED = "passed"
    FAILED = "failed"


class FailureReason(str, enum.Enum):
    MALFORMED_HEADER = "malformed_header"
    DIGEST_MISMATCH = "digest_mismatch"


class SignatureHeader(BaseModel):
    """Parsed ``X-Super-Signature`` value."""

    algorithm_prefix: str
    hex_digest: str

    model_config = {"frozen": True}


class VerificationOutcome(BaseModel):
    """Result of checking one request against the shared secret.

    ``expected`` and ``received`` are only set when verification was
    attempted; ``received`` holds the raw header value when the header
    is malformed.
    """

    status: VerificationStatus
    reason: FailureReason | None = None
    expected: str | None = None
    received: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def skipped(cls) -> VerificationOutcome:
        return cls(status=VerificationStatus.SKIPPED)

    @property
    def attempted(self) -> bool:
        return self.status is not VerificationStatus.SKIPPED


def compute_digest(secret: bytes, body: bytes) -> str:
    """Return the lowercase hex HMAC-SHA256 of *body* keyed with *secret*.

    The body is hashed exactly as received: no trimming, re-encoding or
    trailing newline.
    """
    return hmac.new(secret, body, hashlib.sha256).hexdigest()


def parse_signature_header(value: str) -> SignatureHeader | None:
    """Parse a ``sha256=<hex>`` header value.

    Returns
    -------
    SignatureHeader | None
        ``None`` when *value* does not match the pattern exactly.
    """
    match = _HEADER_RE.fullmatch(value)
    if match is None:
        return None
    return SignatureHeader(algorithm_prefix=match.group(1), hex_digest=match.group(2))


def verify(secret: bytes, body: bytes, header_value: str | None) -> VerificationOutcome:
    """Check the ``X-Super-Signature`` header sent with *body*.

    Parameters
    ----------
    secret:
        Shared HMAC key.
    body:
        Raw request body bytes.
    header_value:
        Value of the ``X-Super-Signature`` header, or ``None`` when the
        sender did not include one.

    Returns
    -------
    VerificationOutcome
        ``SKIPPED`` without a header, ``FAILED`` with
        ``MALFORMED_HEADER`` or ``DIGEST_MISMATCH``, otherwise ``PASSED``.
    """
    if header_value is None:
        return VerificationOutcome.skipped()

    expected = compute_digest(secret, body)

    header = parse_signature_header(header_value)
    if header is None:
        logger.warning("Malformed signature header: %r", header_value)
        return VerificationOutcome(
            status=VerificationStatus.FAILED,
            reason=FailureReason.MALFORMED_HEADER,
            expected=expected,
            received=header_value,
        )

    # Regex guarantees ASCII, which compare_digest requires for str input.
    if hmac.compare_digest(expected, header.hex_digest.lower()):
        return VerificationOutcome(
            status=VerificationStatus.PASSED,
            expected=expected,
            received=header.hex_digest,
        )

    logger.warning("Signature verification failed")
    return VerificationOutcome(
        status=VerificationStatus.FAILED,
        reason=FailureReason.DIGEST_MISMATCH,
        expected=expected,
        received=header.hex_digest,
    )
