"""Build the console block printed for every received request."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from webhook_probe.webhook.payload import RenderedPayload
from webhook_probe.webhook.signature import FailureReason, VerificationOutcome, VerificationStatus

BANNER = "=" * 56
FOOTER = "-" * 56

_RESULT_LABELS = {
    None: "PASS",
    FailureReason.DIGEST_MISMATCH: "FAIL",
    FailureReason.MALFORMED_HEADER: "INVALID-FORMAT",
}


def format_request(
    timestamp: datetime,
    method: str,
    path: str,
    headers: Mapping[str, str],
    rendered_payload: RenderedPayload,
    outcome: VerificationOutcome,
    secret_display: str,
) -> str:
    """Return the multi-line block describing one request.

    *timestamp* is the moment the request was received, as stamped by
    the caller. The verification section only appears when a signature
    header was present.
    """
    lines = [
        BANNER,
        f"[{timestamp.isoformat()}] {method} {path}",
        BANNER,
        "[Headers]:",
    ]
    lines.extend(_header_lines(headers))

    lines.append("")
    lines.append(f"[Body] ({rendered_payload.kind.value}, {rendered_payload.byte_count} bytes):")
    if rendered_payload.text:
        # Appended whole so line endings and blank lines survive unchanged.
        lines.append(rendered_payload.text)
    else:
        lines.append("  <empty body>")

    if outcome.attempted:
        lines.append("")
        lines.extend(_verification_lines(outcome, secret_display))

    lines.append(FOOTER)
    return "\n".join(lines)


def _header_lines(headers: Mapping[str, str]) -> list[str]:
    if not headers:
        return ["  (none)"]
    width = max(len(name) for name in headers) + 1
    return [f"  {name + ':':<{width}} {value}" for name, value in headers.items()]


def _verification_lines(outcome: VerificationOutcome, secret_display: str) -> list[str]:
    if outcome.status is VerificationStatus.PASSED:
        label = _RESULT_LABELS[None]
    else:
        label = _RESULT_LABELS[outcome.reason]
    return [
        "[Verification]:",
        f"  Secret:     '{secret_display}'",
        f"  Expected:   {outcome.expected}",
        f"  Received:   {outcome.received}",
        f"  Result:     {label}",
    ]
