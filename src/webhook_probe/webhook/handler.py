"""Per-request orchestration: render, verify, log, pick a status code."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from fastapi import status
from pydantic import BaseModel

from webhook_probe.config import Settings
from webhook_probe.webhook.formatter import format_request
from webhook_probe.webhook.payload import render
from webhook_probe.webhook.signature import (
    SIGNATURE_HEADER,
    FailureReason,
    VerificationOutcome,
    VerificationStatus,
    verify,
)

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]


class InboundRequest(BaseModel):
    """A request as handed over by the transport layer.

    Header names are lowercase. Repeated headers keep the position of
    their first occurrence and the value of their last one.
    """

    method: str
    path: str
    query: str = ""
    headers: dict[str, str]
    body: bytes

    model_config = {"frozen": True}

    @classmethod
    def from_header_items(
        cls,
        *,
        method: str,
        path: str,
        query: str = "",
        header_items: Iterable[tuple[str, str]],
        body: bytes,
    ) -> InboundRequest:
        headers: dict[str, str] = {}
        for name, value in header_items:
            headers[name.lower()] = value
        return cls(method=method, path=path, query=query, headers=headers, body=body)

    @property
    def target(self) -> str:
        """Path plus query string, as the sender requested it."""
        return f"{self.path}?{self.query}" if self.query else self.path


def status_for(outcome: VerificationOutcome) -> int:
    """Map a verification outcome to the HTTP status returned to the sender."""
    if outcome.status is not VerificationStatus.FAILED:
        return status.HTTP_200_OK
    if outcome.reason is FailureReason.MALFORMED_HEADER:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_401_UNAUTHORIZED


class RequestHandler:
    """Handle one inbound request at a time; holds no per-request state.

    Parameters
    ----------
    settings:
        Frozen application settings (the shared secret lives here).
    sink:
        Callable receiving the formatted console block.
    """

    def __init__(self, settings: Settings, sink: Sink) -> None:
        self._settings = settings
        self._sink = sink

    def handle(self, request: InboundRequest, received_at: datetime) -> int:
        """Log *request* and return the status code to respond with."""
        rendered = render(request.body, request.headers.get("content-type"))
        outcome = verify(
            self._settings.secret_bytes,
            request.body,
            request.headers.get(SIGNATURE_HEADER),
        )

        block = format_request(
            received_at,
            request.method,
            request.target,
            request.headers,
            rendered,
            outcome,
            self._settings.secret,
        )
        self._sink(block)

        code = status_for(outcome)
        level = logging.INFO if code == status.HTTP_200_OK else logging.WARNING
        logger.log(level, "%s %s -> %d (%s)", request.method, request.target, code, _describe(outcome))
        return code


def _describe(outcome: VerificationOutcome) -> str:
    if outcome.reason is not None:
        return outcome.reason.value
    return outcome.status.value
