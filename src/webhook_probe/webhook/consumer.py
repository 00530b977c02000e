"""FastAPI-based HTTP server that accepts webhook deliveries on any route."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, Response, status
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from webhook_probe.config import Settings
from webhook_probe.errors import TransportReadError
from webhook_probe.webhook.handler import InboundRequest, RequestHandler, Sink
from webhook_probe.webhook.sink import ConsoleSink

logger = logging.getLogger(__name__)


def create_consumer_app(settings: Settings, *, sink: Sink | None = None) -> FastAPI:
    """Build and return a :class:`FastAPI` application for inspecting webhooks.

    Parameters
    ----------
    settings:
        Frozen application settings holding the shared secret.
    sink:
        Receives one formatted block per request. Defaults to a
        :class:`ConsoleSink` writing to stdout.
    """
    app = FastAPI(
        title="Webhook Probe",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.handler = RequestHandler(settings, sink or ConsoleSink())

    @app.exception_handler(TransportReadError)
    async def transport_read_error(request: Request, exc: TransportReadError) -> Response:
        logger.warning("Abandoned request: %s", exc)
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    async def receive_webhook(request: Request) -> Response:
        """Log any delivery and answer with an empty body."""
        received_at = datetime.now(timezone.utc)
        try:
            raw_body = await request.body()
        except ClientDisconnect as exc:
            raise TransportReadError(request.method, request.url.path) from exc

        inbound = InboundRequest.from_header_items(
            method=request.method,
            path=request.url.path,
            query=request.url.query,
            header_items=request.headers.items(),
            body=raw_body,
        )
        handler: RequestHandler = request.app.state.handler
        # The sink does blocking, locked writes; keep them off the event loop.
        code = await run_in_threadpool(handler.handle, inbound, received_at)
        return Response(status_code=code)

    # A plain Starlette route with no method list matches every method,
    # including TRACE, CONNECT and extension methods.
    app.add_route("/{path:path}", receive_webhook, include_in_schema=False)

    return app
