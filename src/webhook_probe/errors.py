"""Exceptions raised across the transport boundary."""


class WebhookProbeError(Exception):
    """Base class for webhook-probe errors."""


class TransportReadError(WebhookProbeError):
    """The request body could not be read from the connection.

    Handling of that single request is abandoned: nothing is verified or
    logged as a request block.
    """

    def __init__(self, method: str, path: str) -> None:
        super().__init__(f"Could not read body of {method} {path}")
        self.method = method
        self.path = path
