"""Catch-all webhook inspector with HMAC-SHA256 signature checking."""

__version__ = "0.1.0"
