"""Turn raw request bodies into printable text."""

from __future__ import annotations

import enum
import json

from pydantic import BaseModel


class PayloadKind(str, enum.Enum):
    PLAIN_TEXT = "plain_text"
    PRETTY_JSON = "pretty_json"
    BINARY_SUMMARY = "binary_summary"


class RenderedPayload(BaseModel):
    kind: PayloadKind
    text: str
    byte_count: int

    model_config = {"frozen": True}


def render(body: bytes, content_type_hint: str | None = None) -> RenderedPayload:
    """Render *body* for the console.

    JSON is detected by content, not by ``Content-Type``, because senders
    often mislabel their payloads. Valid JSON is re-serialized with sorted
    keys and two-space indentation, so key order is canonical rather than
    the sender's. The content-type hint only annotates binary summaries.
    """
    size = len(body)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        summary = f"<binary, {size} bytes, {content_type_hint}>" if content_type_hint else f"<binary, {size} bytes>"
        return RenderedPayload(kind=PayloadKind.BINARY_SUMMARY, text=summary, byte_count=size)

    try:
        parsed = json.loads(text)
        pretty = json.dumps(parsed, indent=2, sort_keys=True, ensure_ascii=False)
    except (ValueError, RecursionError):
        # ValueError covers JSONDecodeError and oversized integer literals.
        return RenderedPayload(kind=PayloadKind.PLAIN_TEXT, text=text, byte_count=size)

    try:
        pretty.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates from \uXXXX escapes cannot be written to a UTF-8 stream.
        pretty = json.dumps(parsed, indent=2, sort_keys=True, ensure_ascii=True)
    return RenderedPayload(kind=PayloadKind.PRETTY_JSON, text=pretty, byte_count=size)
