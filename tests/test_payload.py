import json

import pytest

from webhook_probe.webhook.payload import PayloadKind, render


def test_json_is_pretty_printed_with_sorted_keys():
    rendered = render(b'{"b":1,"a":[1,2]}')
    assert rendered.kind is PayloadKind.PRETTY_JSON
    assert rendered.text == '{\n  "a": [\n    1,\n    2\n  ],\n  "b": 1\n}'
    assert rendered.byte_count == 17


@pytest.mark.parametrize(
    "body",
    [
        b'{"event": "ping", "data": {"id": 7, "tags": ["x", "y"], "ok": true, "none": null}}',
        b"[1, 2.5, \"three\"]",
        b"42",
        b'"just a string"',
        '{"name": "Zoë"}'.encode(),
    ],
)
def test_json_round_trips(body):
    rendered = render(body)
    assert rendered.kind is PayloadKind.PRETTY_JSON
    assert json.loads(rendered.text) == json.loads(body)


def test_non_ascii_json_stays_readable():
    rendered = render('{"city": "Zürich"}'.encode())
    assert "Zürich" in rendered.text


def test_detection_ignores_content_type():
    rendered = render(b'{"a": 1}', "text/plain")
    assert rendered.kind is PayloadKind.PRETTY_JSON


def test_invalid_json_labelled_as_json_is_plain_text():
    rendered = render(b'{"a": 1', "application/json")
    assert rendered.kind is PayloadKind.PLAIN_TEXT
    assert rendered.text == '{"a": 1'


def test_plain_text_is_not_modified():
    body = b"hello world \n\tsecond line  \n"
    rendered = render(body)
    assert rendered.kind is PayloadKind.PLAIN_TEXT
    assert rendered.text == body.decode()


def test_long_plain_text_is_not_truncated():
    body = b"x" * 100_000
    assert render(body).text == body.decode()


def test_empty_body_is_empty_plain_text():
    rendered = render(b"")
    assert rendered.kind is PayloadKind.PLAIN_TEXT
    assert rendered.text == ""
    assert rendered.byte_count == 0


@pytest.mark.parametrize("body", [b"\xff", b"\x80abc", b"ok\xc3", bytes(range(256))])
def test_non_utf8_is_summarised(body):
    rendered = render(body)
    assert rendered.kind is PayloadKind.BINARY_SUMMARY
    assert rendered.byte_count == len(body)
    assert rendered.text == f"<binary, {len(body)} bytes>"


def test_binary_summary_mentions_content_type():
    rendered = render(b"\x89PNG\r\n\x1a\n", "image/png")
    assert rendered.text == "<binary, 8 bytes, image/png>"


@pytest.mark.parametrize("body", [b'{"z": 1, "a": 2}', b"plain", b"\xff\x00"])
def test_render_is_deterministic(body):
    assert render(body) == render(body)


def test_oversized_integer_never_raises():
    body = b"1" * 5000
    rendered = render(body)
    assert rendered.text == body.decode()
    assert rendered.byte_count == 5000


def test_deeply_nested_json_never_raises():
    body = b"[" * 100_000 + b"]" * 100_000
    rendered = render(body)
    assert rendered.byte_count == len(body)
    assert rendered.kind in {PayloadKind.PLAIN_TEXT, PayloadKind.PRETTY_JSON}


@pytest.mark.parametrize("body", [b'"\\ud800"', b'{"key": "a\\udc00b"}'])
def test_lone_surrogates_stay_escaped(body):
    rendered = render(body)
    assert rendered.kind is PayloadKind.PRETTY_JSON
    rendered.text.encode("utf-8")
    assert "\\ud" in rendered.text.lower()
    assert json.loads(rendered.text) == json.loads(body)


def test_paired_surrogate_escape_is_decoded():
    rendered = render(b'"\\ud83d\\ude00"')
    assert rendered.text == '"\U0001F600"'
