import json

import pytest

from nodelink.exceptions import AuthError
from nodelink.protocol import (
    PONG_ACK_ID,
    build_auth_payload,
    build_ping,
    build_pong_ack,
    encode_message,
    parse_auth_challenge,
)


def test_parse_auth_challenge_accepts_bytes():
    assert parse_auth_challenge(b'{"id": "abc123", "action": "AUTH"}') == "abc123"


@pytest.mark.parametrize("raw", ["", "{", "null", '"abc"', '{"id": ""}', '{"id": null}'])
def test_parse_auth_challenge_rejects_bad_input(raw):
    with pytest.raises(AuthError):
        parse_auth_challenge(raw)


def test_auth_payload_truncates_timestamp_to_seconds():
    payload = build_auth_payload("abc", browser_id="b", user_id="u", timestamp=1700000000.9)

    assert payload["result"]["timestamp"] == 1700000000
    assert payload["result"]["device_type"] == "desktop"


def test_heartbeat_frames():
    assert build_ping("p-1") == {"id": "p-1", "action": "PING", "data": {}}
    assert build_pong_ack() == {"id": PONG_ACK_ID, "origin_action": "PONG"}
    assert PONG_ACK_ID == "F3X"


def test_encode_message_produces_json_text():
    text = encode_message(build_ping("p-1"))

    assert isinstance(text, str)
    assert json.loads(text) == {"id": "p-1", "action": "PING", "data": {}}
