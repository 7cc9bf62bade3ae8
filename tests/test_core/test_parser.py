import json
from urllib.parse import quote_plus, urlencode

import pytest
from slick.core.parser import parse_request_body
from slick.core.payload import Payload
from slick.shared.errors import BodyError

BLOCK_ACTION = {
    "type": "block_actions",
    "user": {"id": "U123", "name": "roadrunner"},
    "actions": [{"action_id": "approve", "value": "a+b 100%"}],
}


def test_parse_json_body():
    payload = parse_request_body(json.dumps(BLOCK_ACTION))
    assert isinstance(payload, Payload)
    assert payload == BLOCK_ACTION


def test_parse_json_bytes_body():
    payload = parse_request_body(json.dumps(BLOCK_ACTION).encode())
    assert payload["type"] == "block_actions"


def test_form_wrapped_payload_matches_json():
    form_body = "payload=" + quote_plus(json.dumps(BLOCK_ACTION))
    assert parse_request_body(form_body) == parse_request_body(json.dumps(BLOCK_ACTION))


def test_form_wrapped_payload_keeps_plus_and_percent():
    form_body = "payload=" + quote_plus(json.dumps(BLOCK_ACTION))
    payload = parse_request_body(form_body)
    assert payload.lookup("actions", 0, "value") == "a+b 100%"


def test_parse_slash_command_form():
    body = urlencode({"command": "/deploy", "text": "prod now", "user_id": "U123"})
    payload = parse_request_body(body)
    assert payload["command"] == "/deploy"
    assert payload["text"] == "prod now"


def test_parse_form_keeps_blank_values():
    payload = parse_request_body("command=%2Fcool&text=")
    assert payload["text"] == ""


@pytest.mark.parametrize("body", ["", b""])
def test_parse_empty_body(body):
    with pytest.raises(BodyError, match="must not be empty"):
        parse_request_body(body)


def test_parse_invalid_json():
    with pytest.raises(BodyError, match="Invalid JSON") as exc_info:
        parse_request_body('{"type": ')
    assert exc_info.value.status_code == 400
    assert exc_info.value.__cause__ is not None


def test_parse_invalid_embedded_json():
    with pytest.raises(BodyError, match="Invalid JSON"):
        parse_request_body("payload=" + quote_plus("{not json"))


def test_parse_empty_json_object():
    with pytest.raises(BodyError, match="no data"):
        parse_request_body("{}")


def test_parse_embedded_non_object():
    with pytest.raises(BodyError, match="not an object"):
        parse_request_body("payload=" + quote_plus("[1, 2]"))


def test_parse_form_without_fields():
    with pytest.raises(BodyError, match="no data"):
        parse_request_body("&&&")


def test_parse_invalid_utf8():
    with pytest.raises(BodyError, match="UTF-8"):
        parse_request_body(b"\xff\xfe{")


def test_parse_deeply_nested_json():
    body = "{" + '"a":{' * 100_000 + "}" * 100_001
    with pytest.raises(BodyError, match="Invalid JSON"):
        parse_request_body(body)
