import pytest
from pydantic import ValidationError
from slick.shared.errors import (
    AckError, AuthError, BodyError, ErrorKind, PayloadError, RoutingError, SlickError,
)
from slick.shared.models import Ack, InboundRequest, PayloadIdentity, RequestEnvelope


def test_inbound_request_header_lookup_is_case_insensitive():
    request = InboundRequest(headers={"X-Slack-Signature": "v0=abc"})
    assert request.header("x-slack-signature") == "v0=abc"
    assert request.header("X-SLACK-SIGNATURE") == "v0=abc"
    assert request.header("X-Slack-Request-Timestamp") is None


def test_inbound_request_keeps_bytes_body():
    request = InboundRequest(body=b"payload=%7B%7D")
    assert request.body == b"payload=%7B%7D"


def test_request_envelope_is_immutable():
    envelope = RequestEnvelope(signature="v0=abc", timestamp=1, body="{}")
    with pytest.raises(ValidationError):
        envelope.timestamp = 2


def test_payload_identity():
    identity = PayloadIdentity(type="command", id="/foo")
    assert str(identity) == "command:/foo"
    assert identity == PayloadIdentity(type="command", id="/foo")


@pytest.mark.parametrize("type_, id_", [("", "x"), ("command", "")])
def test_payload_identity_requires_non_empty(type_, id_):
    with pytest.raises(ValidationError):
        PayloadIdentity(type=type_, id=id_)


def test_ack_headers():
    ack = Ack(status_code=200, body=b'{"text":"bar"}')
    assert ack.headers == {"Content-Type": "application/json", "Content-Length": "14"}


def test_ack_headers_empty_body():
    assert Ack(status_code=401).headers == {}


def test_ack_content_length_counts_bytes():
    body = '{"text":"café"}'.encode()
    assert Ack(body=body).headers["Content-Length"] == str(len(body))


@pytest.mark.parametrize("error_cls, kind, status", [
    (AuthError, ErrorKind.AUTH, 401),
    (BodyError, ErrorKind.BODY, 400),
    (PayloadError, ErrorKind.PAYLOAD, 400),
    (AckError, ErrorKind.ACK, 500),
])
def test_error_kinds(error_cls, kind, status):
    err = error_cls("boom")
    assert isinstance(err, SlickError)
    assert err.kind == kind
    assert err.status_code == status
    assert str(err) == f"Slack App Error ({kind}): boom"


def test_routing_error_carries_identity():
    err = RoutingError("command", "/nope")
    assert err.status_code == 404
    assert err.payload_type == "command"
    assert err.payload_id == "/nope"
    assert "Type: command, ID: /nope" in str(err)


def test_error_status_override():
    assert AuthError("nope", status_code=403).status_code == 403
