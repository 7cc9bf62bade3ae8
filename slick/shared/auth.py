from __future__ import annotations

import hashlib
import hmac
import re
import time

from slick.shared.errors import AuthError
from slick.shared.models import InboundRequest, RequestEnvelope

MAX_TIMESTAMP_DRIFT = 300  # seconds
# Unix seconds; anything longer cannot be within the drift window.
TIMESTAMP_PATTERN = re.compile(r"-?\d{1,12}")
SIGNATURE_VERSION = "v0"
SIGNATURE_HEADER = "X-Slack-Signature"
TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode() if isinstance(value, str) else value


def compute_signature(key: str, timestamp: int | str, body: str | bytes) -> str:
    signing_input = f"{SIGNATURE_VERSION}:{timestamp}:".encode() + _as_bytes(body)
    digest = hmac.new(key.encode(), signing_input, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def sign_request(body: str | bytes, key: str, timestamp: int | None = None) -> dict[str, str]:
    if timestamp is None:
        timestamp = int(time.time())
    return {
        TIMESTAMP_HEADER: str(timestamp),
        SIGNATURE_HEADER: compute_signature(key, timestamp, body),
    }


def validate_signature(
    key: str,
    signature: str,
    timestamp: int,
    body: str | bytes,
    now: float | None = None,
) -> None:
    """Check a Slack v0 request signature, raising AuthError on failure."""
    if now is None:
        now = time.time()

    try:
        drift = abs(now - timestamp)
    except OverflowError as err:
        raise AuthError("Invalid timestamp in Slack request") from err
    if drift > MAX_TIMESTAMP_DRIFT:
        raise AuthError("Timestamp is too old or too new (clock skew / time drift)")

    if not signature.startswith(f"{SIGNATURE_VERSION}="):
        raise AuthError("Missing or unsupported signature version")

    expected = compute_signature(key, timestamp, body)
    if not hmac.compare_digest(_as_bytes(signature), expected.encode()):
        raise AuthError("Signature (v0) failed validation")


def envelope_from_request(request: InboundRequest) -> RequestEnvelope:
    signature = request.header(SIGNATURE_HEADER)
    if not signature:
        raise AuthError("No signature provided in Slack request")

    timestamp_str = request.header(TIMESTAMP_HEADER)
    if not timestamp_str:
        raise AuthError("No timestamp provided in Slack request")

    if not TIMESTAMP_PATTERN.fullmatch(timestamp_str):
        raise AuthError("Invalid timestamp in Slack request")
    timestamp = int(timestamp_str)

    return RequestEnvelope(signature=signature, timestamp=timestamp, body=request.body)


def validate_request(
    request: InboundRequest, key: str | None, now: float | None = None
) -> RequestEnvelope:
    """Run the transport-level checks, then verify the signature.

    Order matters: method, signing key, signature header, timestamp header.
    """
    if request.method.upper() != "POST":
        raise AuthError("Only POST requests are supported")

    if not key:
        raise AuthError("Missing SLACK_SIGNING_KEY in environment")

    envelope = envelope_from_request(request)
    validate_signature(key, envelope.signature, envelope.timestamp, envelope.body, now=now)
    return envelope
