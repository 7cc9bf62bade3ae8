from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    AUTH = "auth"
    BODY = "body"
    PAYLOAD = "payload"
    ROUTING = "routing"
    ACK = "ack"


class SlickError(Exception):
    """Base error for every stage of request processing.

    Carries the stage that failed (``kind``) and the HTTP status code the
    transport should answer with.
    """

    kind: ErrorKind = ErrorKind.ACK
    default_status: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code or self.default_status

    def __str__(self) -> str:
        return f"Slack App Error ({self.kind}): {self.message}"


class AuthError(SlickError):
    kind = ErrorKind.AUTH
    default_status = 401


class BodyError(SlickError):
    kind = ErrorKind.BODY
    default_status = 400


class PayloadError(SlickError):
    kind = ErrorKind.PAYLOAD
    default_status = 400


class RoutingError(SlickError):
    kind = ErrorKind.ROUTING
    default_status = 404

    def __init__(self, payload_type: str, payload_id: str):
        super().__init__(f"Could not route payload (Type: {payload_type}, ID: {payload_id})")
        self.payload_type = payload_type
        self.payload_id = payload_id


class AckError(SlickError):
    kind = ErrorKind.ACK
    default_status = 500
