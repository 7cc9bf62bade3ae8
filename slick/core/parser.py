"""Request body parsing: JSON bodies and form-encoded bodies."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from slick.core.payload import Payload
from slick.shared.errors import BodyError

logger = logging.getLogger(__name__)

FORM_PAYLOAD_FIELD = "payload"


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as err:
        raise BodyError("Invalid JSON while decoding body") from err


def parse_request_body(body: str | bytes) -> Payload:
    """Parse a Slack request body into a Payload.

    JSON bodies (events API) are decoded directly. Everything else is treated
    as form data: interactive components wrap their JSON in a ``payload``
    field, slash commands send plain form fields.
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as err:
            raise BodyError("Body is not valid UTF-8") from err

    if not body:
        raise BodyError("Body must not be empty")

    if body[0] == "{":
        data = _decode_json(body)
    else:
        form = dict(parse_qsl(body, keep_blank_values=True))
        if FORM_PAYLOAD_FIELD in form:
            data = _decode_json(form[FORM_PAYLOAD_FIELD])
        else:
            data = form

    if not isinstance(data, dict):
        raise BodyError(f"Parsed body is not an object (got {type(data).__name__})")
    if not data:
        raise BodyError("Parsed body yielded no data")

    logger.debug("Parsed body with %d top-level fields", len(data))
    return Payload(data)
