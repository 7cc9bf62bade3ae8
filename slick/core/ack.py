from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from slick.shared.errors import AckError


def encode_ack(value: Any = None) -> str:
    """Turn a handler result into the ack body Slack receives.

    None acks with an empty body, a plain string becomes a ``text`` message,
    anything else must be JSON-serializable.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        value = {"text": value}
    elif isinstance(value, BaseModel):
        value = value.model_dump(mode="json", exclude_none=True)

    try:
        encoded = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        encoded.encode("utf-8")
    except (TypeError, ValueError) as err:
        raise AckError("Invalid JSON while encoding ack") from err
    return encoded
