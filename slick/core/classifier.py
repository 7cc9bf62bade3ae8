"""Derives the routable (type, id) identity of a payload."""

from __future__ import annotations

from types import MappingProxyType

from slick.core.payload import Payload, PathKey, format_path
from slick.shared.errors import PayloadError
from slick.shared.models import PayloadIdentity

COMMAND_TYPE = "command"

# Where each payload type keeps the id used for routing. Closed set.
ID_FIELDS: MappingProxyType[str, tuple[PathKey, ...]] = MappingProxyType({
    "block_actions": ("actions", 0, "action_id"),
    "block_suggestion": ("action_id",),
    "command": ("command",),
    "event_callback": ("event", "type"),
    "message_action": ("callback_id",),
    "shortcut": ("callback_id",),
    "workflow_step_edit": ("callback_id",),
    "view_closed": ("view", "callback_id"),
    "view_submission": ("view", "callback_id"),
})


def payload_type(payload: Payload) -> str:
    value = payload.get("type")
    if isinstance(value, str):
        return value
    if payload.get("command") is not None:
        return COMMAND_TYPE
    raise PayloadError("No payload type detected")


def payload_id(payload: Payload, type_: str | None = None) -> str:
    if type_ is None:
        type_ = payload_type(payload)

    path = ID_FIELDS.get(type_)
    if path is None:
        raise PayloadError(f"Unexpected payload type: {type_!r}")

    value = payload.lookup_str(*path)
    if value is None:
        raise PayloadError(
            f"Payload ID was missing from expected field ({format_path(path)})"
        )
    return value


def classify(payload: Payload) -> PayloadIdentity:
    type_ = payload_type(payload)
    return PayloadIdentity(type=type_, id=payload_id(payload, type_))
