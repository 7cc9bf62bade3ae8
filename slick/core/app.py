"""Slick app: validate, parse, classify, dispatch and ack a Slack request."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from slick.core.ack import encode_ack
from slick.core.classifier import classify
from slick.core.parser import parse_request_body
from slick.core.router import CatchAllHandler, Handler, Router, RouterBuilder
from slick.shared.auth import validate_request
from slick.shared.errors import AckError, SlickError
from slick.shared.models import Ack, InboundRequest

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], Ack]


class Responder(Protocol):
    """Write side of the transport."""

    @property
    def headers_sent(self) -> bool: ...

    def send(self, status_code: int, headers: dict[str, str], body: bytes) -> None: ...


def default_error_handler(error: Exception) -> Ack:
    if isinstance(error, SlickError):
        logger.error("%s", error)
        return Ack(status_code=error.status_code, body=b"")
    logger.exception("Unhandled error while processing Slack request: %s", error)
    return Ack(status_code=500, body=b"")


class Slick:
    """A Slack app made of routes and three swappable hooks.

    Routes, the catch-all and the error handler can be changed until the app
    is frozen. Freezing happens on the first processed request (or explicitly
    via ``freeze``), after which the route table is read-only.
    """

    def __init__(self, signing_key: str | None = None):
        self.signing_key = signing_key
        self._builder = RouterBuilder()
        self._router: Router | None = None
        self._error_handler: ErrorHandler = default_error_handler

    # --- Registration ---

    def _check_not_frozen(self) -> None:
        if self._router is not None:
            raise RuntimeError("Routes are frozen once the app has started processing")

    def route(self, type_: str, id_: str, handler: Handler | None = None):
        """Register ``handler`` for payloads of ``type_`` with ``id_``.

        Without a handler, returns a decorator::

            @app.route("command", "/deploy")
            def deploy(payload):
                return "Deploying..."
        """
        self._check_not_frozen()
        result = self._builder.route(type_, id_, handler)
        return self if handler is not None else result

    def on_404(self, handler: CatchAllHandler) -> Slick:
        self._check_not_frozen()
        self._builder.on_404(handler)
        return self

    def on_error(self, handler: ErrorHandler) -> Slick:
        self._check_not_frozen()
        self._error_handler = handler
        return self

    def freeze(self) -> Router:
        if self._router is None:
            self._router = self._builder.build()
            logger.info(
                "Route table frozen (%d routes)",
                sum(len(ids) for ids in self._router.routes.values()),
            )
        return self._router

    @property
    def frozen(self) -> bool:
        return self._router is not None

    # --- Processing ---

    def process_request(self, request: InboundRequest) -> str:
        """Run the pipeline and return the ack body. Raises on any failure."""
        router = self.freeze()
        envelope = validate_request(request, self.signing_key)
        payload = parse_request_body(envelope.body)
        identity = classify(payload)
        logger.debug("Dispatching %s", identity)
        result = router.dispatch(identity, payload)
        return encode_ack(result)

    def handle_error(self, error: Exception) -> Ack:
        return self._error_handler(error)

    def process(self, request: InboundRequest) -> Ack:
        try:
            body = self.process_request(request)
        except Exception as error:
            return self.handle_error(error)
        return Ack(status_code=200, body=body.encode("utf-8"))

    def run(self, request: InboundRequest, responder: Responder) -> Ack:
        """Process the request and write the ack through ``responder``."""
        ack = self.process(request)
        if responder.headers_sent:
            # Nothing more can be written; the error handler only gets to log.
            return self.handle_error(AckError("HTTP headers already sent"))
        responder.send(ack.status_code, ack.headers, ack.body)
        return ack
