"""HTTP transport for a Slick app: one POST endpoint that Slack calls."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from starlette.concurrency import run_in_threadpool

from slick.core.app import Slick
from slick.shared.config import DEFAULT_PATH
from slick.shared.models import InboundRequest

logger = logging.getLogger(__name__)


class ResponseBuffer:
    """Responder that collects the ack into a single Starlette Response."""

    def __init__(self) -> None:
        self.response: Response | None = None

    @property
    def headers_sent(self) -> bool:
        return self.response is not None

    def send(self, status_code: int, headers: dict[str, str], body: bytes) -> None:
        self.response = Response(content=body, status_code=status_code, headers=headers)


def create_app(slick: Slick, path: str = DEFAULT_PATH) -> FastAPI:
    """Create the FastAPI application serving ``slick`` at ``path``."""
    app = FastAPI(title="Slick Slack App")
    app.state.slick = slick
    slick.freeze()

    @app.get("/health")
    async def health():
        return {"status": "ok", "signing_key_configured": bool(slick.signing_key)}

    # Registered for every method so that non-POST requests reach the auth check.
    @app.api_route(path, methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def slack_events(request: Request):
        inbound = InboundRequest(
            method=request.method,
            headers=dict(request.headers),
            body=await request.body(),
        )
        buffer = ResponseBuffer()
        # Handlers are synchronous and may block.
        await run_in_threadpool(slick.run, inbound, buffer)
        if buffer.response is None:
            logger.error("Slick app produced no response for %s %s", request.method, path)
            return Response(status_code=500)
        return buffer.response

    return app
