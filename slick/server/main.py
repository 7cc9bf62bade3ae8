from __future__ import annotations

import importlib
import logging

import uvicorn

from slick.core.app import Slick
from slick.server.api import create_app
from slick.shared.config import SlickConfig

logger = logging.getLogger(__name__)


def load_app(target: str) -> Slick:
    """Import a Slick app from a ``module:attribute`` string."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Invalid app target: {target!r}. Expected 'module:attribute'.")

    module = importlib.import_module(module_name)
    app = getattr(module, attr, None)
    if app is None:
        raise ValueError(f"Module {module_name!r} has no attribute {attr!r}")
    if callable(app) and not isinstance(app, Slick):
        app = app()
    if not isinstance(app, Slick):
        raise TypeError(f"{target!r} is not a Slick app (got {type(app).__name__})")
    return app


async def run_server(slick: Slick, config: SlickConfig) -> None:
    if slick.signing_key is None:
        slick.signing_key = config.signing_key
    if not slick.signing_key:
        logger.warning("No signing key configured: every request will be rejected (401)")

    app = create_app(slick, path=config.path)
    logger.info("Serving Slack requests on %s:%d%s", config.host, config.port, config.path)
    server = uvicorn.Server(
        uvicorn.Config(app, host=config.host, port=config.port, log_level="info")
    )
    await server.serve()
