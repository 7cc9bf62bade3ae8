"""Route table: maps a payload's (type, id) to exactly one handler.

Routes are collected with a RouterBuilder and frozen into a Router before
any request is dispatched.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping

from slick.core.payload import Payload
from slick.shared.errors import RoutingError
from slick.shared.models import PayloadIdentity

logger = logging.getLogger(__name__)

Handler = Callable[[Payload], Any]
CatchAllHandler = Callable[[Payload, PayloadIdentity], Any]


def raise_not_found(payload: Payload, identity: PayloadIdentity) -> Any:
    raise RoutingError(identity.type, identity.id)


class Router:
    """Immutable dispatch table."""

    def __init__(
        self,
        routes: Mapping[str, Mapping[str, Handler]],
        catch_all: CatchAllHandler = raise_not_found,
    ):
        self._routes = MappingProxyType(
            {type_: MappingProxyType(dict(ids)) for type_, ids in routes.items()}
        )
        self._catch_all = catch_all

    @property
    def routes(self) -> Mapping[str, Mapping[str, Handler]]:
        return self._routes

    def resolve(self, identity: PayloadIdentity) -> Handler | None:
        return self._routes.get(identity.type, {}).get(identity.id)

    def dispatch(self, identity: PayloadIdentity, payload: Payload) -> Any:
        handler = self.resolve(identity)
        if handler is None:
            logger.debug("No route for %s, using catch-all", identity)
            return self._catch_all(payload, identity)
        return handler(payload)


class RouterBuilder:
    """Collects routes. Re-registering a (type, id) pair replaces the handler."""

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Handler]] = {}
        self._catch_all: CatchAllHandler = raise_not_found

    def route(
        self, type_: str, id_: str, handler: Handler | None = None
    ) -> RouterBuilder | Callable[[Handler], Handler]:
        if not type_ or not id_:
            raise ValueError(f"Route type and id must be non-empty (got {type_!r}, {id_!r})")

        if handler is None:
            def decorator(fn: Handler) -> Handler:
                self.route(type_, id_, fn)
                return fn

            return decorator

        if id_ in self._routes.get(type_, {}):
            logger.debug("Replacing handler for %s:%s", type_, id_)
        self._routes.setdefault(type_, {})[id_] = handler
        logger.debug("Registered route %s:%s", type_, id_)
        return self

    def on_404(self, handler: CatchAllHandler) -> RouterBuilder:
        self._catch_all = handler
        return self

    def build(self) -> Router:
        return Router(self._routes, self._catch_all)
