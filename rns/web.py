"""Routing of requests to actions and a server that runs them on a worker pool."""

from __future__ import annotations

import functools
import logging
from typing import BinaryIO, Callable, Iterable

from rns.request import Request
from rns.response import HttpError, Response, ResponseCode, Version
from rns.worker_pool import Pool

log = logging.getLogger(__name__)

Action = Callable[[Request], object]


class RouteMap:
    """Maps a URI and method to the action that handles it.

    Registering the same URI and method again replaces the earlier action.
    """

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Action]] = {}

    def insert_route(self, uri: str, method: str, action: Action) -> None:
        self._routes.setdefault(uri, {})[method] = action

    def insert_route_methods(
        self, uri: str, methods: Iterable[str], action: Action
    ) -> None:
        """Register one action for several methods under the same URI."""
        method_map = self._routes.setdefault(uri, {})
        for method in methods:
            method_map[method] = action

    def get_action(self, uri: str, method: str) -> Action:
        """Return the action; raise HttpError(404) or HttpError(405)."""
        method_map = self._routes.get(uri)
        if method_map is None:
            raise HttpError(ResponseCode.NOT_FOUND)
        action = method_map.get(method)
        if action is None:
            raise HttpError(ResponseCode.METHOD_NOT_ALLOWED)
        return action


class PooledServer:
    """Serves requests concurrently on a worker pool.

    Each request passes through authenticate, throttle and dispatch before
    the matched action is called with it.
    """

    def __init__(self, routes: RouteMap, pool: Pool) -> None:
        self.routes = routes
        self.pool = pool

    def authenticate(self, request: Request) -> None:
        """Accept every request; raise HttpError to refuse one."""

    def throttle(self, request: Request) -> None:
        """Let every request through; raise HttpError to slow clients down."""

    def dispatch(self, request: Request) -> Action:
        return self.routes.get_action(request.uri, request.method)

    def serve_request(self, stream: BinaryIO) -> None:
        """Read one request from ``stream`` and answer it.

        Failures in the processing chain are answered with their status code.
        A request that cannot be read raises HttpError after the client has
        been answered.
        """
        request = Request.build(stream)
        try:
            self.authenticate(request)
            self.throttle(request)
            action = self.dispatch(request)
        except HttpError as err:
            request.respond(Response(Version.HTTP_1_1, err.code))
            return
        action(request)

    def submit(self, stream: BinaryIO) -> None:
        """Queue ``stream`` to be served by a worker."""
        self.pool.execute(functools.partial(self._serve_logged, stream))

    def _serve_logged(self, stream: BinaryIO) -> None:
        try:
            self.serve_request(stream)
        except HttpError as err:
            log.warning("rejected request: %s", err.code)