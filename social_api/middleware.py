import logging
import time
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from social_api.config import settings

logger = logging.getLogger(__name__)

_WRITE_VERBS = ("INSERT", "UPDATE", "DELETE")


@dataclass
class RequestStats:
    """SQL activity of one HTTP request."""

    queries: int = 0
    writes: int = 0


# None outside a request (seed script, migrations), so nothing is counted there.
request_stats_var: ContextVar[Optional[RequestStats]] = ContextVar("request_stats", default=None)


def install_query_counter(engine) -> None:
    """
    Record every SQL statement executed on *engine* into the current
    request's ``RequestStats``.

    INSERT/UPDATE/DELETE statements are also counted as writes, which makes
    the reaction cleanup in ``user_service.delete_user`` visible per request.
    """

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        stats = request_stats_var.get()
        if stats is None:
            return
        stats.queries += 1
        if statement.lstrip()[:6].upper() in _WRITE_VERBS:
            stats.writes += 1


def _route_label(scope: Scope) -> str:
    # FastAPI stores the matched route in the scope; fall back to the raw path.
    route = scope.get("route")
    return getattr(route, "path", scope["path"])


class TimingMiddleware:
    """
    Pure ASGI middleware adding ``X-Response-Time-Ms``, ``X-Query-Count`` and
    ``X-Write-Count`` to every HTTP response.

    Requests slower than ``settings.SLOW_REQUEST_MS`` are logged at WARNING
    under their route template (``/users/{user_id}``), the rest at DEBUG.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        stats = RequestStats()
        token = request_stats_var.set(stats)
        start = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(stats.queries).encode()))
                headers.append((b"x-write-count", str(stats.writes).encode()))
                message["headers"] = headers

                level = logging.WARNING if duration_ms >= settings.SLOW_REQUEST_MS else logging.DEBUG
                logger.log(
                    level,
                    "%s %s -> %s (%.2f ms, %d queries, %d writes)",
                    scope["method"], _route_label(scope), message["status"],
                    duration_ms, stats.queries, stats.writes,
                )
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            request_stats_var.reset(token)
