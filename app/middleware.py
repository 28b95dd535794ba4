import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("app.access")

# ---------------------------------------------------------------------------
# Per-request context variables
# ---------------------------------------------------------------------------

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)
request_started_var: ContextVar[float | None] = ContextVar("request_started", default=None)


def install_query_counter(engine) -> None:
    """
    Register a ``before_cursor_execute`` event listener on *engine* that
    increments the per-request ``query_count_var`` for every SQL statement,
    including the ones SQLAlchemy issues for eager loading.

    Called once per engine by ``Database.__init__``.
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


def elapsed_seconds() -> float:
    """Seconds since the current request entered ``TimingMiddleware``."""
    started = request_started_var.get()
    if started is None:
        return 0.0
    return time.perf_counter() - started


# ---------------------------------------------------------------------------
# Middleware (pure ASGI, so ContextVar mutations stay visible to it)
# ---------------------------------------------------------------------------

class TimingMiddleware:
    """
    Pure ASGI middleware acting as the request logger.

    Every HTTP request is logged as ``METHOD path status duration`` and
    the response carries two diagnostic headers:

    - ``X-Response-Time-Ms``: wall-clock time for the entire request.
    - ``X-Query-Count``: SQL statements executed while handling it.

    It also records the request start time, from which the response
    envelope derives ``processTimeSeconds``.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()
        request_started_var.set(start)
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(query_count_var.get()).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s %d %.2fms",
                scope["method"],
                scope["path"],
                status_code,
                (time.perf_counter() - start) * 1000,
            )
