"""FastAPI middleware that records HTTP request details for log entries."""
from __future__ import annotations

import logging
import time
from dataclasses import replace

from fastapi import Request

from .context import bind_http_request, reset_http_request
from .formatter import HttpRequest

LOGGER = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _remote_ip(request: Request) -> str | None:
    # a load balancer or proxy puts the original client first
    forwarded = _clean(request.headers.get("x-forwarded-for"))
    if forwarded:
        return _clean(forwarded.split(",")[0])
    return _clean(request.client.host) if request.client else None


def http_request_from(request: Request) -> HttpRequest:
    """Collect the ``httpRequest`` fields available on ``request``."""

    server = request.scope.get("server")
    http_version = request.scope.get("http_version")
    return HttpRequest(
        remote_ip=_remote_ip(request),
        server_ip=_clean(server[0]) if server else None,
        user_agent=_clean(request.headers.get("user-agent")),
        referer=_clean(request.headers.get("referer")),
        protocol=f"HTTP/{http_version}" if http_version else None,
        request_method=request.method,
    )


async def capture_http_request(request: Request, call_next):  # type: ignore[override]
    """Bind the request's details so log entries written while handling it carry them."""

    http_request = http_request_from(request)
    token = bind_http_request(http_request)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        bind_http_request(replace(http_request, status=response.status_code))
        LOGGER.info(
            "HTTP %s %s responded %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={"elapsedMs": round((time.perf_counter() - started) * 1000, 3)},
        )
        return response
    except Exception:
        LOGGER.exception("Unhandled exception", extra={"path": request.url.path})
        raise
    finally:
        reset_http_request(token)
