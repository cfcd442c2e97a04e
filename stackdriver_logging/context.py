"""Ambient HTTP request details for the request being handled."""
from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Optional

from .formatter import HttpRequest

_current_http_request: ContextVar[Optional[HttpRequest]] = ContextVar(
    "stackdriver_http_request", default=None
)


def get_http_request() -> HttpRequest | None:
    return _current_http_request.get()


def bind_http_request(http_request: HttpRequest | None) -> Token:
    """Bind ``http_request`` for the current context; reset with the token."""

    return _current_http_request.set(http_request)


def reset_http_request(token: Token) -> None:
    _current_http_request.reset(token)
