from __future__ import annotations

import json as jsonlib
from dataclasses import dataclass, field
from typing import Any, Iterable

from handlerspec.errors import HandlerSpecError
from handlerspec.util import canonicalize_headers, to_bytes


@dataclass(slots=True)
class Response:
    status: int
    headers: dict[str, Any] = field(default_factory=dict)
    body: bytes = b""
    body_stream: Iterable[Any] | None = None


def text(status: int, body: str) -> Response:
    return Response(
        status=status,
        headers={"content-type": ["text/plain; charset=utf-8"]},
        body=str(body).encode("utf-8"),
    )


def html(status: int, body: str) -> Response:
    return Response(
        status=status,
        headers={"content-type": ["text/html; charset=utf-8"]},
        body=str(body).encode("utf-8"),
    )


def json(status: int, value: Any) -> Response:
    body = jsonlib.dumps(value, ensure_ascii=False, sort_keys=True).encode("utf-8")
    return Response(
        status=status,
        headers={"content-type": ["application/json"]},
        body=body,
    )


def redirect(location: str, status: int = 303) -> Response:
    return Response(status=status, headers={"location": [str(location)]})


def not_found(body: str = "not found") -> Response:
    return text(404, body)


def normalize_response(resp: Any) -> Response:
    """Coerce any response-like object into a ``Response``.

    Accepts objects exposing ``status`` or ``status_code``, a header mapping
    and a ``body`` and/or ``body_stream``. The stream is left unread. Anything
    without a status, ``None`` included, raises ``HandlerSpecError``.
    """
    if isinstance(resp, Response):
        status = resp.status
    else:
        status = getattr(resp, "status", None)
        if status is None:
            status = getattr(resp, "status_code", None)
    if status is None:
        raise HandlerSpecError(
            "handlerspec.invalid_response",
            f"handler returned {type(resp).__name__} without a status code",
        )
    return Response(
        status=int(status),
        headers=canonicalize_headers(getattr(resp, "headers", None)),
        body=to_bytes(getattr(resp, "body", b"")),
        body_stream=getattr(resp, "body_stream", None),
    )


def read_body(resp: Response) -> bytes:
    """Materialise the full body. Drains ``body_stream``, so call it once."""
    parts: list[bytes] = []
    if resp.body:
        parts.append(bytes(resp.body))
    if resp.body_stream is not None:
        for chunk in resp.body_stream:
            parts.append(to_bytes(chunk))
    return b"".join(parts)
