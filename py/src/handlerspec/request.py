from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from handlerspec.util import (
    canonicalize_headers,
    clone_query,
    first_header_value,
    form_url_encode,
    normalize_path,
    to_bytes,
)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Params = Mapping[str, Any] | Iterable[tuple[str, Any]]


@dataclass(frozen=True, slots=True)
class Request:
    method: str
    path: str
    query: dict[str, list[str]] = field(default_factory=dict)
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        return first_header_value(self.headers, name)

    def param(self, name: str) -> str | None:
        values = self.query.get(name) or []
        return values[0] if values else None

    def form(self) -> dict[str, list[str]]:
        content_type = str(self.header("content-type") or "").split(";", 1)[0].strip().lower()
        if content_type != FORM_CONTENT_TYPE or not self.body:
            return {}
        out: dict[str, list[str]] = {}
        text = self.body.decode("utf-8", errors="replace")
        for key, value in urllib.parse.parse_qsl(text, keep_blank_values=True):
            out.setdefault(key, []).append(value)
        return out

    @property
    def url(self) -> str:
        if not self.query:
            return self.path
        return self.path + "?" + urllib.parse.urlencode(self.query, doseq=True)


def normalize_request(req: Request) -> Request:
    return Request(
        method=str(req.method or "").strip().upper() or "GET",
        path=normalize_path(req.path),
        query=clone_query(req.query),
        headers=canonicalize_headers(req.headers),
        body=to_bytes(req.body),
    )


def build_get(
    path: str,
    query: Params | None = None,
    *,
    headers: Mapping[str, Any] | None = None,
) -> Request:
    return _build("GET", path, query=_query_with_path(path, query), headers=headers)


def build_delete(path: str, *, headers: Mapping[str, Any] | None = None) -> Request:
    return _build("DELETE", path, query=_query_with_path(path, None), headers=headers)


def build_post(
    path: str,
    params: Params | None = None,
    *,
    headers: Mapping[str, Any] | None = None,
) -> Request:
    merged = dict(headers or {})
    merged["content-type"] = FORM_CONTENT_TYPE
    return _build("POST", path, query=_query_with_path(path, None), headers=merged, body=form_url_encode(params))


def with_default_headers(req: Request, defaults: Mapping[str, Any] | None) -> Request:
    if not defaults:
        return req
    headers = canonicalize_headers(defaults)
    headers.update(req.headers)
    return Request(method=req.method, path=req.path, query=req.query, headers=headers, body=req.body)


def _build(
    method: str,
    path: str,
    *,
    query: dict[str, list[str]],
    headers: Mapping[str, Any] | None,
    body: bytes = b"",
) -> Request:
    return normalize_request(Request(method=method, path=path, query=query, headers=dict(headers or {}), body=body))


def _query_with_path(path: str, query: Params | None) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    value = str(path or "")
    if "?" in value:
        for key, item in urllib.parse.parse_qsl(value.split("?", 1)[1], keep_blank_values=True):
            out.setdefault(key, []).append(item)
    for key, values in clone_query(query).items():
        out.setdefault(key, []).extend(values)
    return out
