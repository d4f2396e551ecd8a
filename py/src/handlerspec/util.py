from __future__ import annotations

from typing import Any, Iterable, Mapping

_UNRESERVED = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_.*")
_HEX = "0123456789ABCDEF"


def normalize_path(path: str) -> str:
    value = str(path or "").strip()
    if not value:
        return "/"
    if "?" in value:
        value = value.split("?", 1)[0]
    if not value.startswith("/"):
        value = "/" + value
    return value or "/"


def canonicalize_headers(headers: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> dict[str, list[str]]:
    if not headers:
        return {}
    items = headers.items() if isinstance(headers, Mapping) else list(headers)
    out: dict[str, list[str]] = {}
    for key, value in sorted(items, key=lambda kv: str(kv[0])):
        lower = str(key).strip().lower()
        if not lower:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        out.setdefault(lower, []).extend([str(v) for v in values])
    return out


def first_header_value(headers: dict[str, list[str]], name: str) -> str | None:
    values = headers.get(str(name).strip().lower()) or []
    if not values:
        return None
    return values[0]


def clone_query(query: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> dict[str, list[str]]:
    if not query:
        return {}
    items = query.items() if isinstance(query, Mapping) else list(query)
    out: dict[str, list[str]] = {}
    for key, value in items:
        values = value if isinstance(value, (list, tuple)) else [value]
        out.setdefault(str(key), []).extend([str(v) for v in values])
    return out


def to_bytes(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bytes):
        return bytes(value)
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, memoryview):
        return value.tobytes()
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError("body must be bytes-like or str")


def form_url_encode(params: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> bytes:
    """Encode pairs as an ``application/x-www-form-urlencoded`` body.

    Bare newlines become CRLF before escaping, the way browsers submit
    textarea contents.
    """
    query = clone_query(params)
    return b"&".join(
        _form_escape(key) + b"=" + _form_escape(value) for key, values in query.items() for value in values
    )


def _form_escape(value: str) -> bytes:
    raw = _normalize_newlines(value).encode("utf-8")
    out = bytearray()
    for byte in raw:
        if byte in _UNRESERVED:
            out.append(byte)
        elif byte == 0x20:
            out.extend(b"+")
        else:
            out.extend(("%" + _HEX[byte >> 4] + _HEX[byte & 0x0F]).encode("ascii"))
    return bytes(out)


def _normalize_newlines(value: str) -> str:
    out: list[str] = []
    prev = ""
    for ch in value:
        if ch == "\n" and prev != "\r":
            out.append("\r")
        out.append(ch)
        prev = ch
    return "".join(out)
