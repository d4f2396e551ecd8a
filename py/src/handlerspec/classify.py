from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from handlerspec.config import DEFAULT_JSON_CONTENT_TYPES
from handlerspec.response import normalize_response, read_body
from handlerspec.util import first_header_value


@dataclass(frozen=True, slots=True)
class HtmlOk:
    status: int
    body: str


@dataclass(frozen=True, slots=True)
class JsonOk:
    status: int
    body: bytes


@dataclass(frozen=True, slots=True)
class NotFound:
    pass


@dataclass(frozen=True, slots=True)
class Redirect:
    status: int
    location: str


@dataclass(frozen=True, slots=True)
class Other:
    status: int


@dataclass(frozen=True, slots=True)
class Empty:
    pass


TestResponse = HtmlOk | JsonOk | NotFound | Redirect | Other | Empty


def classify_response(
    resp: Any,
    *,
    json_content_types: tuple[str, ...] = DEFAULT_JSON_CONTENT_TYPES,
) -> TestResponse:
    """Map a raw handler response onto exactly one response kind.

    Only a 200 has its body read; the content-type has to equal one of
    ``json_content_types`` verbatim to count as JSON.
    """
    normalized = normalize_response(resp)
    match normalized.status:
        case 404:
            return NotFound()
        case 200:
            body = read_body(normalized)
            content_type = first_header_value(normalized.headers, "content-type")
            if content_type is not None and content_type in json_content_types:
                return JsonOk(200, body)
            return HtmlOk(200, body.decode("utf-8", errors="replace"))
        case status if 300 <= status < 400:
            return Redirect(status, first_header_value(normalized.headers, "location") or "")
        case status:
            return Other(status)
