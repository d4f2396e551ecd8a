from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from handlerspec.util import canonicalize_headers

DEFAULT_JSON_CONTENT_TYPES: tuple[str, ...] = ("application/json",)


@dataclass(slots=True)
class HarnessConfig:
    default_headers: dict[str, Any] = field(default_factory=dict)
    json_content_types: tuple[str, ...] = DEFAULT_JSON_CONTENT_TYPES


def _normalize_harness_config(config: HarnessConfig | None) -> HarnessConfig:
    if config is None:
        return HarnessConfig()

    headers = getattr(config, "default_headers", None)
    default_headers = canonicalize_headers(headers) if isinstance(headers, dict) else {}

    raw_types = getattr(config, "json_content_types", None)
    if isinstance(raw_types, str):
        raw_types = (raw_types,)
    json_types: tuple[str, ...] = DEFAULT_JSON_CONTENT_TYPES
    if isinstance(raw_types, (list, tuple)):
        cleaned = tuple(str(t).strip() for t in raw_types if str(t or "").strip())
        if cleaned:
            json_types = cleaned

    return HarnessConfig(default_headers=default_headers, json_content_types=json_types)
