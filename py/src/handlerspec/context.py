from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from handlerspec.classify import TestResponse
from handlerspec.config import HarnessConfig
from handlerspec.request import Params, Request, build_delete, build_get, build_post
from handlerspec.results import SUCCESS, Result, merge_result
from handlerspec.testkit import evaluate, run_request

T = TypeVar("T")

Handler = Callable[[Request, Any], Any]
HandlerTransform = Callable[[Handler], Handler]
Hook = Callable[[Any], Any]


def noop_hook(_ctxt: Any) -> None:
    return None


@dataclass(slots=True)
class SpecState:
    """Per-example state: the accumulated result plus what requests run against.

    ``ctxt`` is the suite's shared application context. Everything else is
    private to the example and starts over from the suite template.
    """

    handler: Handler
    ctxt: Any
    result: Result = SUCCESS
    before: Hook = noop_hook
    after: Hook = noop_hook
    config: HarnessConfig = field(default_factory=HarnessConfig)

    def set_result(self, result: Result) -> None:
        self.result = merge_result(self.result, result)

    def modify_handler(self, transform: HandlerTransform) -> SpecState:
        self.handler = transform(self.handler)
        return self

    def get(
        self,
        path: str,
        query: Params | None = None,
        *,
        headers: Mapping[str, Any] | None = None,
    ) -> TestResponse:
        return self.request(build_get(path, query, headers=headers))

    def delete(self, path: str, *, headers: Mapping[str, Any] | None = None) -> TestResponse:
        return self.request(build_delete(path, headers=headers))

    def post(
        self,
        path: str,
        params: Params | None = None,
        *,
        headers: Mapping[str, Any] | None = None,
    ) -> TestResponse:
        return self.request(build_post(path, params, headers=headers))

    def request(self, request: Request) -> TestResponse:
        return run_request(self, request)

    def eval(self, action: Callable[[Any], T]) -> T:
        return evaluate(self, action)
