from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Iterator, TypeVar

from handlerspec.classify import TestResponse, classify_response
from handlerspec.errors import Fault, fault_from_exception, raise_fault
from handlerspec.logger import get_logger
from handlerspec.request import Request, with_default_headers

if TYPE_CHECKING:
    from handlerspec.context import Handler, Hook, SpecState

T = TypeVar("T")


def run_request(state: SpecState, request: Request) -> TestResponse:
    """Dispatch ``request`` through the state's handler and classify the result.

    The before-hook, handler and after-hook run in that order; the after-hook
    runs even when the handler raises. A raised handler surfaces as
    ``DispatchError`` rather than a response kind, and wins over a fault in
    the after-hook.
    """
    req = with_default_headers(request, state.config.default_headers)
    with dispatch_hooks(state):
        outcome = run_handler_safe(req, state.handler, state.ctxt)
        if isinstance(outcome, Fault):
            _log_fault("handlerspec.dispatch_fault", req, outcome)
            raise_fault("handlerspec.dispatch_fault", outcome)

    try:
        kind = classify_response(outcome, json_content_types=state.config.json_content_types)
    except Exception as exc:  # noqa: BLE001
        fault = fault_from_exception(exc)
        _log_fault("handlerspec.dispatch_fault", req, fault)
        raise_fault("handlerspec.dispatch_fault", fault)

    get_logger().debug(
        "handlerspec: dispatched request",
        {"method": req.method, "path": req.path, "kind": type(kind).__name__},
    )
    return kind


def evaluate(state: SpecState, action: Callable[[Any], T]) -> T:
    with dispatch_hooks(state):
        outcome = eval_handler_safe(action, state.ctxt)
        if isinstance(outcome, Fault):
            get_logger().error("handlerspec: eval raised", {"description": outcome.description})
            raise_fault("handlerspec.eval_fault", outcome)
    return outcome


def run_handler_safe(request: Request, handler: Handler, ctxt: Any) -> Any:
    """Run ``handler`` and return its response, or a ``Fault`` if it raised."""
    try:
        return handler(request, ctxt)
    except Exception as exc:  # noqa: BLE001
        return fault_from_exception(exc)


def eval_handler_safe(action: Callable[[Any], T], ctxt: Any) -> T | Fault:
    try:
        return action(ctxt)
    except Exception as exc:  # noqa: BLE001
        return fault_from_exception(exc)


@contextmanager
def dispatch_hooks(state: SpecState) -> Iterator[None]:
    """Run the before-hook, the block, then the after-hook.

    When the block raises, the after-hook still runs; a fault in it is logged
    and the block's error propagates.
    """
    _run_hook(state.before, state.ctxt)
    try:
        yield
    except BaseException:
        outcome = eval_handler_safe(state.after, state.ctxt)
        if isinstance(outcome, Fault):
            get_logger().error("handlerspec: hook raised", {"description": outcome.description})
        raise
    _run_hook(state.after, state.ctxt)


def _run_hook(hook: Hook, ctxt: Any) -> None:
    outcome = eval_handler_safe(hook, ctxt)
    if isinstance(outcome, Fault):
        get_logger().error("handlerspec: hook raised", {"description": outcome.description})
        raise_fault("handlerspec.hook_fault", outcome)


def _log_fault(code: str, req: Request, fault: Fault) -> None:
    get_logger().error(
        "handlerspec: handler raised",
        {"code": code, "method": req.method, "path": req.path, "description": fault.description},
    )
