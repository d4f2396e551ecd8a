"""Pass/fail assertions for examples.

Each assertion only records an outcome through ``SpecState.set_result``; none
of them raise. Once an example has failed, later assertions change nothing.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from handlerspec.classify import HtmlOk, JsonOk, NotFound, Other, Redirect, TestResponse
from handlerspec.context import SpecState
from handlerspec.results import SUCCESS, Fail
from handlerspec.selector import has_selector, select

T = TypeVar("T")


def should_equal(state: SpecState, expected: Any, actual: Any) -> None:
    if expected == actual:
        state.set_result(SUCCESS)
    else:
        state.set_result(Fail(f"Should have held: {expected!r} == {actual!r}"))


def should_not_equal(state: SpecState, expected: Any, actual: Any) -> None:
    if expected == actual:
        state.set_result(Fail(f"Should not have held: {expected!r} == {actual!r}"))
    else:
        state.set_result(SUCCESS)


def should_be_true(state: SpecState, value: Any) -> None:
    if value is True:
        state.set_result(SUCCESS)
    else:
        state.set_result(Fail(f"Value should have been True, got {value!r}."))


def should_not_be_true(state: SpecState, value: Any) -> None:
    if value is True:
        state.set_result(Fail("Value should not have been True."))
    else:
        state.set_result(SUCCESS)


def should_change(
    state: SpecState,
    change: Callable[[T], T],
    probe: Callable[[Any], T],
    action: Callable[[SpecState], Any],
) -> None:
    """Assert that running ``action`` moves ``probe`` from ``x`` to ``change(x)``.

    ``probe`` runs through ``SpecState.eval`` before and after the action, so
    it sees the shared context with the usual hooks around it.
    """
    before = state.eval(probe)
    action(state)
    after = state.eval(probe)
    should_equal(state, change(before), after)


def should_200(state: SpecState, response: TestResponse) -> None:
    if _is_200(response):
        state.set_result(SUCCESS)
    else:
        state.set_result(Fail(f"Expected a 200 response, got {response!r}"))


def should_not_200(state: SpecState, response: TestResponse) -> None:
    if _is_200(response):
        state.set_result(Fail(f"Expected a non-200 response, got {response!r}"))
    else:
        state.set_result(SUCCESS)


def should_404(state: SpecState, response: TestResponse) -> None:
    match response:
        case NotFound():
            state.set_result(SUCCESS)
        case _:
            state.set_result(Fail(f"Expected NotFound, got {response!r}"))


def should_not_404(state: SpecState, response: TestResponse) -> None:
    match response:
        case NotFound():
            state.set_result(Fail("Got NotFound back."))
        case _:
            state.set_result(SUCCESS)


def should_300(state: SpecState, response: TestResponse) -> None:
    match response:
        case Redirect():
            state.set_result(SUCCESS)
        case _:
            state.set_result(Fail(f"Expected a redirect, got {response!r}"))


def should_not_300(state: SpecState, response: TestResponse) -> None:
    match response:
        case Redirect():
            state.set_result(Fail(f"Got Redirect back: {response!r}"))
        case _:
            state.set_result(SUCCESS)


def should_300_to(state: SpecState, prefix: str, response: TestResponse) -> None:
    match response:
        case Redirect(location=location) if location.startswith(prefix):
            state.set_result(SUCCESS)
        case _:
            state.set_result(Fail(f"Expected a redirect to {prefix!r}, got {response!r}"))


def should_not_300_to(state: SpecState, prefix: str, response: TestResponse) -> None:
    """Fail only on a redirect whose location starts with ``prefix``.

    A response that is not a redirect at all passes.
    """
    match response:
        case Redirect(location=location) if location.startswith(prefix):
            state.set_result(Fail(f"Got Redirect to {location!r}, which starts with {prefix!r}."))
        case _:
            state.set_result(SUCCESS)


def should_have_selector(state: SpecState, selector: str, response: TestResponse) -> None:
    match response:
        case HtmlOk(body=body):
            if has_selector(body, selector):
                state.set_result(SUCCESS)
            else:
                state.set_result(Fail(f"Html should have contained selector: {selector}\n\n{body}"))
        case _:
            state.set_result(
                Fail(f"Non-HTML body should have contained css selector: {selector} (got {response!r})")
            )


def should_not_have_selector(state: SpecState, selector: str, response: TestResponse) -> None:
    match response:
        case HtmlOk(body=body) if has_selector(body, selector):
            state.set_result(Fail(f"Html should not have contained selector: {selector}\n\n{body}"))
        case _:
            state.set_result(SUCCESS)


def should_have_text(state: SpecState, text: str, response: TestResponse) -> None:
    match response:
        case HtmlOk(body=body):
            if text in body:
                state.set_result(SUCCESS)
            else:
                state.set_result(Fail(f"'{body}' does not contain '{text}'."))
        case _:
            state.set_result(Fail(f"{response!r} does not contain: {text}"))


def should_not_have_text(state: SpecState, text: str, response: TestResponse) -> None:
    match response:
        case HtmlOk(body=body) if text in body:
            state.set_result(Fail(f"'{body}' contains '{text}'."))
        case _:
            state.set_result(SUCCESS)


def restrict_response(selector: str, response: TestResponse) -> TestResponse:
    """Narrow an HTML response to the markup matching ``selector``.

    Other response kinds come back unchanged.
    """
    match response:
        case HtmlOk(status=status, body=body):
            return HtmlOk(status, "".join(select(body, selector)))
        case _:
            return response


def _is_200(response: TestResponse) -> bool:
    match response:
        case HtmlOk():
            return True
        case JsonOk(status=200):
            return True
        case Other(status=200):
            return True
        case _:
            return False
