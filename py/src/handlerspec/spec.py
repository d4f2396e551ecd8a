"""Declaring example trees and running them under ``unittest``.

A suite is built with ``fn`` from a handler, an initializer for the shared
application context and a shutdown function::

    suite = fn(site, make_app, close_app, [
        it("serves the home page", lambda s: should_200(s, s.get("/"))),
        modify_handler(logged_in("ada"), [
            describe("dashboard", [
                it("greets the user", lambda s: should_have_text(s, "ada", s.get("/dash"))),
            ]),
        ]),
    ])

    HomeSpec = suite.to_test_case("HomeSpec")

The initializer runs once, before the first example. The shutdown runs once,
right after the last example of the whole tree finishes.
"""

from __future__ import annotations

import re
import threading
import unittest
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

from handlerspec.config import HarnessConfig, _normalize_harness_config
from handlerspec.context import Handler, HandlerTransform, Hook, SpecState
from handlerspec.errors import HandlerSpecError
from handlerspec.logger import get_logger
from handlerspec.results import Fail, Result, Success

Body = Callable[[SpecState], Any]
StateHook = Callable[[SpecState], Any]


@dataclass(slots=True)
class Example:
    description: str
    body: Body


@dataclass(slots=True)
class Group:
    description: str
    children: list[Example | Group]
    setup: list[StateHook] = field(default_factory=list)
    teardown: list[StateHook] = field(default_factory=list)


Node = Example | Group


@dataclass(frozen=True, slots=True)
class PlannedExample:
    path: tuple[str, ...]
    body: Body
    setup: tuple[StateHook, ...]
    teardown: tuple[StateHook, ...]

    @property
    def description(self) -> str:
        return " / ".join(p for p in self.path if p)


def it(description: str, body: Body) -> Example:
    if not callable(body):
        raise TypeError("handlerspec: example body must be callable")
    return Example(description=str(description or "").strip(), body=body)


def describe(description: str, children: Iterable[Node]) -> Group:
    return Group(description=str(description or "").strip(), children=list(children))


def modify_handler(transform: HandlerTransform, children: Iterable[Node]) -> Group:
    """Run every example in ``children`` against ``transform(handler)``."""

    def setup(state: SpecState) -> None:
        state.modify_handler(transform)

    return Group(description="", children=list(children), setup=[setup])


def before_eval(action: Hook, children: Iterable[Node]) -> Group:
    def setup(state: SpecState) -> None:
        state.eval(action)

    return Group(description="", children=list(children), setup=[setup])


def after_eval(action: Hook, children: Iterable[Node]) -> Group:
    def teardown(state: SpecState) -> None:
        state.eval(action)

    return Group(description="", children=list(children), teardown=[teardown])


def with_hooks(children: Iterable[Node], *, before: Hook | None = None, after: Hook | None = None) -> Group:
    """Set the hooks that wrap each request and ``eval`` inside ``children``."""

    def setup(state: SpecState) -> None:
        if before is not None:
            state.before = before
        if after is not None:
            state.after = after

    return Group(description="", children=list(children), setup=[setup])


class Suite:
    def __init__(
        self,
        handler: Handler,
        initializer: Callable[[], Any],
        shutdown: Callable[[Any], Any],
        children: Iterable[Node],
        *,
        description: str = "",
        config: HarnessConfig | None = None,
    ) -> None:
        self._handler = handler
        self._initializer = initializer
        self._shutdown = shutdown
        self._config = _normalize_harness_config(config)
        self._root = Group(description=str(description or "").strip(), children=list(children))
        self._examples = list(_plan(self._root, (), (), ()))

        self._lock = threading.Lock()
        self._remaining = len(self._examples)
        self._initialized = False
        self._init_error: Exception | None = None
        self._closed = False
        self._ctxt: Any = None

    @property
    def examples(self) -> list[PlannedExample]:
        return list(self._examples)

    @property
    def closed(self) -> bool:
        return self._closed

    def run_example(self, example: PlannedExample) -> Result:
        """Run one example on a fresh state and return its final result.

        Counts towards shutdown whatever happens, including errors raised by
        the example itself.
        """
        try:
            state = SpecState(handler=self._handler, ctxt=self._shared_context(), config=self._config)
            for setup in example.setup:
                setup(state)
            try:
                example.body(state)
            finally:
                for teardown in reversed(example.teardown):
                    teardown(state)
            return state.result
        finally:
            self._count_down()

    def close(self) -> None:
        """Shut the shared context down now unless that already happened."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            remaining = self._remaining
        if remaining > 0 and self._initialized:
            get_logger().warn("handlerspec: suite closed before every example ran", {"remaining": remaining})
        self._teardown()

    def to_test_case(self, name: str) -> type[unittest.TestCase]:
        attrs: dict[str, Any] = {"spec_suite": self}
        for index, example in enumerate(self._examples):
            attrs[_method_name(index, example)] = _test_method(example)
        return type(str(name), (SpecTestCase,), attrs)

    def to_suite(self, name: str = "HandlerSpec") -> unittest.TestSuite:
        case = self.to_test_case(name)
        tests = unittest.defaultTestLoader.loadTestsFromTestCase(case)
        return _SpecTestSuite(tests, self)

    def _shared_context(self) -> Any:
        with self._lock:
            if self._init_error is not None:
                raise self._init_error
            if self._closed:
                raise HandlerSpecError("handlerspec.suite_closed", "suite context was already shut down")
            if not self._initialized:
                try:
                    self._ctxt = self._initializer()
                except Exception as exc:
                    self._init_error = exc
                    get_logger().error("handlerspec: suite initializer raised", {"error": str(exc)})
                    raise
                self._initialized = True
                get_logger().info("handlerspec: suite initialized", {"examples": len(self._examples)})
            return self._ctxt

    def _count_down(self) -> None:
        with self._lock:
            self._remaining -= 1
            fire = self._remaining == 0 and not self._closed
            if fire:
                self._closed = True
        if fire:
            self._teardown()

    def _teardown(self) -> None:
        if not self._initialized:
            return
        self._shutdown(self._ctxt)
        get_logger().info("handlerspec: suite torn down", {})


def fn(
    handler: Handler,
    initializer: Callable[[], Any],
    shutdown: Callable[[Any], Any],
    children: Iterable[Node],
    *,
    description: str = "",
    config: HarnessConfig | None = None,
) -> Suite:
    return Suite(handler, initializer, shutdown, children, description=description, config=config)


class SpecTestCase(unittest.TestCase):
    spec_suite: Suite

    @classmethod
    def tearDownClass(cls) -> None:
        suite = getattr(cls, "spec_suite", None)
        if suite is not None:
            suite.close()
        super().tearDownClass()

    def run_spec_example(self, example: PlannedExample) -> None:
        match self.spec_suite.run_example(example):
            case Fail(message=message):
                self.fail(message)
            case Success():
                return None


class _SpecTestSuite(unittest.TestSuite):
    def __init__(self, tests: Iterable[unittest.TestCase | unittest.TestSuite], spec_suite: Suite) -> None:
        super().__init__(tests)
        self._spec_suite = spec_suite

    def run(self, result: unittest.TestResult, debug: bool = False) -> unittest.TestResult:
        try:
            return super().run(result, debug)
        finally:
            self._spec_suite.close()


def _plan(
    node: Node,
    path: tuple[str, ...],
    setup: tuple[StateHook, ...],
    teardown: tuple[StateHook, ...],
) -> Iterator[PlannedExample]:
    match node:
        case Example(description=description, body=body):
            yield PlannedExample(path=path + (description,), body=body, setup=setup, teardown=teardown)
        case Group(description=description, children=children, setup=more_setup, teardown=more_teardown):
            sub_path = path + (description,) if description else path
            for child in children:
                yield from _plan(child, sub_path, setup + tuple(more_setup), teardown + tuple(more_teardown))


def _method_name(index: int, example: PlannedExample) -> str:
    slug = re.sub(r"[^0-9a-zA-Z]+", "_", example.description).strip("_").lower()[:60]
    return f"test_{index:03d}_{slug}" if slug else f"test_{index:03d}"


def _test_method(example: PlannedExample) -> Callable[[SpecTestCase], None]:
    def test(self: SpecTestCase) -> None:
        self.run_spec_example(example)

    test.__doc__ = example.description or None
    return test
