from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from handlerspec.assertions import should_equal
from handlerspec.context import SpecState
from handlerspec.results import SUCCESS, Fail


@dataclass(frozen=True, slots=True)
class Value:
    """The form should validate and produce exactly ``value``."""

    value: Any


@dataclass(frozen=True, slots=True)
class Predicate:
    """The form should validate and ``check`` should accept the value."""

    check: Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class ErrorPaths:
    """The form should fail with exactly these error paths populated."""

    paths: list[str]


FormExpectations = Value | Predicate | ErrorPaths


@dataclass(frozen=True, slots=True)
class FormOutcome:
    value: Any = None
    errors: list[str] = field(default_factory=list)


Validator = Callable[[Any, Mapping[str, str]], FormOutcome]


def form(
    state: SpecState,
    expected: FormExpectations,
    validate: Validator,
    params: Mapping[str, str],
) -> None:
    outcome = state.eval(lambda ctxt: validate(ctxt, dict(params)))
    errors = [str(p) for p in (outcome.errors or [])]
    value = None if errors else outcome.value

    match expected:
        case Value(value=want):
            should_equal(state, want, value)
        case Predicate(check=check):
            if errors:
                state.set_result(Fail(f"Expected form to validate. Resulted in errors: {errors!r}"))
            elif check(value):
                state.set_result(SUCCESS)
            else:
                state.set_result(Fail(f"Expected predicate to pass on value: {value!r}"))
        case ErrorPaths(paths=paths):
            want_paths = [str(p) for p in paths]
            if not all(p in errors for p in want_paths):
                state.set_result(
                    Fail(f"Did not have all errors specified. Got:\n\n{errors!r}\n\nBut expected:\n\n{want_paths!r}")
                )
            elif len(errors) != len(want_paths):
                state.set_result(
                    Fail(f"Number of errors did not match test. Got:\n\n{errors!r}\n\nBut expected:\n\n{want_paths!r}")
                )
            else:
                state.set_result(SUCCESS)
