from __future__ import annotations

import sys
import unittest
from pathlib import Path
from typing import Any, Mapping

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "py" / "src"))

from handlerspec.context import SpecState  # noqa: E402
from handlerspec.errors import DispatchError  # noqa: E402
from handlerspec.forms import ErrorPaths, FormOutcome, Predicate, Value, form  # noqa: E402
from handlerspec.results import Fail, Success  # noqa: E402


def signup(ctxt: Any, params: Mapping[str, str]) -> FormOutcome:
    errors = []
    email = params.get("email", "")
    if "@" not in email:
        errors.append("signup.email")
    if email in ctxt["taken"]:
        errors.append("signup.email.taken")
    if len(params.get("password", "")) < 8:
        errors.append("signup.password")
    if errors:
        return FormOutcome(errors=errors)
    return FormOutcome(value={"email": email})


def _state() -> SpecState:
    return SpecState(handler=lambda _r, _c: None, ctxt={"taken": {"used@example.com"}})


class TestForms(unittest.TestCase):
    def test_value_expectation(self) -> None:
        state = _state()
        form(state, Value({"email": "a@example.com"}), signup, {"email": "a@example.com", "password": "longenough"})
        self.assertEqual(state.result, Success())

        state = _state()
        form(state, Value({"email": "a@example.com"}), signup, {"email": "nope", "password": "longenough"})
        self.assertIsInstance(state.result, Fail)

    def test_predicate_expectation(self) -> None:
        state = _state()
        form(state, Predicate(lambda v: v["email"].endswith(".com")), signup, {"email": "a@b.com", "password": "12345678"})
        self.assertEqual(state.result, Success())

        state = _state()
        form(state, Predicate(lambda v: v["email"].endswith(".org")), signup, {"email": "a@b.com", "password": "12345678"})
        self.assertIn("Expected predicate to pass", state.result.message)

        state = _state()
        form(state, Predicate(lambda _v: True), signup, {"email": "bad"})
        self.assertIn("Expected form to validate", state.result.message)
        self.assertIn("signup.email", state.result.message)

    def test_error_paths_expectation(self) -> None:
        state = _state()
        form(state, ErrorPaths(["signup.password", "signup.email"]), signup, {"email": "bad"})
        self.assertEqual(state.result, Success())

        state = _state()
        form(state, ErrorPaths(["signup.email"]), signup, {"email": "bad"})
        self.assertIn("Number of errors did not match", state.result.message)

        state = _state()
        form(state, ErrorPaths(["signup.email.taken"]), signup, {"email": "bad", "password": "12345678"})
        self.assertIn("Did not have all errors specified", state.result.message)

        state = _state()
        form(
            state,
            ErrorPaths(["signup.email.taken"]),
            signup,
            {"email": "used@example.com", "password": "12345678"},
        )
        self.assertEqual(state.result, Success())

    def test_validator_errors_are_not_assertion_failures(self) -> None:
        def broken(_ctxt: Any, _params: Mapping[str, str]) -> FormOutcome:
            raise RuntimeError("db down")

        state = _state()
        with self.assertRaises(DispatchError):
            form(state, Value(None), broken, {})
        self.assertEqual(state.result, Success())
