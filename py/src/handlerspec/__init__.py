"""handlerspec: in-process HTTP handler testing with first-failure-wins assertions."""

from __future__ import annotations

from handlerspec.assertions import (
    restrict_response,
    should_200,
    should_300,
    should_300_to,
    should_404,
    should_be_true,
    should_change,
    should_equal,
    should_have_selector,
    should_have_text,
    should_not_200,
    should_not_300,
    should_not_300_to,
    should_not_404,
    should_not_be_true,
    should_not_equal,
    should_not_have_selector,
    should_not_have_text,
)
from handlerspec.classify import Empty, HtmlOk, JsonOk, NotFound, Other, Redirect, TestResponse, classify_response
from handlerspec.config import HarnessConfig
from handlerspec.context import Handler, SpecState
from handlerspec.errors import DispatchError, Fault, HandlerSpecError
from handlerspec.factory import Factory
from handlerspec.forms import ErrorPaths, FormExpectations, FormOutcome, Predicate, Value, form
from handlerspec.logger import NoOpLogger, StructuredLogger, get_logger, set_logger
from handlerspec.request import Request, build_delete, build_get, build_post
from handlerspec.response import Response, html, json, not_found, redirect, text
from handlerspec.results import Fail, Result, Success
from handlerspec.spec import Suite, after_eval, before_eval, describe, fn, it, modify_handler, with_hooks
from handlerspec.testkit import eval_handler_safe, run_handler_safe, run_request

__all__ = [
    "DispatchError",
    "Empty",
    "ErrorPaths",
    "Factory",
    "Fail",
    "Fault",
    "FormExpectations",
    "FormOutcome",
    "Handler",
    "HandlerSpecError",
    "HarnessConfig",
    "HtmlOk",
    "JsonOk",
    "NoOpLogger",
    "NotFound",
    "Other",
    "Predicate",
    "Redirect",
    "Request",
    "Response",
    "Result",
    "SpecState",
    "StructuredLogger",
    "Success",
    "Suite",
    "TestResponse",
    "Value",
    "after_eval",
    "before_eval",
    "build_delete",
    "build_get",
    "build_post",
    "classify_response",
    "describe",
    "eval_handler_safe",
    "fn",
    "form",
    "get_logger",
    "html",
    "it",
    "json",
    "modify_handler",
    "not_found",
    "redirect",
    "restrict_response",
    "run_handler_safe",
    "run_request",
    "set_logger",
    "should_200",
    "should_300",
    "should_300_to",
    "should_404",
    "should_be_true",
    "should_change",
    "should_equal",
    "should_have_selector",
    "should_have_text",
    "should_not_200",
    "should_not_300",
    "should_not_300_to",
    "should_not_404",
    "should_not_be_true",
    "should_not_equal",
    "should_not_have_selector",
    "should_not_have_text",
    "text",
    "with_hooks",
]
