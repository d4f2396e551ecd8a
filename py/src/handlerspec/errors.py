from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn


@dataclass(slots=True)
class HandlerSpecError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DispatchError(HandlerSpecError):
    """Raised when application code under test raises.

    This is a test error, not an assertion failure: it aborts the example and
    is never folded into the accumulated result.
    """


@dataclass(frozen=True, slots=True)
class Fault:
    description: str
    exc: BaseException | None = None


def fault_from_exception(exc: BaseException) -> Fault:
    name = type(exc).__name__
    text = str(exc)
    return Fault(description=f"{name}: {text}" if text else name, exc=exc)


def raise_fault(code: str, fault: Fault) -> NoReturn:
    err = DispatchError(code, fault.description)
    if fault.exc is not None:
        raise err from fault.exc
    raise err
