from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Success:
    pass


@dataclass(frozen=True, slots=True)
class Fail:
    message: str


Result = Success | Fail

SUCCESS = Success()


def merge_result(current: Result, new: Result) -> Result:
    """Fold ``new`` into ``current``. The first failure is kept for good."""
    match current:
        case Fail():
            return current
        case Success():
            return new
