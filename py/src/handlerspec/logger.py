from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StructuredLogger(Protocol):
    def debug(self, message: str, *fields: dict[str, Any]) -> None: ...

    def info(self, message: str, *fields: dict[str, Any]) -> None: ...

    def warn(self, message: str, *fields: dict[str, Any]) -> None: ...

    def error(self, message: str, *fields: dict[str, Any]) -> None: ...


class NoOpLogger:
    def debug(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def info(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def warn(self, _message: str, *fields: dict[str, Any]) -> None:
        return None

    def error(self, _message: str, *fields: dict[str, Any]) -> None:
        return None


_global_logger: StructuredLogger = NoOpLogger()


def get_logger() -> StructuredLogger:
    return _global_logger


def set_logger(logger: StructuredLogger | None) -> None:
    global _global_logger
    _global_logger = logger if logger is not None else NoOpLogger()


__all__ = [
    "NoOpLogger",
    "StructuredLogger",
    "get_logger",
    "set_logger",
]
