import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from schoolplacement.logger import get_logger


class ErrorCode(str, Enum):
    NOT_INITIALIZED = "NotInitialized"
    ALREADY_INITIALIZED = "AlreadyInitialized"
    UNAUTHORIZED = "Unauthorized"
    INVALID_INPUT = "InvalidInput"
    NOT_FOUND = "NotFound"
    EMPTY_RESULT = "EmptyResult"
    NO_HIGHSCHOOLS = "NoHighschools"
    NO_MATCH = "NoMatch"
    INTERNAL_FAILURE = "InternalFailure"


class ResultError(Exception):
    """Raised by ``Result.unwrap`` when called on a failure."""

    def __init__(self, error: ErrorCode, message: str):
        super().__init__(f"{error.value}: {message}")
        self.error = error
        self.message = message


@dataclass(frozen=True)
class Result:
    success: bool
    value: Any = None
    error: Optional[ErrorCode] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: Any = None, message: Optional[str] = None) -> "Result":
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, error: ErrorCode, message: str) -> "Result":
        return cls(success=False, error=error, message=message)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> Any:
        if not self.success:
            raise ResultError(self.error, self.message or "")
        return self.value


def guarded(message: str) -> Callable:
    """Turn unexpected exceptions into InternalFailure results."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Result:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                log = get_logger()
                log.exception(message, operation=func.__qualname__, error=str(e))
                return Result.fail(ErrorCode.INTERNAL_FAILURE, f"{message}: {e}")

        return wrapper
    return decorator
