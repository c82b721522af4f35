from .errors import AbortError, FailureKind, ResponseError, TimeoutError, failure_kind

__all__ = [
    "AbortError",
    "FailureKind",
    "ResponseError",
    "TimeoutError",
    "failure_kind",
]
