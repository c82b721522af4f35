import builtins
from enum import Enum
from typing import Optional

import httpx


class FailureKind(str, Enum):
    """Classification of a failed request attempt, as seen by ``on_failure``."""

    TRANSPORT = "transport"
    STATUS = "status"
    TIMEOUT = "timeout"
    ABORT = "abort"


class ResponseError(Exception):
    """Raised when the server answers with a status outside the 2xx range.

    The response is kept on the error so a failure hook can inspect the
    status code or decode the body before deciding what to do.
    """

    kind = FailureKind.STATUS

    def __init__(self, response: httpx.Response, message: Optional[str] = None):
        self.response = response
        self.message = message or (
            f"{response.status_code} {response.reason_phrase}".strip()
        )
        super().__init__(self.message)


class TimeoutError(builtins.TimeoutError):
    """Raised when the configured ``timeout`` elapses before the response arrives."""

    kind = FailureKind.TIMEOUT

    def __init__(self, timeout: float):
        self.timeout = timeout
        self.message = f"Request timed out after {timeout}s"
        super().__init__(self.message)


class AbortError(Exception):
    """Raised when the caller's ``signal`` is set before the response arrives."""

    kind = FailureKind.ABORT

    def __init__(self, message: str = "The operation was aborted."):
        self.message = message
        super().__init__(self.message)


def failure_kind(error: BaseException) -> FailureKind:
    """Tag a failure so hooks can branch on the kind instead of the type.

    Args:
        error: The exception handed to ``on_failure``.

    Returns:
        The matching ``FailureKind``. Anything that is not one of yf's own
        errors came from the transport.
    """
    if isinstance(error, (ResponseError, TimeoutError, AbortError)):
        return error.kind
    return FailureKind.TRANSPORT
