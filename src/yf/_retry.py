import logging
from typing import Awaitable, Callable

from httpx import Response
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from ._config import Options
from ._instance import request
from .models.errors import FailureKind, failure_kind

logger = logging.getLogger("yf")


def is_retryable_failure(error: BaseException) -> bool:
    """Transport errors, timeouts, 429 and 5xx responses are worth another try."""
    kind = failure_kind(error)
    if kind is FailureKind.STATUS:
        status_code = error.response.status_code  # type: ignore[attr-defined]
        return status_code == 429 or 500 <= status_code < 600
    return kind in (FailureKind.TRANSPORT, FailureKind.TIMEOUT)


def retry_on_failure(
    *,
    attempts: int = 3,
    wait: wait_base = wait_exponential(multiplier=1, min=1, max=10),
    retry_if: Callable[[BaseException], bool] = is_retryable_failure,
) -> Callable[[Exception, Options], Awaitable[Response]]:
    """Build an ``on_failure`` hook that reissues the failed request.

    yf never retries on its own; this is an explicit policy a caller opts
    into per instance or per request.

    Args:
        attempts: Maximum number of reissued requests.
        wait: tenacity wait strategy applied between reissued requests.
        retry_if: Decides which failures are retried, both for the original
            failure and for the reissued attempts.

    Returns:
        A coroutine function to use as ``on_failure``.

    Example:
        ```python
        api = yf.create(
            prefix_url="https://api.example.com",
            on_failure=yf.retry_on_failure(attempts=5),
        )
        ```
    """

    async def on_failure(error: Exception, options: Options) -> Response:
        if not retry_if(error):
            raise error

        retry_options = options.model_copy(update={"on_failure": None})
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait,
            retry=retry_if_exception(retry_if),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await request(retry_options)

    return on_failure
