import asyncio
from logging import getLogger
from typing import Awaitable, Callable, Optional, TypeVar

from ..models.errors import AbortError, TimeoutError

T = TypeVar("T")

logger = getLogger("yf")


async def race_cancellation(
    operation: Callable[[], Awaitable[T]],
    *,
    timeout: Optional[float] = None,
    signal: Optional[asyncio.Event] = None,
) -> T:
    """Run ``operation`` against an optional timer and an optional abort signal.

    Exactly one outcome is reported:

    - the operation settles first (or in the same loop iteration as a
      trigger): its result or exception is returned as is;
    - the timer fires, alone or together with the signal: ``TimeoutError``;
    - the signal fires first, or no timer is configured: ``AbortError``.

    On timeout or abort the operation task is cancelled right away and its
    eventual outcome is discarded. ``signal`` belongs to the caller and is
    only ever waited on.

    Args:
        operation: Factory for the awaitable to run, typically the transport call.
        timeout: Seconds to wait before giving up, or ``None``.
        signal: Caller-owned event; setting it aborts the request.

    Returns:
        The operation's result.

    Raises:
        TimeoutError: The timer fired before the operation settled.
        AbortError: The signal fired before the operation settled.
    """
    if signal is not None and signal.is_set():
        raise AbortError()

    if timeout is None and signal is None:
        return await operation()

    task = asyncio.ensure_future(operation())
    timer = asyncio.ensure_future(asyncio.sleep(timeout)) if timeout is not None else None
    watcher = asyncio.ensure_future(signal.wait()) if signal is not None else None
    triggers = [trigger for trigger in (timer, watcher) if trigger is not None]

    try:
        done, _ = await asyncio.wait(
            {task, *triggers}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        for trigger in triggers:
            trigger.cancel()

    if task in done:
        return task.result()

    task.cancel()
    await asyncio.gather(task, return_exceptions=True)

    if timer is not None and timer in done:
        logger.debug(f"Request cancelled: timed out after {timeout}s")
        raise TimeoutError(timeout)

    logger.debug("Request cancelled: abort signal set")
    raise AbortError()
