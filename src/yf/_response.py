import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generator

from httpx import Response

from ._config import Options


@dataclass(frozen=True)
class Blob:
    """Binary response body together with its content type."""

    content: bytes
    type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding)


class ResponsePromise:
    """Handle on a request that is already under way.

    The request is scheduled on the running event loop as soon as the
    promise is created. Awaiting the promise yields the ``httpx.Response``
    or raises the classified error. The readers below wait for the same
    outcome and then decode the body; called before the request has
    started, they also set the ``Accept`` header for it.

    Example:
        ```python
        api = yf.create(prefix_url="https://api.example.com")
        comments = await api.get("/comments").json()
        ```
    """

    def __init__(
        self, options: Options, send: Callable[[Options], Awaitable[Response]]
    ) -> None:
        self._options = options
        self._task = asyncio.get_running_loop().create_task(send(options))

    @property
    def options(self) -> Options:
        return self._options

    def __await__(self) -> Generator[Any, None, Response]:
        return self._task.__await__()

    def _accept(self, value: str) -> None:
        self._options.headers["Accept"] = value

    def json(self) -> Awaitable[Any]:
        """Decode the body as JSON, then apply ``on_json`` if configured."""
        self._accept("application/json")
        return self._json()

    async def _json(self) -> Any:
        response = await self._task
        parsed = response.json()
        if self._options.on_json is not None:
            parsed = self._options.on_json(parsed)
            if inspect.isawaitable(parsed):
                parsed = await parsed
        return parsed

    def text(self) -> Awaitable[str]:
        self._accept("text/*")
        return self._text()

    async def _text(self) -> str:
        response = await self._task
        return response.text

    def array_buffer(self) -> Awaitable[bytes]:
        self._accept("*/*")
        return self._array_buffer()

    async def _array_buffer(self) -> bytes:
        response = await self._task
        return response.content

    def blob(self) -> Awaitable[Blob]:
        self._accept("*/*")
        return self._blob()

    async def _blob(self) -> Blob:
        response = await self._task
        return Blob(
            content=response.content,
            type=response.headers.get("content-type", ""),
        )

    async def void(self) -> None:
        """Wait for the request and discard the body."""
        await self._task
