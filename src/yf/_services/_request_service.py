import inspect
from logging import getLogger
from typing import Any

from httpx import AsyncClient, RequestError, Response

from .._config import Options
from .._utils import (
    build_url,
    get_httpx_client_kwargs,
    race_cancellation,
    resolve_options,
)
from ..models.errors import AbortError, ResponseError, TimeoutError, failure_kind

_FAILURES = (RequestError, ResponseError, TimeoutError, AbortError)


class RequestService:
    """Runs one request attempt: URL, headers, transport and failure hook."""

    def __init__(self) -> None:
        self._logger = getLogger("yf")

    async def send(self, options: Options) -> Response:
        options = await resolve_options(build_url(options), options)
        url = build_url(options)

        try:
            response = await race_cancellation(
                lambda: self._transport(url, options),
                timeout=options.timeout,
                signal=options.signal,
            )
            if not response.is_success:
                self._logger.debug(
                    f"Response: {response.status_code} for {options.method} {url}"
                )
                raise ResponseError(response)
        except _FAILURES as error:
            if options.on_failure is None:
                raise
            return await self._handle_failure(error, options)

        return response

    async def _transport(self, url: str, options: Options) -> Response:
        method = options.method.upper()
        self._logger.debug(f"Request: {method} {url}")
        self._logger.debug(f"HEADERS: {list(options.headers.keys())}")

        client_kwargs: dict[str, Any] = get_httpx_client_kwargs()
        if options.transport is not None:
            client_kwargs["transport"] = options.transport

        async with AsyncClient(**client_kwargs) as client:
            return await client.request(
                method,
                url,
                headers=options.headers,
                content=options.body,
                json=options.json_body,
                **(options.model_extra or {}),
            )

    async def _handle_failure(self, error: Exception, options: Options) -> Response:
        """Hand a failed attempt to ``on_failure``.

        The hook either raises (the raised error becomes the outcome) or
        returns the outcome of a reissued request. Awaitables are unwrapped
        until a response is left, so an async hook may return a
        ``ResponsePromise``. A hook returning ``None`` leaves the original
        error in place.
        """
        self._logger.debug(f"Invoking on_failure for {failure_kind(error).value} failure")

        result = options.on_failure(error, options)
        while inspect.isawaitable(result):
            result = await result

        if result is None:
            raise error
        if not isinstance(result, Response):
            raise TypeError(
                f"on_failure must raise or return a response, got {type(result).__name__}"
            )
        return result
