from ._cancellation import race_cancellation
from ._query import build_url, serialize
from ._resolver import resolve_options
from ._ssl_context import get_httpx_client_kwargs

__all__ = [
    "build_url",
    "get_httpx_client_kwargs",
    "race_cancellation",
    "resolve_options",
    "serialize",
]
