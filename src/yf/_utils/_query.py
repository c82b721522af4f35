from typing import Any, Mapping

from httpx import URL, QueryParams

from .._config import Options


def serialize(params: Mapping[str, Any]) -> str:
    """Encode ``params`` as a query string without the leading ``?``.

    Keys keep their insertion order. A list or tuple value produces one
    ``key=value`` pair per element with the key repeated
    (``{"a": [1, 2]}`` -> ``a=1&a=2``). Scalars are coerced the way
    ``httpx.QueryParams`` does it: ``True`` -> ``true``, ``None`` -> empty.
    """
    return str(QueryParams(params))


def build_url(options: Options) -> str:
    """Build the final request URL from ``prefix_url``, ``url`` and ``params``."""
    url = options.url
    if options.prefix_url and not URL(url).is_absolute_url:
        prefix = options.prefix_url.rstrip("/")
        url = f"{prefix}/{url.lstrip('/')}" if url else options.prefix_url

    if options.params:
        serializer = options.serialize or serialize
        query = serializer(options.params)
        if query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{query}"

    return url
