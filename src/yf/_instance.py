from functools import lru_cache
from typing import Any, Optional

from ._config import (
    Options,
    OptionsLike,
    coerce_options,
    load_default_options,
    merge_options,
)
from ._response import ResponsePromise
from ._services import RequestService


class Instance:
    """Reusable request configuration with bound HTTP verbs.

    ``options`` is read at the start of every call, so changing it in place
    (``api.options.prefix_url = ...``) redirects all later requests made
    through this instance. ``extend`` never touches the parent's options.
    """

    def __init__(self, options: Optional[Options] = None) -> None:
        self.options = options if options is not None else Options()
        self._service = RequestService()

    def extend(self, options: OptionsLike = None, **fields: Any) -> "Instance":
        return Instance(merge_options(self.options, coerce_options(options, **fields)))

    def request(self, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        merged = merge_options(self.options, coerce_options(options, **fields))
        return ResponsePromise(merged, self._service.send)

    def get(self, url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        return self.request(options, **fields, url=url, method="GET")

    def post(self, url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        return self.request(options, **fields, url=url, method="POST")

    def put(self, url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        return self.request(options, **fields, url=url, method="PUT")

    def patch(self, url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        return self.request(options, **fields, url=url, method="PATCH")

    def delete(self, url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        return self.request(options, **fields, url=url, method="DELETE")

    def head(self, url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
        return self.request(options, **fields, url=url, method="HEAD")


def create(options: OptionsLike = None, **fields: Any) -> Instance:
    """Create an instance from an ``Options``, a mapping, or keyword fields.

    Example:
        ```python
        api = yf.create(prefix_url="https://api.example.com", timeout=10)
        users = await api.get("/users", params={"page": 2}).json()
        ```
    """
    return Instance(merge_options(coerce_options(options, **fields)))


@lru_cache(maxsize=1)
def default_instance() -> Instance:
    """Process-wide instance behind the module-level verbs.

    Built once from ``YF_PREFIX_URL`` and ``YF_TIMEOUT``; call
    ``default_instance.cache_clear()`` to pick up a changed environment.
    """
    return Instance(load_default_options())


def request(options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().request(options, **fields)


def get(url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().get(url, options, **fields)


def post(url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().post(url, options, **fields)


def put(url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().put(url, options, **fields)


def patch(url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().patch(url, options, **fields)


def delete(url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().delete(url, options, **fields)


def head(url: str, options: OptionsLike = None, **fields: Any) -> ResponsePromise:
    return default_instance().head(url, options, **fields)
