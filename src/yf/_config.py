import asyncio
import os
from typing import Any, Callable, Mapping, Optional, Union

from httpx import AsyncBaseTransport, Headers
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX_URL = "YF_PREFIX_URL"
ENV_TIMEOUT = "YF_TIMEOUT"


class Options(BaseModel):
    """Request configuration shared by an instance and overridden per call.

    Options stay mutable after creation: assigning ``instance.options.prefix_url``
    or editing ``instance.options.headers`` affects every later request made
    through that instance.

    Fields that are not declared below are kept in ``model_extra`` and handed
    to ``httpx.AsyncClient.request`` as keyword arguments (``data``, ``files``,
    ``cookies``, ``follow_redirects``, ...).
    """

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )

    url: str = ""
    method: str = "GET"
    prefix_url: Optional[str] = None
    headers: Headers = Field(default_factory=Headers)
    params: dict[str, Any] = Field(default_factory=dict)
    timeout: Optional[float] = None
    signal: Optional[asyncio.Event] = None
    serialize: Optional[Callable[..., str]] = None
    on_json: Optional[Callable[..., Any]] = None
    on_failure: Optional[Callable[..., Any]] = None
    get_options: Optional[Callable[..., Any]] = None
    body: Any = None
    json_body: Any = Field(default=None, alias="json")
    transport: Optional[AsyncBaseTransport] = None

    @field_validator("headers", mode="before")
    @classmethod
    def _copy_headers(cls, value: Any) -> Headers:
        return to_headers(value)

    @field_validator("params", mode="before")
    @classmethod
    def _copy_params(cls, value: Any) -> dict[str, Any]:
        return dict(value) if value is not None else {}


OptionsLike = Union[Options, Mapping[str, Any], None]


def to_headers(value: Any) -> Headers:
    """Copy ``value`` into ``httpx.Headers``, stringifying non-text values."""
    if value is None:
        return Headers()
    if isinstance(value, Headers):
        return Headers(value)
    items = value.items() if isinstance(value, Mapping) else value
    return Headers(
        [
            (key, item if isinstance(item, (str, bytes)) else str(item))
            for key, item in items
        ]
    )


def _explicit_values(options: Options) -> dict[str, Any]:
    # explicitly set fields only, so an unset override never hides the base value
    values = {
        name: getattr(options, name)
        for name in options.model_fields_set
        if name in Options.model_fields
    }
    values.update(options.model_extra or {})
    return values


def merge_headers(*layers: Any) -> Headers:
    """Union of header layers, later layers winning per (case-insensitive) key."""
    merged = Headers()
    for layer in layers:
        if layer:
            merged.update(to_headers(layer))
    return merged


def merge_options(base: Options, override: Optional[Options] = None) -> Options:
    """Combine two option layers into a new ``Options``.

    Scalar fields and passthrough fields take the override's value when it was
    set explicitly (an explicit ``None`` included), otherwise the base value.
    ``headers`` and ``params`` are merged key by key with the override winning.

    Args:
        base: The lower layer, e.g. the instance options.
        override: The upper layer, e.g. the per-call options.

    Returns:
        A fresh ``Options``. Its ``headers`` and ``params`` are new containers,
        so mutating them never reaches back into ``base`` or ``override``.
    """
    if override is None:
        override = Options()

    values = {**_explicit_values(base), **_explicit_values(override)}
    values["headers"] = merge_headers(base.headers, override.headers)
    values["params"] = {**(base.params or {}), **(override.params or {})}
    return Options.model_validate(values)


def coerce_options(options: OptionsLike = None, **changes: Any) -> Options:
    """Turn a mapping or ``Options`` plus keyword fields into one ``Options``."""
    if isinstance(options, Options):
        base = options
    else:
        base = Options.model_validate(dict(options or {}))

    if not changes:
        return base
    return merge_options(base, Options.model_validate(changes))


def load_default_options() -> Options:
    """Read the default instance settings from the environment.

    ``YF_PREFIX_URL`` sets ``prefix_url`` and ``YF_TIMEOUT`` sets ``timeout``
    in seconds.

    Raises:
        ValueError: If ``YF_TIMEOUT`` is not a number.
    """
    values: dict[str, Any] = {}

    prefix_url = os.environ.get(ENV_PREFIX_URL)
    if prefix_url:
        values["prefix_url"] = prefix_url

    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            values["timeout"] = float(timeout)
        except ValueError as e:
            raise ValueError(
                f"{ENV_TIMEOUT} must be a number of seconds, got {timeout!r}"
            ) from e

    return Options.model_validate(values)
