"""yf: configurable HTTP request helper on top of httpx.

Instances carry shared options (prefix URL, headers, query parameters,
timeout, failure handling) and every call inherits and overrides them.
"""

from ._config import Options, merge_options
from ._instance import (
    Instance,
    create,
    default_instance,
    delete,
    get,
    head,
    patch,
    post,
    put,
    request,
)
from ._response import Blob, ResponsePromise
from ._retry import is_retryable_failure, retry_on_failure
from ._utils import serialize
from .models import AbortError, FailureKind, ResponseError, TimeoutError, failure_kind

__all__ = [
    "AbortError",
    "Blob",
    "FailureKind",
    "Instance",
    "Options",
    "ResponseError",
    "ResponsePromise",
    "TimeoutError",
    "create",
    "default_instance",
    "delete",
    "failure_kind",
    "get",
    "head",
    "is_retryable_failure",
    "merge_options",
    "patch",
    "post",
    "put",
    "request",
    "retry_on_failure",
    "serialize",
]
