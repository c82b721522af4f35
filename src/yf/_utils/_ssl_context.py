import os
import ssl
from functools import lru_cache
from typing import Any, Union

import truststore

ENV_DISABLE_SSL_VERIFY = "YF_DISABLE_SSL_VERIFY"


@lru_cache(maxsize=1)
def create_ssl_context() -> ssl.SSLContext:
    """TLS context backed by the operating system's certificate store."""
    return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def ssl_verification() -> Union[ssl.SSLContext, bool]:
    if os.environ.get(ENV_DISABLE_SSL_VERIFY, "").lower() in ("1", "true", "yes"):
        return False
    return create_ssl_context()


def get_httpx_client_kwargs() -> dict[str, Any]:
    """Keyword arguments for the ``httpx.AsyncClient`` used per request attempt.

    httpx's own timeout is switched off: the timeout configured on the
    request options is enforced by yf so it can be told apart from an abort.
    """
    return {
        "verify": ssl_verification(),
        "follow_redirects": True,
        "timeout": None,
    }
