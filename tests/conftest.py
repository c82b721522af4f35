import asyncio
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Ensure local source package (src/yf) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from yf import default_instance  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset the default instance and its environment before each test."""
    monkeypatch.delenv("YF_PREFIX_URL", raising=False)
    monkeypatch.delenv("YF_TIMEOUT", raising=False)
    default_instance.cache_clear()


class SlowTransport(httpx.MockTransport):
    """Mock transport answering after ``delay`` seconds and recording cancellation."""

    def __init__(self, delay: float, status_code: int = 200, text: str = "ok"):
        self.delay = delay
        self.status_code = status_code
        self.text = text
        self.calls = 0
        self.cancelled = False
        super().__init__(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return httpx.Response(self.status_code, text=self.text)


@pytest.fixture
def slow_transport() -> Callable[..., SlowTransport]:
    return SlowTransport
