import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

import yf

BODY_VERBS = [("POST", yf.post), ("PUT", yf.put), ("PATCH", yf.patch)]
ALL_VERBS = [
    ("GET", yf.get),
    *BODY_VERBS,
    ("DELETE", yf.delete),
    ("HEAD", yf.head),
]


class TestMethods:
    @pytest.mark.anyio
    async def test_get_success(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url="http://localhost/comments", text="ok")

        assert await yf.get("http://localhost/comments").text() == "ok"

    @pytest.mark.anyio
    async def test_numeric_header_is_sent_as_text(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="GET", url="http://localhost/comments", text="ok")

        await yf.get("http://localhost/comments", headers={"X-Retry-Count": 3})

        assert httpx_mock.get_request().headers["x-retry-count"] == "3"

    @pytest.mark.anyio
    @pytest.mark.parametrize("method,verb", BODY_VERBS)
    async def test_json_body(self, httpx_mock: HTTPXMock, method, verb):
        httpx_mock.add_response(method=method, url="http://localhost/comments", text="ok")

        result = await verb("http://localhost/comments", json={"user": "test"}).text()

        assert result == "ok"
        request = httpx_mock.get_request()
        assert request is not None
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"user": "test"}

    @pytest.mark.anyio
    @pytest.mark.parametrize("method,verb", BODY_VERBS)
    async def test_text_body(self, httpx_mock: HTTPXMock, method, verb):
        httpx_mock.add_response(method=method, url="http://localhost/comments", text="ok")

        result = await verb("http://localhost/comments", body="data").text()

        assert result == "ok"
        request = httpx_mock.get_request()
        assert request is not None
        assert request.content == b"data"

    @pytest.mark.anyio
    @pytest.mark.parametrize("method,verb", BODY_VERBS)
    async def test_multipart_body(self, httpx_mock: HTTPXMock, method, verb):
        httpx_mock.add_response(method=method, url="http://localhost/comments", text="ok")

        result = await verb(
            "http://localhost/comments", files={"user": ("user.txt", b"test")}
        ).text()

        assert result == "ok"
        request = httpx_mock.get_request()
        assert request is not None
        assert request.headers["content-type"].startswith("multipart/form-data;")
        assert b'name="user"' in request.content

    @pytest.mark.anyio
    async def test_delete_success(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="DELETE", url="http://localhost/comments/1", text="ok")

        assert await yf.delete("http://localhost/comments/1").text() == "ok"

    @pytest.mark.anyio
    async def test_head_success(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="HEAD", url="http://localhost/comments/1")

        response = await yf.head("http://localhost/comments/1")

        assert response.status_code == 200

    @pytest.mark.anyio
    @pytest.mark.parametrize("method,verb", ALL_VERBS)
    async def test_failed_request_raises_response_error(
        self, httpx_mock: HTTPXMock, method, verb
    ):
        httpx_mock.add_response(method=method, status_code=400)

        with pytest.raises(yf.ResponseError) as exc_info:
            await verb("http://localhost/comments")

        assert isinstance(exc_info.value.response, httpx.Response)
        assert exc_info.value.response.status_code == 400
        assert exc_info.value.response.request.method == method

    @pytest.mark.anyio
    @pytest.mark.parametrize("method,verb", ALL_VERBS)
    async def test_instance_verbs(self, httpx_mock: HTTPXMock, method, verb):
        httpx_mock.add_response(method=method, url="http://localhost/comments")
        api = yf.create(prefix_url="http://localhost")

        response = await getattr(api, method.lower())("/comments")

        assert response.request.method == method
