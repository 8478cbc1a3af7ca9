"""测试共用的假后端与数据"""
import json
from typing import Callable, Dict, List, Tuple, Union

import httpx
import pytest

from bookmark_client.api.client import BookmarkApiClient
from bookmark_client.session import Session

BASE_URL = "http://testserver"

Route = Union[Tuple[int, object], Callable[[httpx.Request], httpx.Response]]


def make_bookmark(hashed_id: str = "abc123", **overrides) -> dict:
    data = {
        "hashed_id": hashed_id,
        "url": "https://example.com",
        "memo": "Example site",
        "tags": ["tech", "news"],
        "created_at": "2024-01-01T00:00:00",
        "updated_at": "2024-01-02T00:00:00",
    }
    data.update(overrides)
    return data


class FakeBackend:
    """按 (method, path) 返回预设响应，并记录所有请求"""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: object = None) -> None:
        self.routes[(method, path)] = (status, body)

    def route(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def sent(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def json_body(request: httpx.Request) -> object:
        return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session() -> Session:
    return Session(token="test-token")


@pytest.fixture
def make_client(backend):
    def _make(session: Session) -> BookmarkApiClient:
        return BookmarkApiClient(
            session,
            base_url=BASE_URL,
            transport=httpx.MockTransport(backend.handler),
        )
    return _make
