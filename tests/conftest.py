"""测试公共夹具"""
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import create_async_engine

from tech_digest.config_loader import Config
from tech_digest.infrastructure.db import TbUser, create_session_factory, init_db


def _route_key(url: Union[str, httpx.URL]) -> str:
    url = httpx.URL(url)
    return f"{url.scheme}://{url.host}{url.path}"


class FakeAPI:
    """基于 httpx.MockTransport 的简易路由，按 scheme://host/path 匹配（忽略查询参数）"""

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        url: str,
        json: Any = None,
        text: Optional[str] = None,
        status: int = 200,
    ) -> None:
        def _respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, json=json)

        self.routes[_route_key(url)] = _respond

    def add_error(self, url: str, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[_route_key(url)] = _raise

    def requested(self, url: str) -> List[httpx.Request]:
        key = _route_key(url)
        return [r for r in self.requests if _route_key(r.url) == key]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(_route_key(request.url))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


HN_BASE = "https://hn.test/v0"
DEV_BASE = "https://dev.test/api"
READER_BASE = "https://reader.test"
GEMINI_BASE = "https://gemini.test/v1beta"


@pytest.fixture
def config() -> Config:
    return Config(
        gemini_api_key="test-key",
        gemini_base_url=GEMINI_BASE,
        hn_api_base_url=HN_BASE,
        dev_api_base_url=DEV_BASE,
        reader_base_url=READER_BASE,
        story_delay_seconds=0,
        database_url="sqlite+aiosqlite://",
    )


@pytest.fixture
def fake_api() -> FakeAPI:
    return FakeAPI()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    async with engine.begin() as conn:
        await conn.execute(insert(TbUser).values({TbUser.id: 1, TbUser.post_count: 0}))
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)
