"""apps/gateway 测试配置 -- httpx AsyncClient + async DB fixture

ASGITransport 不触发 lifespan，fixture 手动完成与 lifespan 相同的初始化，
provider 使用无延迟的 demo 模式。
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from appkit.core.store import create_store_group
from appkit.gateway.services.app_controller import AppController
from appkit.provider import ProviderConfig, build_provider_router
from httpx import ASGITransport, AsyncClient

_TEST_ENV = ["APPKIT_DB_PATH", "APPKIT_SEARCH_K", "LOGFIRE_SEND_TO_LOGFIRE"]


@pytest_asyncio.fixture
async def gateway_db_path(tmp_path: Path) -> Path:
    """Gateway 临时数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def app(gateway_db_path: Path):
    """创建测试用 FastAPI app 实例（绕过 lifespan）"""
    os.environ["APPKIT_DB_PATH"] = str(gateway_db_path)
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from appkit.gateway.main import create_app

    application = create_app()

    store_group = await create_store_group(str(gateway_db_path))
    provider_router = build_provider_router(
        ProviderConfig(demo_chat_delay_s=0, demo_embed_delay_s=0)
    )
    application.state.store_group = store_group
    application.state.provider_router = provider_router
    application.state.controller = AppController(
        state=await store_group.state_repository.load(),
        repository=store_group.state_repository,
        provider_router=provider_router,
    )

    yield application

    await store_group.conn.close()
    for key in _TEST_ENV:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
