"""集成测试共享 fixture"""

import os
from pathlib import Path

import pytest_asyncio
from appkit.core.store import create_store_group
from appkit.gateway.services.app_controller import AppController
from appkit.provider import ProviderConfig, build_provider_router


async def _start_app(db_path: str):
    """按 lifespan 的顺序组装 app，返回 (app, store_group)"""
    from appkit.gateway.main import create_app

    app = create_app()
    store_group = await create_store_group(db_path)
    provider_router = build_provider_router(
        ProviderConfig(demo_chat_delay_s=0, demo_embed_delay_s=0)
    )
    app.state.store_group = store_group
    app.state.provider_router = provider_router
    app.state.controller = AppController(
        state=await store_group.state_repository.load(),
        repository=store_group.state_repository,
        provider_router=provider_router,
    )
    return app, store_group


@pytest_asyncio.fixture
async def integration_db_path(tmp_path: Path):
    """集成测试数据库路径"""
    db_path = tmp_path / "durable.db"
    os.environ["APPKIT_DB_PATH"] = str(db_path)
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    yield str(db_path)

    os.environ.pop("APPKIT_DB_PATH", None)
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def start_app():
    """app 启动函数，可多次调用以模拟重启"""
    return _start_app
