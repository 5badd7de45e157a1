"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + AppState 加载 + ProviderRouter 初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from appkit.core.config import get_db_path
from appkit.core.store import create_store_group
from appkit.provider import build_provider_router, load_provider_config
from fastapi import FastAPI

from .errors import register_error_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import composer, health, rag, spec, ui, workbench
from .services.app_controller import AppController

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期：启动时打开 DB、加载状态、初始化 provider，关闭时清理连接"""
    store_group = await create_store_group(get_db_path())
    app.state.store_group = store_group

    provider_router = build_provider_router(load_provider_config())
    app.state.provider_router = provider_router

    state = await store_group.state_repository.load()
    app.state.controller = AppController(
        state=state,
        repository=store_group.state_repository,
        provider_router=provider_router,
    )
    log.info("app_started", provider_mode=provider_router.mode)

    yield

    if getattr(app.state, "store_group", None):
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="AppKit Gateway",
        version="0.1.0",
        description="AppKit prompt composer / mini RAG / workbench API",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    register_error_handlers(app)

    setup_logging()
    setup_logfire(app)

    app.include_router(spec.router, tags=["spec"])
    app.include_router(composer.router, tags=["composer"])
    app.include_router(rag.router, tags=["rag"])
    app.include_router(workbench.router, tags=["workbench"])
    app.include_router(ui.router, tags=["ui"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
