"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，SQLite 连通性 + 磁盘空间 + 可选 provider 探测。
"""

import shutil

import structlog
from fastapi import APIRouter, Query, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(
    request: Request,
    profile: str | None = Query(
        default=None,
        description="core（默认）仅核心检查；llm/full 包含 provider 健康检查",
    ),
):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. sqlite: 数据库连通性
    2. disk_space_mb: 磁盘剩余空间
    3. provider: 根据 profile 决定是否探测 LiteLLM Proxy
       （demo 模式无需探测，记为 "skipped"）
    """
    effective_profile = profile or "core"

    checks: dict[str, str | int] = {}
    all_ok = True

    try:
        store_group = request.app.state.store_group
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
    except Exception as e:
        checks["sqlite"] = f"error: {str(e)}"
        all_ok = False

    try:
        disk_usage = shutil.disk_usage("/")
        checks["disk_space_mb"] = disk_usage.free // (1024 * 1024)
    except OSError:
        checks["disk_space_mb"] = 0
        all_ok = False

    checks["provider"] = "skipped"
    if effective_profile in ("llm", "full"):
        provider_router = getattr(request.app.state, "provider_router", None)
        if provider_router is not None:
            try:
                healthy = await provider_router.health_check()
            except Exception as e:
                log.warning("health_check_error", error=str(e))
                healthy = False
            if healthy is True:
                checks["provider"] = "ok"
            elif healthy is False:
                checks["provider"] = "unreachable"
                all_ok = False

    status_code = 200 if all_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if all_ok else "not_ready",
            "profile": effective_profile,
            "checks": checks,
        },
    )
