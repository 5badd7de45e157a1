"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、检索默认 top-k、持久化 key 命名等可配置常量。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("APPKIT_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "APPKIT_DB_PATH",
        str(_get_base_dir() / "sqlite" / "appkit.db"),
    )


def get_search_k() -> int:
    """HTTP 检索默认 top-k"""
    val = os.environ.get("APPKIT_SEARCH_K")
    if not val:
        return DEFAULT_SEARCH_K
    try:
        k = int(val)
    except ValueError:
        k = -1
    if k < 0:
        log.warning(
            "invalid_search_k_config",
            env_var="APPKIT_SEARCH_K",
            value=val,
            fallback=DEFAULT_SEARCH_K,
        )
        return DEFAULT_SEARCH_K
    return k


# RAG 面板展示的命中条数
DEFAULT_SEARCH_K: int = 5

# 持久化 key -- 沿用前端 localStorage 的命名
SPEC_KEY_PREFIX = "spec."
DOCS_KEY = "wp.appkit.docs"
TAB_KEY = "appkit.tab"
PERSONA_KEY = "appkit.persona"

# 导出文件名
EXPORT_FILENAME = "TaskSpec.json"
