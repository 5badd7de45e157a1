"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from appkit.core.models import FewShotExample, InputField, TaskSpec


@pytest_asyncio.fixture
async def core_db_path(tmp_path: Path) -> Path:
    """核心层临时数据库路径"""
    return tmp_path / "core_test.db"


@pytest_asyncio.fixture
async def core_db(core_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """核心层已初始化数据库连接"""
    from appkit.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(core_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest.fixture
def coach_spec() -> TaskSpec:
    """最小可用 TaskSpec：无约束、要求引用、一个 input"""
    return TaskSpec(
        role="coach",
        goal="summarize",
        audience="volunteers",
        constraints=[],
        style=["kind"],
        formality="plain",
        length="short",
        citations=True,
        inputs=[InputField(label="X", value="Y")],
        examples=[],
        acceptance=["be concise"],
    )


@pytest.fixture
def fake_embed():
    """记录调用参数的 embedding collaborator"""
    calls: list[list[str]] = []

    async def embed(texts: list[str]) -> list[list[float]]:
        calls.append(list(texts))
        return [[float(i), 0.0] for i in range(len(texts))]

    embed.calls = calls
    return embed


@pytest.fixture
def two_example_spec(coach_spec: TaskSpec) -> TaskSpec:
    return coach_spec.with_updates(
        examples=[
            FewShotExample(input="q1", output="a1"),
            FewShotExample(input="q2", output="a2"),
        ]
    )
