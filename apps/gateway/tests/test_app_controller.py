"""AppController 写入顺序测试

保存失败时内存状态保持不变，与磁盘一致。
"""

import sqlite3
from unittest.mock import AsyncMock

import pytest
from appkit.core.models import DEFAULT_TASK_SPEC, Tab, UiState
from appkit.core.state import AppState
from appkit.core.store import StateRepository
from appkit.gateway.services.app_controller import AppController
from appkit.provider import ProviderConfig, build_provider_router


@pytest.fixture
def failing_repo() -> AsyncMock:
    repo = AsyncMock(spec=StateRepository)
    error = sqlite3.OperationalError("database is locked")
    repo.save_spec.side_effect = error
    repo.save_documents.side_effect = error
    repo.save_ui.side_effect = error
    return repo


@pytest.fixture
def controller(failing_repo) -> AppController:
    return AppController(
        state=AppState(),
        repository=failing_repo,
        provider_router=build_provider_router(
            ProviderConfig(demo_chat_delay_s=0, demo_embed_delay_s=0)
        ),
    )


class TestSaveFailureKeepsMemory:
    async def test_patch_spec(self, controller: AppController):
        with pytest.raises(sqlite3.OperationalError):
            await controller.patch_spec({"goal": "summarize"})
        assert controller.get_spec() == DEFAULT_TASK_SPEC

    async def test_replace_spec(self, controller: AppController):
        with pytest.raises(sqlite3.OperationalError):
            await controller.replace_spec(DEFAULT_TASK_SPEC.with_updates(goal="summarize"))
        assert controller.get_spec() == DEFAULT_TASK_SPEC

    async def test_add_input_and_example(self, controller: AppController):
        with pytest.raises(sqlite3.OperationalError):
            await controller.add_input("Season", "Fall")
        with pytest.raises(sqlite3.OperationalError):
            await controller.add_example(input="q", output="a")
        assert controller.get_spec() == DEFAULT_TASK_SPEC

    async def test_add_document(self, controller: AppController, failing_repo):
        with pytest.raises(sqlite3.OperationalError):
            await controller.add_document("D", "river levels rose\n\ntemperature dropped")

        assert controller.list_documents() == ()
        saved = failing_repo.save_documents.call_args.args[0]
        assert [doc.name for doc in saved] == ["D"]

    async def test_update_ui(self, controller: AppController):
        with pytest.raises(sqlite3.OperationalError):
            await controller.update_ui(tab=Tab.RAG)
        assert controller.get_ui() == UiState()


class TestSaveThenSwap:
    async def test_saved_value_becomes_current(self, controller: AppController, failing_repo):
        failing_repo.save_spec.side_effect = None
        spec = await controller.add_input("Season", "Fall")

        assert controller.get_spec() is spec
        failing_repo.save_spec.assert_awaited_once_with(spec, fields=["inputs"])
