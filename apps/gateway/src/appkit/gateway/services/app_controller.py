"""AppController -- 顶层控制器

独占 AppState，所有修改经由此处：
1. 在 AppState 草稿（fork）上调用 mutator 生成新值
2. 通过 StateRepository 显式保存受影响的 key
3. 保存成功后才写回内存状态；保存失败时内存与磁盘保持一致
4. collaborator 调用（chat / embed）在边界处 await，compose/search 保持同步

写操作由 _write_lock 串行化，保证"保存 -> 写回"之间不被其他写请求穿插。
"""

import asyncio
from typing import Any

import structlog
from appkit.core.composer import to_provider_messages
from appkit.core.models import Document, Message, Persona, SearchHit, Tab, TaskSpec, UiState
from appkit.core.state import AppState
from appkit.core.store import StateRepository
from appkit.provider import ChatResult, ProviderRouter

log = structlog.get_logger()


class AppController:
    """应用控制器"""

    def __init__(
        self,
        state: AppState,
        repository: StateRepository,
        provider_router: ProviderRouter,
    ) -> None:
        self._state = state
        self._repo = repository
        self._provider = provider_router
        self._write_lock = asyncio.Lock()

    @property
    def state(self) -> AppState:
        return self._state

    # ---- TaskSpec ----

    def get_spec(self) -> TaskSpec:
        return self._state.spec

    async def _commit_spec(self, spec: TaskSpec, fields: list[str] | None = None) -> TaskSpec:
        """先保存再写回内存（调用方持有 _write_lock）"""
        await self._repo.save_spec(spec, fields=fields)
        return self._state.replace_spec(spec)

    async def replace_spec(self, spec: TaskSpec) -> TaskSpec:
        """整体替换 TaskSpec 并保存全部字段"""
        async with self._write_lock:
            await self._commit_spec(spec)
        log.info("spec_replaced")
        return spec

    async def patch_spec(self, changes: dict[str, Any]) -> TaskSpec:
        """部分更新 TaskSpec，只保存变更的字段

        Raises:
            pydantic.ValidationError: 字段未知或取值非法
        """
        async with self._write_lock:
            spec = self._state.fork().update_spec(**changes)
            await self._commit_spec(spec, fields=list(changes))
        log.info("spec_updated", fields=sorted(changes))
        return spec

    async def add_input(self, label: str, value: str) -> TaskSpec:
        async with self._write_lock:
            spec = self._state.fork().add_input(label, value)
            return await self._commit_spec(spec, fields=["inputs"])

    async def remove_input(self, index: int) -> TaskSpec:
        """Raises: IndexError"""
        async with self._write_lock:
            spec = self._state.fork().remove_input(index)
            return await self._commit_spec(spec, fields=["inputs"])

    async def add_example(self, input: str | None = None, output: str | None = None) -> TaskSpec:
        kwargs = {k: v for k, v in {"input": input, "output": output}.items() if v is not None}
        async with self._write_lock:
            spec = self._state.fork().add_example(**kwargs)
            return await self._commit_spec(spec, fields=["examples"])

    async def edit_example(
        self,
        index: int,
        input: str | None = None,
        output: str | None = None,
    ) -> TaskSpec:
        """Raises: IndexError"""
        async with self._write_lock:
            spec = self._state.fork().edit_example(index, input=input, output=output)
            return await self._commit_spec(spec, fields=["examples"])

    # ---- Composer ----

    def compose(self) -> list[Message]:
        return self._state.messages

    async def run(self) -> ChatResult:
        """compose 当前 spec 并调用 chat collaborator

        Raises:
            CollaboratorError: collaborator 调用失败
        """
        messages = to_provider_messages(self.compose())
        log.info("run_started", message_count=len(messages))
        return await self._provider.chat(messages)

    # ---- Retrieval ----

    def list_documents(self) -> tuple[Document, ...]:
        return self._state.retriever.documents

    async def add_document(self, name: str, text: str) -> Document:
        """添加文档并保存语料

        embedding 在加锁前完成；语料先整体保存，成功后才追加到内存。

        Raises:
            CollaboratorError: embedding 调用失败（语料不变）
        """
        retriever = self._state.retriever
        document = await retriever.build_document(name, text, self._provider.embed)
        async with self._write_lock:
            await self._repo.save_documents([*retriever.documents, document])
            retriever.append(document)
        return document

    def search(self, query: str, k: int) -> list[SearchHit]:
        return self._state.retriever.search(query, k)

    # ---- UI ----

    def get_ui(self) -> UiState:
        return self._state.ui

    async def update_ui(self, tab: Tab | None = None, persona: Persona | None = None) -> UiState:
        async with self._write_lock:
            draft = self._state.fork()
            if tab is not None:
                draft.set_tab(tab)
            if persona is not None:
                draft.set_persona(persona)
            await self._repo.save_ui(draft.ui)
            return self._state.replace_ui(draft.ui)
