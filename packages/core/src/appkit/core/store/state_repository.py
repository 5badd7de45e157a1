"""StateRepository -- AppState 与 KV 存储之间的显式 save/load

持久化布局（每个顶层字段独立一个 key，JSON 编码）：
    spec.<field>     TaskSpec 各字段
    wp.appkit.docs   检索语料
    appkit.tab       当前 Tab
    appkit.persona   当前 Persona

缺失的 key 使用默认值；无法解码或校验失败的 key 同样回退默认值并记录 warning。
"""

from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from ..config import DOCS_KEY, PERSONA_KEY, SPEC_KEY_PREFIX, TAB_KEY
from ..models import DEFAULT_TASK_SPEC, Document, Persona, Tab, TaskSpec, UiState
from ..retriever import LexicalRetriever
from ..state import AppState
from .protocols import KVStore

log = structlog.get_logger()

SPEC_FIELDS: tuple[str, ...] = tuple(TaskSpec.model_fields)

_documents_adapter = TypeAdapter(list[Document])


def spec_key(field: str) -> str:
    return f"{SPEC_KEY_PREFIX}{field}"


class StateRepository:
    """AppState 持久化仓库"""

    def __init__(self, kv_store: KVStore) -> None:
        self._kv = kv_store

    async def _read(self, key: str) -> Any | None:
        try:
            return await self._kv.get(key)
        except ValueError as e:
            log.warning("state_key_invalid", key=key, error=str(e))
            return None

    # ---- load ----

    async def load_spec(self) -> TaskSpec:
        """逐字段读取 TaskSpec，单个字段非法不影响其他字段"""
        spec = DEFAULT_TASK_SPEC
        for field in SPEC_FIELDS:
            key = spec_key(field)
            raw = await self._read(key)
            if raw is None:
                continue
            try:
                spec = spec.with_updates(**{field: raw})
            except ValidationError as e:
                log.warning("state_key_invalid", key=key, error=str(e))
        return spec

    async def load_documents(self) -> list[Document]:
        raw = await self._read(DOCS_KEY)
        if raw is None:
            return []
        try:
            return _documents_adapter.validate_python(raw)
        except ValidationError as e:
            log.warning("state_key_invalid", key=DOCS_KEY, error=str(e))
            return []

    async def load_ui(self) -> UiState:
        ui = UiState()
        tab = await self._read(TAB_KEY)
        if tab is not None:
            try:
                ui = ui.model_copy(update={"tab": Tab(tab)})
            except ValueError as e:
                log.warning("state_key_invalid", key=TAB_KEY, error=str(e))
        persona = await self._read(PERSONA_KEY)
        if persona is not None:
            try:
                ui = ui.model_copy(update={"persona": Persona(persona)})
            except ValueError as e:
                log.warning("state_key_invalid", key=PERSONA_KEY, error=str(e))
        return ui

    async def load(self) -> AppState:
        """读取完整 AppState"""
        spec = await self.load_spec()
        documents = await self.load_documents()
        ui = await self.load_ui()
        log.info(
            "state_loaded",
            document_count=len(documents),
            tab=ui.tab.value,
            persona=ui.persona.value,
        )
        return AppState(spec=spec, retriever=LexicalRetriever(documents), ui=ui)

    # ---- save ----

    async def save_spec(self, spec: TaskSpec, fields: list[str] | None = None) -> None:
        """写入 TaskSpec 字段（默认全部字段）"""
        data = spec.model_dump(mode="json")
        names = fields if fields is not None else list(SPEC_FIELDS)
        await self._kv.set_many({spec_key(name): data[name] for name in names})

    async def save_documents(self, documents: tuple[Document, ...] | list[Document]) -> None:
        await self._kv.set(DOCS_KEY, [doc.model_dump(mode="json") for doc in documents])

    async def save_ui(self, ui: UiState) -> None:
        await self._kv.set_many({TAB_KEY: ui.tab.value, PERSONA_KEY: ui.persona.value})

    async def save(self, state: AppState) -> None:
        """写入完整 AppState"""
        await self.save_spec(state.spec)
        await self.save_documents(state.retriever.documents)
        await self.save_ui(state.ui)

    async def clear_documents(self) -> None:
        """外部重置：删除语料 key"""
        await self._kv.delete(DOCS_KEY)
