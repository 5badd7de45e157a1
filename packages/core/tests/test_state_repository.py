"""StateRepository 测试

测试内容：
1. 空库加载默认值
2. 每个 TaskSpec 字段独立一个 key
3. 非法/损坏 key 回退默认值，不影响其他字段
4. 语料与 UI 状态 save/load
"""

from datetime import UTC, datetime

from appkit.core.models import DEFAULT_TASK_SPEC, Document, Persona, Tab, UiState
from appkit.core.retriever import LexicalRetriever
from appkit.core.state import AppState
from appkit.core.store import StateRepository
from appkit.core.store.kv_store import SqliteKVStore
from appkit.core.store.state_repository import SPEC_FIELDS, spec_key


def _repo(conn) -> tuple[SqliteKVStore, StateRepository]:
    kv = SqliteKVStore(conn)
    return kv, StateRepository(kv)


class TestLoadDefaults:
    async def test_empty_store(self, core_db):
        _, repo = _repo(core_db)
        state = await repo.load()
        assert state.spec == DEFAULT_TASK_SPEC
        assert state.retriever.documents == ()
        assert state.ui == UiState()


class TestSpecPersistence:
    async def test_one_key_per_field(self, core_db):
        kv, repo = _repo(core_db)
        await repo.save_spec(DEFAULT_TASK_SPEC)
        assert await kv.keys("spec.") == sorted(spec_key(f) for f in SPEC_FIELDS)
        assert await kv.get("spec.formality") == "plain"
        assert await kv.get("spec.citations") is True

    async def test_save_selected_fields(self, core_db):
        kv, repo = _repo(core_db)
        spec = DEFAULT_TASK_SPEC.with_updates(goal="new goal")
        await repo.save_spec(spec, fields=["goal"])
        assert await kv.keys("spec.") == ["spec.goal"]
        loaded = await repo.load_spec()
        assert loaded.goal == "new goal"
        assert loaded.role == DEFAULT_TASK_SPEC.role

    async def test_roundtrip(self, core_db):
        _, repo = _repo(core_db)
        spec = DEFAULT_TASK_SPEC.with_updates(
            constraints=[], length="long", inputs=[{"label": "X", "value": "Y"}]
        )
        await repo.save_spec(spec)
        assert await repo.load_spec() == spec

    async def test_invalid_field_falls_back(self, core_db):
        kv, repo = _repo(core_db)
        await kv.set_many({"spec.formality": "casual", "spec.goal": "kept"})
        spec = await repo.load_spec()
        assert spec.formality == DEFAULT_TASK_SPEC.formality
        assert spec.goal == "kept"

    async def test_corrupt_json_falls_back(self, core_db):
        _, repo = _repo(core_db)
        await core_db.execute(
            "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
            ("spec.role", "not-json", datetime.now(UTC).isoformat()),
        )
        await core_db.commit()
        spec = await repo.load_spec()
        assert spec.role == DEFAULT_TASK_SPEC.role

    async def test_null_list_treated_as_empty(self, core_db):
        kv, repo = _repo(core_db)
        await kv.set("spec.constraints", None)
        # JSON null 与缺失 key 等价
        assert (await repo.load_spec()).constraints == DEFAULT_TASK_SPEC.constraints


class TestDocumentPersistence:
    async def test_roundtrip(self, core_db):
        kv, repo = _repo(core_db)
        docs = [
            Document(name="D", parts=("a", "b"), vectors=((0.1, 0.2), (0.3, 0.4))),
            Document(name="E"),
        ]
        await repo.save_documents(docs)
        assert await kv.keys() == ["wp.appkit.docs"]
        assert await repo.load_documents() == docs

    async def test_invalid_documents_fall_back(self, core_db):
        kv, repo = _repo(core_db)
        await kv.set("wp.appkit.docs", {"not": "a list"})
        assert await repo.load_documents() == []

    async def test_clear_documents(self, core_db):
        _, repo = _repo(core_db)
        await repo.save_documents([Document(name="D", parts=("a",))])
        await repo.clear_documents()
        assert await repo.load_documents() == []


class TestUiPersistence:
    async def test_roundtrip(self, core_db):
        kv, repo = _repo(core_db)
        await repo.save_ui(UiState(tab=Tab.RAG, persona=Persona.TEEN))
        assert await kv.get("appkit.tab") == "rag"
        assert await kv.get("appkit.persona") == "teen"
        assert await repo.load_ui() == UiState(tab=Tab.RAG, persona=Persona.TEEN)

    async def test_unknown_tab_falls_back(self, core_db):
        kv, repo = _repo(core_db)
        await kv.set_many({"appkit.tab": "settings", "appkit.persona": "nonprofit"})
        ui = await repo.load_ui()
        assert ui.tab == Tab.INTAKE
        assert ui.persona == Persona.NONPROFIT


class TestFullState:
    async def test_save_then_load(self, core_db):
        _, repo = _repo(core_db)
        state = AppState(
            spec=DEFAULT_TASK_SPEC.with_updates(goal="g"),
            retriever=LexicalRetriever([Document(name="D", parts=("river levels rose",))]),
            ui=UiState(tab=Tab.COMPOSE),
        )
        await repo.save(state)

        loaded = await repo.load()
        assert loaded.spec == state.spec
        assert loaded.retriever.documents == state.retriever.documents
        assert loaded.ui == state.ui
        assert loaded.retriever.search("river", 1)[0].doc == "D"
