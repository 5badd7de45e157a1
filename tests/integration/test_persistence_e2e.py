"""端到端持久性集成测试

编辑 spec、添加文档、切换 Tab -> 关闭连接（模拟进程退出）-> 重新启动 -> 状态完整。
"""

from httpx import ASGITransport, AsyncClient


class TestPersistenceE2E:
    async def test_state_survives_restart(self, integration_db_path: str, start_app):
        app1, sg1 = await start_app(integration_db_path)
        async with AsyncClient(transport=ASGITransport(app=app1), base_url="http://test") as c1:
            resp = await c1.patch("/api/spec", json={"goal": "summarize", "citations": False})
            assert resp.status_code == 200
            resp = await c1.post("/api/spec/inputs", json={"label": "Season", "value": "Fall"})
            assert resp.status_code == 200
            resp = await c1.post(
                "/api/rag/documents",
                json={"name": "D", "text": "river levels rose\n\ntemperature dropped"},
            )
            assert resp.status_code == 201
            resp = await c1.put("/api/ui", json={"tab": "rag", "persona": "nonprofit"})
            assert resp.status_code == 200
            composed_before = (await c1.get("/api/compose")).json()

        await sg1.conn.close()

        app2, sg2 = await start_app(integration_db_path)
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app2), base_url="http://test"
            ) as c2:
                spec = (await c2.get("/api/spec")).json()
                assert spec["goal"] == "summarize"
                assert spec["citations"] is False
                assert spec["inputs"][-1] == {"label": "Season", "value": "Fall"}

                assert (await c2.get("/api/compose")).json() == composed_before

                hits = (
                    await c2.get("/api/rag/search", params={"q": "river levels", "k": 1})
                ).json()
                assert [(h["doc"], h["idx"]) for h in hits] == [("D", 0)]

                assert (await c2.get("/api/ui")).json() == {
                    "tab": "rag",
                    "persona": "nonprofit",
                }
        finally:
            await sg2.conn.close()

    async def test_compose_run_flow(self, integration_db_path: str, start_app):
        """填写 spec -> 组装 -> 调用 demo provider"""
        app, sg = await start_app(integration_db_path)
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
                await c.put(
                    "/api/spec",
                    json={
                        "role": "coach",
                        "goal": "summarize",
                        "audience": "volunteers",
                        "style": ["kind"],
                        "length": "short",
                        "citations": True,
                        "inputs": [{"label": "X", "value": "Y"}],
                        "acceptance": ["be concise"],
                    },
                )
                await c.post("/api/spec/examples", json={"input": "q", "output": "a"})

                messages = (await c.get("/api/compose")).json()
                assert len(messages) == 5
                assert messages[-1] == {"role": "assistant", "content": "a"}

                result = (await c.post("/api/run")).json()
                assert result["tokens"] == 42
                assert result["is_fallback"] is False
        finally:
            await sg.conn.close()
