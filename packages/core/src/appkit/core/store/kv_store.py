"""KVStore SQLite 实现

每个 key 对应一行 JSON 文本，upsert 语义（last-write-wins）。
"""

import json
from datetime import UTC, datetime
from typing import Any

import aiosqlite


class SqliteKVStore:
    """KVStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get(self, key: str) -> Any | None:
        """读取并解码 key，不存在时返回 None"""
        cursor = await self._conn.execute(
            "SELECT value FROM kv WHERE key = ?",
            (key,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    async def set(self, key: str, value: Any) -> None:
        """写入单个 key 并提交"""
        await self.set_many({key: value})

    async def set_many(self, items: dict[str, Any]) -> None:
        """单事务写入多个 key

        Raises:
            Exception: 写入失败时回滚后上抛
        """
        now = datetime.now(UTC).isoformat()
        try:
            for key, value in items.items():
                await self._conn.execute(
                    """
                    INSERT INTO kv (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, json.dumps(value, ensure_ascii=False), now),
                )
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise

    async def delete(self, key: str) -> None:
        """删除 key（不存在时无操作）"""
        await self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        await self._conn.commit()

    async def keys(self, prefix: str = "") -> list[str]:
        """列出 key，按字典序"""
        if prefix:
            # 转义 LIKE 通配符
            escaped = (
                prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            )
            cursor = await self._conn.execute(
                "SELECT key FROM kv WHERE key LIKE ? ESCAPE '\\' ORDER BY key",
                (f"{escaped}%",),
            )
        else:
            cursor = await self._conn.execute("SELECT key FROM kv ORDER BY key")
        rows = await cursor.fetchall()
        return [row[0] for row in rows]
