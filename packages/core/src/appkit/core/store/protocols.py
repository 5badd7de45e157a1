"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing），
StateRepository 只依赖此接口，便于替换为其他 KV 后端。
"""

from typing import Any, Protocol


class KVStore(Protocol):
    """持久化 key-value 存储接口

    value 为任意可 JSON 序列化对象；同一 key 后写覆盖先写。
    """

    async def get(self, key: str) -> Any | None:
        """读取并解码 key，不存在时返回 None

        Raises:
            ValueError: 存储内容不是合法 JSON
        """
        ...

    async def set(self, key: str, value: Any) -> None:
        """写入 key（覆盖）"""
        ...

    async def set_many(self, items: dict[str, Any]) -> None:
        """单事务写入多个 key"""
        ...

    async def delete(self, key: str) -> None:
        """删除 key"""
        ...

    async def keys(self, prefix: str = "") -> list[str]:
        """列出 key，可按前缀过滤"""
        ...
