"""DemoProviderAdapter -- 未接入后端时的 chat / embedding 占位实现

chat 模拟延迟后返回固定提示文本；embed 返回确定性的 8 维正弦向量。
FallbackManager 的降级后备统一使用此适配器。
"""

import asyncio
import math
import time

from .models import ChatResult, EmbeddingResult, TokenUsage

DEMO_OUTPUT = "(demo) Connect ProviderRouter.chat to your backend to get real answers."
DEMO_TOKENS = 42
DEMO_EMBEDDING_DIM = 8


def demo_vector(index: int, dim: int = DEMO_EMBEDDING_DIM) -> list[float]:
    """第 index 个文本的占位向量：sin((index+1) * (j+1))"""
    return [math.sin((index + 1) * (j + 1)) for j in range(dim)]


class DemoProviderAdapter:
    """Demo 模式 provider

    不发起任何网络调用，仅模拟延迟。
    """

    def __init__(self, chat_delay_s: float = 0.3, embed_delay_s: float = 0.15) -> None:
        """
        Args:
            chat_delay_s: chat 模拟延迟（秒）
            embed_delay_s: embed 模拟延迟（秒）
        """
        self._chat_delay_s = chat_delay_s
        self._embed_delay_s = embed_delay_s

    async def complete(
        self,
        messages: list[dict[str, str]],
        model_alias: str = "demo",
        **kwargs,
    ) -> ChatResult:
        """返回固定 demo 文本

        Args:
            messages: 消息列表（不读取内容）
            model_alias: 模型别名
            **kwargs: 忽略

        Returns:
            ChatResult，provider="demo"，tokens 固定为 42
        """
        start_time = time.monotonic()
        await asyncio.sleep(self._chat_delay_s)
        duration_ms = int((time.monotonic() - start_time) * 1000)

        return ChatResult(
            output=DEMO_OUTPUT,
            model_alias=model_alias,
            model_name="demo",
            provider="demo",
            duration_ms=duration_ms,
            token_usage=TokenUsage(
                prompt_tokens=0,
                completion_tokens=DEMO_TOKENS,
                total_tokens=DEMO_TOKENS,
            ),
            is_fallback=False,  # 由 FallbackManager 按需覆盖
        )

    async def embed(
        self,
        texts: list[str],
        model_alias: str = "demo",
        **kwargs,
    ) -> EmbeddingResult:
        """为每个文本返回一个 8 维占位向量（只依赖序号，不依赖内容）"""
        start_time = time.monotonic()
        await asyncio.sleep(self._embed_delay_s)
        duration_ms = int((time.monotonic() - start_time) * 1000)

        return EmbeddingResult(
            vectors=[demo_vector(i) for i in range(len(texts))],
            model_alias=model_alias,
            model_name="demo",
            provider="demo",
            duration_ms=duration_ms,
        )
