"""FallbackManager -- 降级管理器

Lazy probe 策略：每次调用时先尝试 primary，失败则切换到 fallback。
不维护显式的"降级状态"标记。chat 与 embedding 共用同一降级链。
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from .exceptions import CollaboratorError
from .models import ChatResult, EmbeddingResult

log = structlog.get_logger()

ResultT = TypeVar("ResultT", ChatResult, EmbeddingResult)


class FallbackManager:
    """降级管理器

    降级链: LiteLLMClient -> DemoProviderAdapter
    Proxy 内部的 model fallback 由 Proxy 自行处理，对本组件透明。
    """

    def __init__(
        self,
        primary,
        fallback=None,
    ) -> None:
        """初始化降级管理器

        Args:
            primary: 主客户端（LiteLLMClient 或 DemoProviderAdapter）
            fallback: 降级客户端（默认 DemoProviderAdapter），None 表示无降级
        """
        self._primary = primary
        self._fallback = fallback

    async def _run(
        self,
        operation: str,
        model_alias: str,
        primary_call: Callable[[], Awaitable[ResultT]],
        fallback_call: Callable[[], Awaitable[ResultT]] | None,
    ) -> ResultT:
        primary_error: Exception | None = None
        try:
            return await primary_call()
        except Exception as e:
            primary_error = e
            log.warning(
                "primary_failed_attempting_fallback",
                operation=operation,
                error=str(e),
                model_alias=model_alias,
            )

        if fallback_call is None:
            raise CollaboratorError(
                f"Primary 调用失败且无 fallback 配置: {primary_error}",
                recoverable=False,
            ) from primary_error

        try:
            result = await fallback_call()
        except Exception as fallback_error:
            log.error(
                "both_primary_and_fallback_failed",
                operation=operation,
                primary_error=str(primary_error),
                fallback_error=str(fallback_error),
            )
            raise CollaboratorError(
                f"Primary 和 Fallback 均失败。Primary: {primary_error}; "
                f"Fallback: {fallback_error}",
                recoverable=False,
            ) from fallback_error

        log.info(
            "fallback_activated",
            operation=operation,
            fallback_reason=str(primary_error),
            model_alias=model_alias,
        )
        return result.model_copy(
            update={
                "is_fallback": True,
                "fallback_reason": f"Primary 失败: {primary_error}",
            }
        )

    async def call_with_fallback(
        self,
        messages: list[dict[str, str]],
        model_alias: str = "main",
        **kwargs,
    ) -> ChatResult:
        """带降级的 chat 调用

        Returns:
            ChatResult
            - primary 成功: is_fallback=False
            - fallback 成功: is_fallback=True, fallback_reason=<错误描述>

        Raises:
            CollaboratorError: primary 和 fallback 均失败
        """
        fallback_call = None
        if self._fallback is not None:
            fallback = self._fallback

            async def fallback_call() -> ChatResult:
                return await fallback.complete(messages=messages, model_alias=model_alias)

        return await self._run(
            "chat",
            model_alias,
            lambda: self._primary.complete(
                messages=messages,
                model_alias=model_alias,
                **kwargs,
            ),
            fallback_call,
        )

    async def embed_with_fallback(
        self,
        texts: list[str],
        model_alias: str = "embedding",
        **kwargs,
    ) -> EmbeddingResult:
        """带降级的 embedding 调用

        Raises:
            CollaboratorError: primary 和 fallback 均失败
        """
        fallback_call = None
        if self._fallback is not None:
            fallback = self._fallback

            async def fallback_call() -> EmbeddingResult:
                return await fallback.embed(texts=texts, model_alias=model_alias)

        return await self._run(
            "embedding",
            model_alias,
            lambda: self._primary.embed(texts=texts, model_alias=model_alias, **kwargs),
            fallback_call,
        )
