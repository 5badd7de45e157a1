"""ProviderRouter -- chat / embedding collaborator 的统一入口

core 只依赖 ProviderRouter.chat / ProviderRouter.embed 两个 seam；
具体走 demo 还是 LiteLLM 由 ProviderConfig.llm_mode 决定。
"""

import structlog

from .client import LiteLLMClient
from .config import ProviderConfig
from .demo_adapter import DemoProviderAdapter
from .exceptions import EmbeddingShapeError
from .fallback import FallbackManager
from .models import ChatResult

log = structlog.get_logger()


class ProviderRouter:
    """collaborator 路由"""

    def __init__(
        self,
        fallback_manager: FallbackManager,
        chat_model: str = "main",
        embed_model: str = "embedding",
        litellm_client: LiteLLMClient | None = None,
        mode: str = "demo",
    ) -> None:
        """
        Args:
            fallback_manager: 包含 primary + fallback 的降级管理器
            chat_model: chat 模型 alias
            embed_model: embedding 模型 alias
            litellm_client: LiteLLM 客户端引用（供健康检查），demo 模式为 None
            mode: 运行模式标识
        """
        self._fallback_manager = fallback_manager
        self._chat_model = chat_model
        self._embed_model = embed_model
        self.litellm_client = litellm_client
        self.mode = mode

    async def chat(self, messages: list[dict[str, str]]) -> ChatResult:
        """调用 chat collaborator

        Raises:
            CollaboratorError: 调用失败（含降级失败）
        """
        result = await self._fallback_manager.call_with_fallback(
            messages=messages,
            model_alias=self._chat_model,
        )
        log.info(
            "chat_completed",
            provider=result.provider,
            tokens=result.tokens,
            is_fallback=result.is_fallback,
            duration_ms=result.duration_ms,
        )
        return result

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """调用 embedding collaborator，每个文本返回一个向量

        Raises:
            EmbeddingShapeError: 返回的向量数量与输入不一致
            CollaboratorError: 调用失败（含降级失败）
        """
        result = await self._fallback_manager.embed_with_fallback(
            texts=list(texts),
            model_alias=self._embed_model,
        )
        if len(result.vectors) != len(texts):
            raise EmbeddingShapeError(expected=len(texts), actual=len(result.vectors))
        return result.vectors

    async def health_check(self) -> bool | None:
        """探测后端可达性，demo 模式返回 None（无需探测）"""
        if self.litellm_client is None:
            return None
        return await self.litellm_client.health_check()


def build_provider_router(config: ProviderConfig) -> ProviderRouter:
    """根据配置构建 ProviderRouter

    - litellm 模式：LiteLLMClient 为 primary，DemoProviderAdapter 为 fallback
    - demo 模式：仅 DemoProviderAdapter
    """
    demo_adapter = DemoProviderAdapter(
        chat_delay_s=config.demo_chat_delay_s,
        embed_delay_s=config.demo_embed_delay_s,
    )

    if config.llm_mode == "litellm":
        litellm_client = LiteLLMClient(
            proxy_base_url=config.proxy_base_url,
            proxy_api_key=config.proxy_api_key.get_secret_value(),
            timeout_s=config.timeout_s,
        )
        fallback_manager = FallbackManager(primary=litellm_client, fallback=demo_adapter)
        log.info(
            "provider_router_initialized",
            mode="litellm",
            proxy_url=config.proxy_base_url,
            timeout_s=config.timeout_s,
        )
    else:
        litellm_client = None
        fallback_manager = FallbackManager(primary=demo_adapter, fallback=None)
        log.info("provider_router_initialized", mode="demo")

    return ProviderRouter(
        fallback_manager=fallback_manager,
        chat_model=config.chat_model,
        embed_model=config.embed_model,
        litellm_client=litellm_client,
        mode=config.llm_mode,
    )
