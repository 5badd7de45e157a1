"""LiteLLMClient -- LiteLLM Proxy 调用封装

通过 litellm.acompletion() / litellm.aembedding() 调用 Proxy。
"""

import time
from typing import Any

import httpx
import structlog
from litellm import acompletion, aembedding

from .exceptions import CollaboratorError, ProxyUnreachableError
from .models import ChatResult, EmbeddingResult, TokenUsage

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

# 连接类异常类型集合（触发 ProxyUnreachableError，进而触发 FallbackManager 降级）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.TimeoutException,
)


def _is_connection_error(e: Exception) -> bool:
    """判断异常是否为连接类错误（Proxy 不可达）"""
    if isinstance(e, _CONNECTION_ERROR_TYPES):
        return True
    # LiteLLM 的 APIConnectionError 也属于连接类错误
    error_name = type(e).__name__
    return error_name in ("APIConnectionError", "APITimeoutError")


def _parse_usage(response: Any) -> TokenUsage:
    """从 LiteLLM 响应中解析 token 使用，缺失时返回全零"""
    usage = getattr(response, "usage", None)
    if usage is None:
        return TokenUsage()
    try:
        prompt = int(getattr(usage, "prompt_tokens", 0) or 0)
        completion = int(getattr(usage, "completion_tokens", 0) or 0)
        total = int(getattr(usage, "total_tokens", 0) or 0)
    except (TypeError, ValueError):
        return TokenUsage()
    return TokenUsage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=total or prompt + completion,
    )


def _extract_model_info(response: Any) -> tuple[str, str]:
    """提取 (model_name, provider)"""
    model_name = getattr(response, "model", "") or ""
    hidden = getattr(response, "_hidden_params", None) or {}
    provider = hidden.get("custom_llm_provider", "") if isinstance(hidden, dict) else ""
    return str(model_name), str(provider or "")


def _extract_vectors(response: Any) -> list[list[float]]:
    """提取 embedding 向量，按 index 排序"""
    items = []
    for position, item in enumerate(response.data):
        if isinstance(item, dict):
            index = item.get("index", position)
            vector = item["embedding"]
        else:
            index = getattr(item, "index", position)
            vector = item.embedding
        items.append((index, [float(x) for x in vector]))
    items.sort(key=lambda pair: pair[0])
    return [vector for _, vector in items]


class LiteLLMClient:
    """LiteLLM Proxy 客户端"""

    def __init__(
        self,
        proxy_base_url: str = "http://localhost:4000",
        proxy_api_key: str = "",
        timeout_s: int = 30,
    ) -> None:
        """初始化 LiteLLM Proxy 客户端

        Args:
            proxy_base_url: Proxy 基础 URL
            proxy_api_key: Proxy 访问密钥（LITELLM_PROXY_KEY）
            timeout_s: 请求超时（秒）
        """
        self._proxy_base_url = proxy_base_url.rstrip("/")
        self._proxy_api_key = proxy_api_key
        self._timeout_s = timeout_s

    def _wrap_error(self, e: Exception, operation: str, model_alias: str, start: float):
        duration_ms = int((time.monotonic() - start) * 1000)
        log.error(
            "litellm_call_failed",
            operation=operation,
            model_alias=model_alias,
            error=str(e),
            error_type=type(e).__name__,
            duration_ms=duration_ms,
        )
        # 区分连接类错误与业务错误
        if _is_connection_error(e):
            return ProxyUnreachableError(
                proxy_url=self._proxy_base_url,
                original_error=e,
            )
        return CollaboratorError(
            message=f"LLM 调用失败: {e}",
            recoverable=True,
        )

    async def complete(
        self,
        messages: list[dict[str, str]],
        model_alias: str = "main",
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs,
    ) -> ChatResult:
        """发送 chat completion 请求到 LiteLLM Proxy

        Args:
            messages: 消息列表，格式 [{"role": "user", "content": "..."}]
            model_alias: Proxy 侧的模型 group 名称
            temperature: 采样温度
            max_tokens: 最大生成 token 数，None 使用模型默认
            **kwargs: 其他 LiteLLM 支持的参数

        Returns:
            ChatResult

        Raises:
            ProxyUnreachableError: Proxy 连接失败或超时
            CollaboratorError: Proxy 返回错误（如模型不可用、配额耗尽）
        """
        start_time = time.monotonic()

        try:
            call_kwargs = {
                "model": model_alias,
                "messages": messages,
                "api_base": self._proxy_base_url,
                "api_key": self._proxy_api_key or "no-key",
                "temperature": temperature,
                "timeout": self._timeout_s,
                **kwargs,
            }
            if max_tokens is not None:
                call_kwargs["max_tokens"] = max_tokens

            log.debug(
                "litellm_call_start",
                model_alias=model_alias,
                message_count=len(messages),
            )

            response = await acompletion(**call_kwargs)

            duration_ms = int((time.monotonic() - start_time) * 1000)
            content = response.choices[0].message.content or ""
            model_name, provider = _extract_model_info(response)

            log.info(
                "litellm_call_completed",
                model_alias=model_alias,
                model_name=model_name,
                provider=provider,
                duration_ms=duration_ms,
            )

            return ChatResult(
                output=content,
                model_alias=model_alias,
                model_name=model_name,
                provider=provider,
                duration_ms=duration_ms,
                token_usage=_parse_usage(response),
            )

        except CollaboratorError:
            raise
        except Exception as e:
            raise self._wrap_error(e, "chat", model_alias, start_time) from e

    async def embed(
        self,
        texts: list[str],
        model_alias: str = "embedding",
        **kwargs,
    ) -> EmbeddingResult:
        """发送 embedding 请求到 LiteLLM Proxy

        空输入直接返回空结果，不发起网络调用。

        Raises:
            ProxyUnreachableError: Proxy 连接失败或超时
            CollaboratorError: Proxy 返回错误
        """
        if not texts:
            return EmbeddingResult(vectors=[], model_alias=model_alias)

        start_time = time.monotonic()
        try:
            response = await aembedding(
                model=model_alias,
                input=texts,
                api_base=self._proxy_base_url,
                api_key=self._proxy_api_key or "no-key",
                timeout=self._timeout_s,
                **kwargs,
            )
            duration_ms = int((time.monotonic() - start_time) * 1000)
            vectors = _extract_vectors(response)
            model_name, provider = _extract_model_info(response)

            log.info(
                "litellm_embedding_completed",
                model_alias=model_alias,
                model_name=model_name,
                input_count=len(texts),
                duration_ms=duration_ms,
            )

            return EmbeddingResult(
                vectors=vectors,
                model_alias=model_alias,
                model_name=model_name,
                provider=provider,
                duration_ms=duration_ms,
            )

        except CollaboratorError:
            raise
        except Exception as e:
            raise self._wrap_error(e, "embedding", model_alias, start_time) from e

    async def health_check(self) -> bool:
        """检查 LiteLLM Proxy 可达性

        发送 GET {proxy_base_url}/health/liveliness 请求。
        此方法不抛出异常，所有异常内部捕获并返回 False。
        """
        url = f"{self._proxy_base_url}/health/liveliness"
        try:
            async with httpx.AsyncClient() as http_client:
                resp = await http_client.get(url, timeout=HEALTH_CHECK_TIMEOUT_S)
                return resp.status_code == 200
        except Exception as e:
            log.debug("health_check_failed", url=url, error=str(e))
            return False
