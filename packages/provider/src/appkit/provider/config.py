"""ProviderConfig -- Provider 配置加载

从环境变量加载配置，不硬编码 provider/模型名。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()


class ProviderConfig(BaseModel):
    """Provider 包配置 -- 从环境变量加载

    环境变量:
        APPKIT_LLM_MODE: 运行模式（demo/litellm，默认 demo）
        LITELLM_PROXY_URL: Proxy 地址（默认 http://localhost:4000）
        LITELLM_PROXY_KEY: Proxy 访问密钥
        APPKIT_LLM_TIMEOUT_S: 调用超时（秒，默认 30）
        APPKIT_CHAT_MODEL: chat 模型 alias（默认 main）
        APPKIT_EMBED_MODEL: embedding 模型 alias（默认 embedding）
        APPKIT_DEMO_CHAT_DELAY_S: demo chat 模拟延迟（秒，默认 0.3）
        APPKIT_DEMO_EMBED_DELAY_S: demo embed 模拟延迟（秒，默认 0.15）
    """

    llm_mode: Literal["demo", "litellm"] = Field(
        default="demo",
        description="运行模式：demo（返回固定文本）/ litellm",
    )
    proxy_base_url: str = Field(
        default="http://localhost:4000",
        description="LiteLLM Proxy 基础 URL",
    )
    proxy_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Proxy 访问密钥（不是 LLM provider API key）",
    )
    timeout_s: int = Field(
        default=30,
        ge=1,
        description="LLM 调用超时（秒）",
    )
    chat_model: str = Field(default="main", description="chat 模型 alias")
    embed_model: str = Field(default="embedding", description="embedding 模型 alias")
    demo_chat_delay_s: float = Field(default=0.3, ge=0.0, description="demo chat 延迟")
    demo_embed_delay_s: float = Field(default=0.15, ge=0.0, description="demo embed 延迟")


def _read_number(env_var: str, cast, minimum, fallback) -> object | None:
    """读取数值型环境变量，无法解析或低于下限时记录 warning 并返回 None（使用默认值）"""
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        value = cast(val)
        # NaN 与任何数比较均为 False，一并拒绝
        if not value >= minimum:
            raise ValueError(f"{env_var} must be >= {minimum}")
        return value
    except ValueError:
        log.warning(
            "invalid_provider_config",
            env_var=env_var,
            value=val,
            fallback=fallback,
        )
        return None


def load_provider_config() -> ProviderConfig:
    """从环境变量加载 Provider 配置

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("APPKIT_LLM_MODE"):
        kwargs["llm_mode"] = val

    if val := os.environ.get("LITELLM_PROXY_URL"):
        kwargs["proxy_base_url"] = val

    if val := os.environ.get("LITELLM_PROXY_KEY"):
        kwargs["proxy_api_key"] = SecretStr(val)

    if val := os.environ.get("APPKIT_CHAT_MODEL"):
        kwargs["chat_model"] = val

    if val := os.environ.get("APPKIT_EMBED_MODEL"):
        kwargs["embed_model"] = val

    # 数值配置无法解析或越界时使用默认值，不阻塞启动
    numeric = [
        ("APPKIT_LLM_TIMEOUT_S", "timeout_s", int, 1, 30),
        ("APPKIT_DEMO_CHAT_DELAY_S", "demo_chat_delay_s", float, 0.0, 0.3),
        ("APPKIT_DEMO_EMBED_DELAY_S", "demo_embed_delay_s", float, 0.0, 0.15),
    ]
    for env_var, field, cast, minimum, fallback in numeric:
        value = _read_number(env_var, cast, minimum, fallback)
        if value is not None:
            kwargs[field] = value

    return ProviderConfig(**kwargs)
