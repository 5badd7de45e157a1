"""AppKit Provider -- chat / embedding collaborator 抽象层

packages/provider 的公开接口导出。
"""

# 核心组件
from .client import LiteLLMClient

# 配置
from .config import ProviderConfig, load_provider_config
from .demo_adapter import DemoProviderAdapter

# 异常
from .exceptions import CollaboratorError, EmbeddingShapeError, ProxyUnreachableError
from .fallback import FallbackManager

# 数据模型
from .models import ChatResult, EmbeddingResult, TokenUsage
from .router import ProviderRouter, build_provider_router

__all__ = [
    "ChatResult",
    "EmbeddingResult",
    "TokenUsage",
    "LiteLLMClient",
    "DemoProviderAdapter",
    "FallbackManager",
    "ProviderRouter",
    "build_provider_router",
    "ProviderConfig",
    "load_provider_config",
    "CollaboratorError",
    "ProxyUnreachableError",
    "EmbeddingShapeError",
]
