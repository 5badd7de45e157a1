"""Provider 异常体系

chat / embedding collaborator 的失败统一以 CollaboratorError 上抛，
由调用方（gateway）转换为可恢复的错误响应，不影响 compose/search 逻辑。
"""


class CollaboratorError(Exception):
    """Provider 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过重试或降级恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class ProxyUnreachableError(CollaboratorError):
    """LiteLLM Proxy 不可达（连接失败、超时、DNS 解析失败等）

    此异常触发 FallbackManager 的降级逻辑。
    """

    def __init__(self, proxy_url: str, original_error: Exception) -> None:
        """
        Args:
            proxy_url: 尝试连接的 Proxy 地址
            original_error: 原始异常
        """
        super().__init__(
            f"LiteLLM Proxy 不可达: {proxy_url} -- {original_error}",
            recoverable=True,
        )
        self.proxy_url = proxy_url
        self.original_error = original_error


class EmbeddingShapeError(CollaboratorError):
    """embedding 返回的向量数量与输入文本数量不一致"""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"embedding 向量数量不匹配: 期望 {expected}，实际 {actual}",
            recoverable=False,
        )
        self.expected = expected
        self.actual = actual
