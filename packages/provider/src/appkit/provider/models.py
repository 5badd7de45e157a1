"""数据模型 -- TokenUsage + ChatResult + EmbeddingResult

所有 provider（LiteLLM、Demo、Mock）统一返回这些类型。
"""

from pydantic import BaseModel, Field, computed_field


class TokenUsage(BaseModel):
    """Token 使用统计

    key 命名对齐 OpenAI/LiteLLM 行业标准：
    prompt_tokens / completion_tokens / total_tokens
    """

    prompt_tokens: int = Field(default=0, ge=0, description="输入 token 数")
    completion_tokens: int = Field(default=0, ge=0, description="输出 token 数")
    total_tokens: int = Field(default=0, ge=0, description="总 token 数")


class ChatResult(BaseModel):
    """chat collaborator 调用结果

    前端只消费 output + tokens，其余为路由与降级信息。
    """

    # 响应内容
    output: str = Field(description="LLM 响应文本内容")

    # 路由信息
    model_alias: str = Field(description="请求时使用的模型 alias")
    model_name: str = Field(default="", description="实际调用的模型名称")
    provider: str = Field(default="", description="实际 provider（如 openai / demo）")

    # 性能指标
    duration_ms: int = Field(default=0, ge=0, description="端到端耗时（毫秒）")

    # Token 使用
    token_usage: TokenUsage = Field(
        default_factory=TokenUsage,
        description="Token 使用详情",
    )

    # 降级信息
    is_fallback: bool = Field(default=False, description="是否为降级调用")
    fallback_reason: str = Field(default="", description="降级原因说明")

    @computed_field
    @property
    def tokens(self) -> int:
        """近似 token 总数"""
        return self.token_usage.total_tokens


class EmbeddingResult(BaseModel):
    """embedding collaborator 调用结果"""

    vectors: list[list[float]] = Field(default_factory=list, description="每个输入一个向量")
    model_alias: str = Field(description="请求时使用的模型 alias")
    model_name: str = Field(default="", description="实际调用的模型名称")
    provider: str = Field(default="", description="实际 provider")
    duration_ms: int = Field(default=0, ge=0, description="端到端耗时（毫秒）")
    is_fallback: bool = Field(default=False, description="是否为降级调用")
    fallback_reason: str = Field(default="", description="降级原因说明")
