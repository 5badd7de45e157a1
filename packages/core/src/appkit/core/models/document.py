"""检索语料模型 -- Document + SearchHit

Document.vectors 为每个 passage 的占位 embedding，词法打分不使用，
仅为后续切换到向量检索预留。
"""

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """检索语料条目"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="文档名称")
    parts: tuple[str, ...] = Field(default=(), description="按空行切分后的 passages")
    vectors: tuple[tuple[float, ...], ...] = Field(
        default=(),
        description="每个 passage 的占位向量",
    )


class SearchHit(BaseModel):
    """检索命中"""

    model_config = ConfigDict(frozen=True)

    doc: str = Field(description="文档名称")
    idx: int = Field(ge=0, description="passage 在文档内的序号")
    text: str = Field(description="passage 文本")
    score: float = Field(ge=0.0, le=1.0, description="Jaccard 相似度")
