"""Workbench 时间序列模型"""

from pydantic import BaseModel, ConfigDict, Field


class SeriesPoint(BaseModel):
    """单个时间点（pH + 水温）"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    t: str = Field(description="时间标签")
    ph: float = Field(alias="pH", description="pH 值")
    temp_c: float = Field(alias="tempC", description="水温（摄氏度）")


class SeriesParseResult(BaseModel):
    """CSV 解析结果"""

    series: list[SeriesPoint] = Field(default_factory=list)
    status: str = Field(default="", description="前端展示的状态文本")
