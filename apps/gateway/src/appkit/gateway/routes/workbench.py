"""Workbench 路由

GET  /api/workbench/series  demo 序列
POST /api/workbench/csv     解析 CSV 文本（失败时退回 demo 序列，不返回错误码）
"""

from appkit.core.models import SeriesParseResult
from appkit.core.workbench import demo_series, parse_series_csv
from fastapi import APIRouter
from pydantic import BaseModel, Field

router = APIRouter()


class CsvRequest(BaseModel):
    text: str = Field(description="CSV 原文，首行为表头")


@router.get("/api/workbench/series", response_model=SeriesParseResult)
async def get_demo_series():
    return SeriesParseResult(series=demo_series(), status="")


@router.post("/api/workbench/csv", response_model=SeriesParseResult)
async def upload_csv(body: CsvRequest):
    return parse_series_csv(body.text)
