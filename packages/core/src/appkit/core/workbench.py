"""Workbench -- CSV 列嗅探 + 合成 fallback 序列

上传的 CSV 通过表头识别 time / pH / temp 列；
缺失或无法解析的数值用合成曲线补齐，整体解析失败时退回 demo 序列。
此模块不抛异常。
"""

import csv
import io
import math
import re

import structlog

from .models import SeriesParseResult, SeriesPoint

log = structlog.get_logger()

DEMO_SERIES_LENGTH = 24

_TIME_HEADER_RE = re.compile(r"time|date|t", re.IGNORECASE)
_PH_HEADER_RE = re.compile(r"ph", re.IGNORECASE)
_TEMP_HEADER_RE = re.compile(r"temp|celsius|degc", re.IGNORECASE)


def demo_series() -> list[SeriesPoint]:
    """内置 demo 序列（24 个点）"""
    return [
        SeriesPoint(
            t=str(i),
            ph=7 + math.sin(i / 3) * 0.25 + (0.2 if i % 7 == 0 else 0),
            temp_c=16 + math.cos(i / 4) * 2.3,
        )
        for i in range(DEMO_SERIES_LENGTH)
    ]


def _synthetic_ph(i: int) -> float:
    return 7 + math.sin(i / 3) * 0.2


def _synthetic_temp(i: int) -> float:
    return 16 + math.cos(i / 4) * 2.0


def _find_column(headers: list[str], pattern: re.Pattern[str]) -> int:
    """返回第一个匹配的列序号，未找到返回 -1"""
    for i, header in enumerate(headers):
        if pattern.search(header):
            return i
    return -1


def _cell(row: list[str], col: int) -> str:
    if col < 0 or col >= len(row):
        return ""
    return row[col].strip()


def _to_float(raw: str) -> float | None:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_series_csv(text: str) -> SeriesParseResult:
    """解析 CSV 文本为时间序列

    Args:
        text: CSV 原文，首行为表头

    Returns:
        SeriesParseResult，status 为 "Loaded {n} rows" 或 "Could not parse CSV"
    """
    try:
        rows = list(csv.reader(io.StringIO(text.strip())))
        if not rows or not any(cell.strip() for cell in rows[0]):
            raise ValueError("missing header row")

        headers = [h.strip() for h in rows[0]]
        t_col = _find_column(headers, _TIME_HEADER_RE)
        ph_col = _find_column(headers, _PH_HEADER_RE)
        temp_col = _find_column(headers, _TEMP_HEADER_RE)

        series: list[SeriesPoint] = []
        for i, row in enumerate(rows[1:]):
            ph = _to_float(_cell(row, ph_col))
            temp_c = _to_float(_cell(row, temp_col))
            series.append(
                SeriesPoint(
                    t=_cell(row, t_col) or str(i),
                    ph=ph if ph is not None else _synthetic_ph(i),
                    temp_c=temp_c if temp_c is not None else _synthetic_temp(i),
                )
            )
    except (csv.Error, ValueError) as e:
        log.warning("csv_parse_failed", error=str(e))
        return SeriesParseResult(series=demo_series(), status="Could not parse CSV")

    log.info(
        "csv_parsed",
        rows=len(series),
        time_column=t_col,
        ph_column=ph_col,
        temp_column=temp_col,
    )
    return SeriesParseResult(series=series, status=f"Loaded {len(series)} rows")
