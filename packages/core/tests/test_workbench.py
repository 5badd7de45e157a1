"""Workbench CSV 解析测试

测试内容：
1. 表头嗅探（time / pH / temp）
2. 缺失列与非法数值使用合成值
3. 无法解析时退回 demo 序列
"""

import math

import pytest
from appkit.core.workbench import DEMO_SERIES_LENGTH, demo_series, parse_series_csv


class TestDemoSeries:
    def test_length_and_shape(self):
        series = demo_series()
        assert len(series) == DEMO_SERIES_LENGTH
        assert series[0].t == "0"
        assert series[0].ph == pytest.approx(7.2)
        assert series[0].temp_c == pytest.approx(18.3)

    def test_deterministic(self):
        assert demo_series() == demo_series()


class TestParseSeriesCsv:
    def test_well_formed(self):
        result = parse_series_csv("time,pH,tempC\n10:00,7.1,15.2\n11:00,7.3,15.8\n")
        assert result.status == "Loaded 2 rows"
        assert [p.t for p in result.series] == ["10:00", "11:00"]
        assert [p.ph for p in result.series] == [7.1, 7.3]
        assert [p.temp_c for p in result.series] == [15.2, 15.8]

    def test_header_match_is_case_insensitive(self):
        result = parse_series_csv("Date,PH,Celsius\n2024-10-01,6.9,12\n")
        assert result.series[0].t == "2024-10-01"
        assert result.series[0].ph == 6.9
        assert result.series[0].temp_c == 12.0

    def test_missing_columns_use_synthetic_values(self):
        result = parse_series_csv("name\nA\nB\n")
        assert result.status == "Loaded 2 rows"
        second = result.series[1]
        assert second.t == "1"
        assert second.ph == pytest.approx(7 + math.sin(1 / 3) * 0.2)
        assert second.temp_c == pytest.approx(16 + math.cos(1 / 4) * 2.0)

    def test_non_numeric_cells_use_synthetic_values(self):
        result = parse_series_csv("time,ph,temp\n0,n/a,\n")
        point = result.series[0]
        assert point.ph == pytest.approx(7.0)
        assert point.temp_c == pytest.approx(18.0)

    def test_short_rows(self):
        result = parse_series_csv("time,ph,temp\n5\n")
        assert result.series[0].t == "5"

    def test_header_only(self):
        result = parse_series_csv("time,ph,temp\n")
        assert result.series == []
        assert result.status == "Loaded 0 rows"

    @pytest.mark.parametrize("text", ["", "   \n  ", ",,\n1,2,3"])
    def test_unparseable_falls_back_to_demo(self, text):
        result = parse_series_csv(text)
        assert result.status == "Could not parse CSV"
        assert result.series == demo_series()
