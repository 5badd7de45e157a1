"""Provider 包测试 fixtures"""

import pytest
from appkit.provider.demo_adapter import DemoProviderAdapter


@pytest.fixture
def sample_messages() -> list[dict[str, str]]:
    """标准 messages 格式测试数据"""
    return [
        {"role": "system", "content": "You are coach. Write for volunteers. Follow constraints strictly."},
        {"role": "user", "content": "Goal: summarize"},
        {"role": "user", "content": "Inputs:\n- X: Y"},
    ]


@pytest.fixture
def demo_adapter() -> DemoProviderAdapter:
    """无延迟的 demo 适配器"""
    return DemoProviderAdapter(chat_delay_s=0, embed_delay_s=0)
