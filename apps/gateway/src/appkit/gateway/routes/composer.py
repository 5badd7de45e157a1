"""Composer 路由

GET  /api/compose  当前 TaskSpec 组装后的 messages
POST /api/run      组装并调用 chat collaborator
"""

from appkit.core.models import Message
from appkit.provider import ChatResult
from fastapi import APIRouter, Depends

from ..deps import get_controller

router = APIRouter()


@router.get("/api/compose", response_model=list[Message])
async def get_messages(controller=Depends(get_controller)):
    """组装结果（无副作用）"""
    return controller.compose()


@router.post("/api/run", response_model=ChatResult)
async def run(controller=Depends(get_controller)):
    """使用当前 messages 调用 provider

    collaborator 失败时返回 502 COLLABORATOR_ERROR。
    """
    return await controller.run()
