"""依赖注入模块 -- 通过 FastAPI Depends 注入 AppController

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request

from .services.app_controller import AppController


def get_controller(request: Request) -> AppController:
    """从 app.state 获取 AppController 实例"""
    return request.app.state.controller
