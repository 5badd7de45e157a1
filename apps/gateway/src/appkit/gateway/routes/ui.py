"""界面状态路由 -- 当前 Tab 与 Persona"""

from appkit.core.models import Persona, Tab, UiState
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from ..deps import get_controller

router = APIRouter()


class UiUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tab: Tab | None = None
    persona: Persona | None = None


@router.get("/api/ui", response_model=UiState)
async def get_ui(controller=Depends(get_controller)):
    return controller.get_ui()


@router.put("/api/ui", response_model=UiState)
async def update_ui(body: UiUpdate, controller=Depends(get_controller)):
    return await controller.update_ui(tab=body.tab, persona=body.persona)
