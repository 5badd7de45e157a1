"""UiState -- 前端 Tab 与 Persona"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import Persona, Tab


class UiState(BaseModel):
    """界面状态"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tab: Tab = Field(default=Tab.INTAKE, description="当前 Tab")
    persona: Persona = Field(default=Persona.CONSERVATION, description="当前 Persona")
