"""Message Domain Model -- 角色标记的对话消息

仅由 Prompt Composer 产出，创建后不可变。
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import Role


class Message(BaseModel):
    """角色标记消息"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Role = Field(description="消息角色：system / user / assistant")
    content: str = Field(description="消息文本")

    def as_provider_dict(self) -> dict[str, str]:
        """转换为 provider 层使用的 {"role", "content"} 格式"""
        return {"role": self.role.value, "content": self.content}
