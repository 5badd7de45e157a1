"""枚举定义 -- 消息角色、正式程度、篇幅、界面 Tab 与 Persona

所有枚举均为 StrEnum，可直接 JSON 序列化并与前端字符串值互通。
"""

from enum import StrEnum


class Role(StrEnum):
    """消息角色"""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Formality(StrEnum):
    """输出正式程度"""

    PLAIN = "plain"
    PROFESSIONAL = "professional"
    SCHOLARLY = "scholarly"


class Length(StrEnum):
    """输出篇幅"""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Tab(StrEnum):
    """前端当前激活的 Tab"""

    INTAKE = "intake"
    COMPOSE = "compose"
    WORK = "work"
    RAG = "rag"
    ADMIN = "admin"


class Persona(StrEnum):
    """前端 Persona 切换"""

    CONSERVATION = "conservation"
    NONPROFIT = "nonprofit"
    TEEN = "teen"
