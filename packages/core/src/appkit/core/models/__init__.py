"""AppKit Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .document import Document, SearchHit
from .enums import Formality, Length, Persona, Role, Tab
from .message import Message
from .series import SeriesParseResult, SeriesPoint
from .task_spec import DEFAULT_TASK_SPEC, FewShotExample, InputField, TaskSpec
from .ui import UiState

__all__ = [
    # 枚举
    "Role",
    "Formality",
    "Length",
    "Tab",
    "Persona",
    # TaskSpec
    "TaskSpec",
    "InputField",
    "FewShotExample",
    "DEFAULT_TASK_SPEC",
    # Message
    "Message",
    # 检索
    "Document",
    "SearchHit",
    # Workbench
    "SeriesPoint",
    "SeriesParseResult",
    # UI
    "UiState",
]
