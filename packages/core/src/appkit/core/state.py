"""AppState -- 应用顶层状态容器

持有 TaskSpec、检索语料与界面状态，由 gateway 的 AppController 独占。
所有修改通过显式 mutator 进行；持久化由 StateRepository 显式 save/load，
不在 mutator 内部产生副作用。
"""

from typing import Any

from .composer import compose
from .models import (
    DEFAULT_TASK_SPEC,
    FewShotExample,
    InputField,
    Message,
    Persona,
    Tab,
    TaskSpec,
    UiState,
)
from .retriever import LexicalRetriever


class AppState:
    """单写者、单读者的进程内状态容器"""

    def __init__(
        self,
        spec: TaskSpec = DEFAULT_TASK_SPEC,
        retriever: LexicalRetriever | None = None,
        ui: UiState | None = None,
    ) -> None:
        self._spec = spec
        self._retriever = retriever or LexicalRetriever()
        self._ui = ui or UiState()

    # ---- accessors ----

    @property
    def spec(self) -> TaskSpec:
        return self._spec

    @property
    def retriever(self) -> LexicalRetriever:
        return self._retriever

    @property
    def ui(self) -> UiState:
        return self._ui

    @property
    def messages(self) -> list[Message]:
        """当前 spec 的组装结果（每次读取重新 compose）"""
        return compose(self._spec)

    def fork(self) -> "AppState":
        """返回草稿副本：在副本上修改并保存成功后，再用 replace_* 写回本实例"""
        return AppState(
            spec=self._spec,
            retriever=LexicalRetriever(self._retriever.documents),
            ui=self._ui,
        )

    # ---- TaskSpec mutators ----

    def replace_spec(self, spec: TaskSpec) -> TaskSpec:
        self._spec = spec
        return spec

    def update_spec(self, **changes: Any) -> TaskSpec:
        """部分更新 spec 顶层字段

        Raises:
            pydantic.ValidationError: 字段未知或取值非法
        """
        self._spec = self._spec.with_updates(**changes)
        return self._spec

    def add_input(self, label: str, value: str) -> TaskSpec:
        item = InputField(label=label, value=value)
        return self.update_spec(inputs=[*self._spec.inputs, item])

    def remove_input(self, index: int) -> TaskSpec:
        """按序号删除 input

        Raises:
            IndexError: 序号越界
        """
        inputs = list(self._spec.inputs)
        if not 0 <= index < len(inputs):
            raise IndexError(f"input index {index} out of range")
        del inputs[index]
        return self.update_spec(inputs=inputs)

    def add_example(
        self,
        input: str = "Input example",
        output: str = "Expected output",
    ) -> TaskSpec:
        item = FewShotExample(input=input, output=output)
        return self.update_spec(examples=[*self._spec.examples, item])

    def edit_example(
        self,
        index: int,
        input: str | None = None,
        output: str | None = None,
    ) -> TaskSpec:
        """修改指定 example 的 input/output（None 表示不修改）

        Raises:
            IndexError: 序号越界
        """
        examples = list(self._spec.examples)
        if not 0 <= index < len(examples):
            raise IndexError(f"example index {index} out of range")
        current = examples[index]
        examples[index] = FewShotExample(
            input=current.input if input is None else input,
            output=current.output if output is None else output,
        )
        return self.update_spec(examples=examples)

    # ---- UI mutators ----

    def replace_ui(self, ui: UiState) -> UiState:
        self._ui = ui
        return ui

    def set_tab(self, tab: Tab) -> UiState:
        self._ui = self._ui.model_copy(update={"tab": Tab(tab)})
        return self._ui

    def set_persona(self, persona: Persona) -> UiState:
        self._ui = self._ui.model_copy(update={"persona": Persona(persona)})
        return self._ui
