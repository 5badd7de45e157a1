"""TaskSpec 路由

GET    /api/spec                    当前 TaskSpec
PUT    /api/spec                    整体替换
PATCH  /api/spec                    部分更新顶层字段
POST   /api/spec/inputs             追加 input
DELETE /api/spec/inputs/{index}     删除 input
POST   /api/spec/examples           追加 few-shot 示例
PUT    /api/spec/examples/{index}   修改 few-shot 示例
GET    /api/spec/export             下载 TaskSpec.json
"""

from appkit.core.config import EXPORT_FILENAME
from appkit.core.models import FewShotExample, Formality, InputField, Length, TaskSpec
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from starlette.responses import Response

from ..deps import get_controller
from ..errors import not_found

router = APIRouter()


class SpecPatch(BaseModel):
    """PATCH 请求体 -- 仅包含需要修改的字段"""

    model_config = ConfigDict(extra="forbid")

    role: str | None = None
    goal: str | None = None
    audience: str | None = None
    constraints: list[str] | None = None
    inputs: list[InputField] | None = None
    examples: list[FewShotExample] | None = None
    acceptance: list[str] | None = None
    style: list[str] | None = None
    citations: bool | None = None
    formality: Formality | None = None
    length: Length | None = None


class InputRequest(BaseModel):
    """追加 input 请求体，label/value 不可为空白"""

    label: str = Field(description="输入标签")
    value: str = Field(description="输入值")

    @field_validator("label", "value")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ExampleRequest(BaseModel):
    """few-shot 示例请求体，缺省字段保持原值（新建时使用占位文本）"""

    input: str | None = None
    output: str | None = None


@router.get("/api/spec", response_model=TaskSpec)
async def get_spec(controller=Depends(get_controller)):
    """当前 TaskSpec"""
    return controller.get_spec()


@router.put("/api/spec", response_model=TaskSpec)
async def replace_spec(body: TaskSpec, controller=Depends(get_controller)):
    """整体替换 TaskSpec，缺省列表字段视为空"""
    return await controller.replace_spec(body)


@router.patch("/api/spec", response_model=TaskSpec)
async def patch_spec(body: SpecPatch, controller=Depends(get_controller)):
    """部分更新 TaskSpec

    显式传 null 的列表字段视为清空、文本字段视为空串；
    citations / formality / length 传 null 返回 422。
    """
    changes = body.model_dump(exclude_unset=True)
    return await controller.patch_spec(changes)


@router.post("/api/spec/inputs", response_model=TaskSpec)
async def add_input(body: InputRequest, controller=Depends(get_controller)):
    return await controller.add_input(body.label, body.value)


@router.delete("/api/spec/inputs/{index}", response_model=TaskSpec)
async def remove_input(index: int, controller=Depends(get_controller)):
    try:
        return await controller.remove_input(index)
    except IndexError:
        return not_found("INPUT_NOT_FOUND", f"Input at index {index} does not exist")


@router.post("/api/spec/examples", response_model=TaskSpec)
async def add_example(
    body: ExampleRequest | None = None,
    controller=Depends(get_controller),
):
    body = body or ExampleRequest()
    return await controller.add_example(input=body.input, output=body.output)


@router.put("/api/spec/examples/{index}", response_model=TaskSpec)
async def edit_example(
    index: int,
    body: ExampleRequest,
    controller=Depends(get_controller),
):
    try:
        return await controller.edit_example(index, input=body.input, output=body.output)
    except IndexError:
        return not_found("EXAMPLE_NOT_FOUND", f"Example at index {index} does not exist")


@router.get("/api/spec/export")
async def export_spec(controller=Depends(get_controller)):
    """以附件形式下载 TaskSpec.json"""
    return Response(
        content=controller.get_spec().export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
