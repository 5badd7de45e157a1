"""RAG 路由

GET  /api/rag/documents  语料摘要
POST /api/rag/documents  添加文档（切分 + embedding）
GET  /api/rag/search     词法检索 top-k
"""

from appkit.core.config import get_search_k
from appkit.core.models import SearchHit
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, field_validator

from ..deps import get_controller

router = APIRouter()


class DocumentRequest(BaseModel):
    """添加文档请求体，name/text 不可为空"""

    name: str = Field(description="文档名称")
    text: str = Field(description="原始文本")

    @field_validator("name", "text")
    @classmethod
    def _not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v


class DocumentSummary(BaseModel):
    """语料条目摘要"""

    name: str
    passage_count: int


class DocumentListResponse(BaseModel):
    documents: list[DocumentSummary]
    passage_count: int


@router.get("/api/rag/documents", response_model=DocumentListResponse)
async def list_documents(controller=Depends(get_controller)):
    documents = controller.list_documents()
    return DocumentListResponse(
        documents=[
            DocumentSummary(name=doc.name, passage_count=len(doc.parts)) for doc in documents
        ],
        passage_count=sum(len(doc.parts) for doc in documents),
    )


@router.post("/api/rag/documents", response_model=DocumentSummary, status_code=201)
async def add_document(body: DocumentRequest, controller=Depends(get_controller)):
    """添加文档

    embedding collaborator 失败时返回 502，语料不变。
    """
    document = await controller.add_document(body.name, body.text)
    return DocumentSummary(name=document.name, passage_count=len(document.parts))


@router.get("/api/rag/search", response_model=list[SearchHit])
async def search(
    q: str = Query(description="检索问题"),
    k: int | None = Query(default=None, ge=0, description="返回条数，默认 APPKIT_SEARCH_K"),
    controller=Depends(get_controller),
):
    effective_k = get_search_k() if k is None else k
    return controller.search(q, effective_k)
