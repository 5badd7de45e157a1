"""Lexical Retriever -- 基于 token 集合 Jaccard 相似度的内存检索

流程：
1. add_document: 按空行切分 passages -> 调用 embedding collaborator -> 追加 Document
2. search: query 分词 -> 对每个 passage 计算 Jaccard -> 稳定排序 -> 取前 k 条

暴力扫描 O(passages × tokens)，仅适用于 demo 规模语料。
"""

import re
from collections.abc import Awaitable, Callable, Iterable

import structlog

from .models import Document, SearchHit

log = structlog.get_logger()

# 一个或多个连续空行
_PASSAGE_SPLIT_RE = re.compile(r"\n\n+")
# 非单词字符序列
_NON_WORD_RE = re.compile(r"\W+")

# embedding collaborator：每个文本返回一个向量
EmbedFn = Callable[[list[str]], Awaitable[list[list[float]]]]


def chunk(text: str) -> list[str]:
    """按一个或多个空行切分文本，trim 后丢弃空 passage"""
    return [part.strip() for part in _PASSAGE_SPLIT_RE.split(text) if part.strip()]


def tokenize(text: str) -> set[str]:
    """小写化后按非单词字符切分，返回 token 集合"""
    return {token for token in _NON_WORD_RE.split(text.lower()) if token}


def jaccard(a: set[str], b: set[str]) -> float:
    """Jaccard 系数 |A ∩ B| / max(1, |A ∪ B|)

    两个空集合得分为 0.0（分母下限为 1），而非完全匹配。
    """
    inter = len(a & b)
    return inter / max(1, len(a) + len(b) - inter)


class LexicalRetriever:
    """内存词法检索器

    语料按添加顺序保存，只追加不删除；
    clear() 仅供外部重置（CLI reset）使用。
    """

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents: list[Document] = list(documents)

    @property
    def documents(self) -> tuple[Document, ...]:
        """语料只读视图"""
        return tuple(self._documents)

    @property
    def passage_count(self) -> int:
        return sum(len(doc.parts) for doc in self._documents)

    async def build_document(self, name: str, text: str, embed: EmbedFn) -> Document:
        """切分文本并调用 embedding，生成 Document 但不追加到语料

        embedding 调用失败时异常直接上抛。
        """
        parts = chunk(text)
        vectors = await embed(parts)
        return Document(
            name=name,
            parts=tuple(parts),
            vectors=tuple(tuple(v) for v in vectors),
        )

    def append(self, document: Document) -> None:
        """追加已生成的 Document"""
        self._documents.append(document)
        log.info(
            "document_added",
            name=document.name,
            passage_count=len(document.parts),
            corpus_size=len(self._documents),
        )

    async def add_document(self, name: str, text: str, embed: EmbedFn) -> Document:
        """切分文本并追加到语料

        空文本产生 0 个 passage 的文档，永远不会出现在检索结果中。
        embedding 调用失败时异常直接上抛，语料保持不变。

        Args:
            name: 文档名称
            text: 原始文本
            embed: embedding collaborator

        Returns:
            新追加的 Document
        """
        document = await self.build_document(name, text, embed)
        self.append(document)
        return document

    def search(self, query: str, k: int) -> list[SearchHit]:
        """返回 Jaccard 得分最高的前 k 个 passage

        排序稳定：同分时保持语料顺序（先文档、后 passage 序号）。
        k <= 0 或语料为空时返回空列表。
        """
        if not self._documents or k <= 0:
            return []

        q_tokens = tokenize(query)
        scored: list[SearchHit] = []
        for doc in self._documents:
            for idx, passage in enumerate(doc.parts):
                scored.append(
                    SearchHit(
                        doc=doc.name,
                        idx=idx,
                        text=passage,
                        score=jaccard(q_tokens, tokenize(passage)),
                    )
                )

        # sorted() 为稳定排序
        ranked = sorted(scored, key=lambda hit: hit.score, reverse=True)[:k]
        log.debug(
            "search_completed",
            query_tokens=len(q_tokens),
            scanned=len(scored),
            returned=len(ranked),
        )
        return ranked

    def clear(self) -> None:
        """清空语料"""
        self._documents.clear()
