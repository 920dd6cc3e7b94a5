"""
条文検索モジュール。
静的な条文リストからインメモリのベクトルストアを構築し、
クエリに類似した条文を上位k件返す。

現在の分析フローでは全条文をプロンプトに埋め込んでおり、このモジュールは使用していない。
"""

from typing import List, Optional

import google.generativeai as genai
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore

from ..utils.config import config
from ..utils.logging import logger
from .models import Rule
from .rules import QCB_RULES


class GeminiEmbeddings(Embeddings):
    """google-generativeai の embed_content を LangChain の Embeddings として使う"""

    def __init__(self, model_name: Optional[str] = None):
        genai.configure(api_key=config.get_gemini_api_key())
        self.model_name = model_name or config.get(
            "embeddings.model_name", "models/text-embedding-004"
        )

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        response = genai.embed_content(
            model=self.model_name, content=texts, task_type="retrieval_document"
        )
        return response["embedding"]

    def embed_query(self, text: str) -> List[float]:
        response = genai.embed_content(
            model=self.model_name, content=text, task_type="retrieval_query"
        )
        return response["embedding"]


class RuleRetriever:
    """条文検索クラス"""

    def __init__(
        self,
        rules: Optional[List[Rule]] = None,
        embeddings: Optional[Embeddings] = None,
        k: Optional[int] = None,
    ):
        """
        初期化。ベクトルストアは最初の検索時に一度だけ構築する。

        Args:
            rules: 検索対象の条文。指定されない場合はQCB_RULES全件。
            embeddings: 埋め込みモデル。指定されない場合はGeminiEmbeddings。
            k: 返す件数の既定値
        """
        self.logger = logger
        self.rules = QCB_RULES if rules is None else rules
        self._embeddings = embeddings
        self.k = k or config.get("embeddings.top_k", 4)
        self._vector_store: Optional[InMemoryVectorStore] = None

    @property
    def embeddings(self) -> Embeddings:
        if self._embeddings is None:
            self._embeddings = GeminiEmbeddings()
        return self._embeddings

    def _get_vector_store(self) -> InMemoryVectorStore:
        if self._vector_store is None:
            self.logger.info(f"ベクトルストアを構築します: 条文 {len(self.rules)}件")
            documents = [
                Document(
                    page_content=rule.text,
                    metadata={"ruleId": rule.rule_id, "category": rule.category.value},
                )
                for rule in self.rules
            ]
            self._vector_store = InMemoryVectorStore.from_documents(
                documents, self.embeddings
            )
            self.logger.info("ベクトルストアの構築が完了しました")
        return self._vector_store

    def retrieve(self, query: str, k: Optional[int] = None) -> List[Document]:
        """
        クエリに類似した条文を返す。
        失敗した場合はエラーをログに記録し、空のリストを返す。

        Args:
            query: 検索クエリ（通常は連結した書類本文）
            k: 返す件数。指定されない場合は初期化時の値。

        Returns:
            類似度の高い順の条文Documentのリスト
        """
        try:
            store = self._get_vector_store()
            documents = store.similarity_search(query, k=k or self.k)
        except Exception as e:
            self.logger.error(f"条文の類似検索中にエラーが発生しました: {str(e)}")
            return []

        self.logger.debug(
            f"類似条文: {[doc.metadata.get('ruleId') for doc in documents]}"
        )
        return documents

    def retrieve_rules(self, query: str, k: Optional[int] = None) -> List[Rule]:
        """retrieve の結果を Rule に戻して返す。"""
        by_id = {rule.rule_id: rule for rule in self.rules}
        return [
            by_id[doc.metadata["ruleId"]]
            for doc in self.retrieve(query, k)
            if doc.metadata.get("ruleId") in by_id
        ]
