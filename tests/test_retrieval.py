"""
条文検索モジュールのテスト
"""

import unittest
from typing import List
from unittest import mock

from langchain_core.embeddings import Embeddings

from finregx.core.models import Category
from finregx.core.retrieval import GeminiEmbeddings, RuleRetriever
from finregx.core.rules import QCB_RULES

KEYWORDS = ["capital", "aml", "data", "compliance officer"]


class KeywordEmbeddings(Embeddings):
    """キーワードの出現有無をベクトルにするテスト用の埋め込み"""

    def __init__(self):
        self.document_calls = 0

    def _embed(self, text: str) -> List[float]:
        lowered = text.lower()
        return [1.0 if keyword in lowered else 0.0 for keyword in KEYWORDS] + [0.01]

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.document_calls += 1
        return [self._embed(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        return self._embed(text)


class FailingEmbeddings(KeywordEmbeddings):
    def embed_query(self, text: str) -> List[float]:
        raise RuntimeError("embedding service unavailable")


class TestRuleRetriever(unittest.TestCase):
    """RuleRetrieverのテスト"""

    def test_retrieve_top_k(self):
        retriever = RuleRetriever(embeddings=KeywordEmbeddings(), k=2)

        documents = retriever.retrieve("Our paid-up capital is below the minimum capital.")

        self.assertEqual(len(documents), 2)
        for document in documents:
            self.assertEqual(document.metadata["category"], Category.CAPITAL.value)

    def test_retrieve_rules(self):
        retriever = RuleRetriever(embeddings=KeywordEmbeddings())

        rules = retriever.retrieve_rules("capital requirements", k=1)

        self.assertEqual(len(rules), 1)
        self.assertIn(rules[0], QCB_RULES)
        self.assertEqual(rules[0].category, Category.CAPITAL)

    def test_vector_store_built_once(self):
        embeddings = KeywordEmbeddings()
        retriever = RuleRetriever(embeddings=embeddings)

        retriever.retrieve("aml")
        retriever.retrieve("data")

        self.assertEqual(embeddings.document_calls, 1)

    def test_failure_returns_empty_list(self):
        """埋め込みに失敗した場合は空のリストを返すことをテスト"""
        retriever = RuleRetriever(embeddings=FailingEmbeddings())

        self.assertEqual(retriever.retrieve("aml"), [])
        self.assertEqual(retriever.retrieve_rules("aml"), [])


class TestGeminiEmbeddings(unittest.TestCase):
    """GeminiEmbeddingsのテスト"""

    @mock.patch("google.generativeai.embed_content")
    @mock.patch("google.generativeai.configure")
    @mock.patch("finregx.utils.config.config.get_gemini_api_key", return_value="key")
    def test_task_types(self, _mock_key, mock_configure, mock_embed):
        mock_embed.return_value = {"embedding": [0.1, 0.2]}
        embeddings = GeminiEmbeddings(model_name="models/test-embedding")

        self.assertEqual(embeddings.embed_query("q"), [0.1, 0.2])
        mock_embed.assert_called_with(
            model="models/test-embedding", content="q", task_type="retrieval_query"
        )

        embeddings.embed_documents(["a", "b"])
        mock_embed.assert_called_with(
            model="models/test-embedding",
            content=["a", "b"],
            task_type="retrieval_document",
        )
        mock_configure.assert_called_once_with(api_key="key")


if __name__ == "__main__":
    unittest.main()
