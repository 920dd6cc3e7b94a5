"""
画面状態（AssessmentSession）のテスト
"""

import unittest
from unittest import mock

from conftest import make_result

from finregx.core.exceptions import DocumentParseError, InvalidResponseError
from finregx.core.models import DocumentType
from finregx.core.samples import SAMPLE_BUSINESS_PLAN
from finregx.ui.session import (
    LOADING_MESSAGES,
    AssessmentSession,
    SessionView,
    loading_message,
)


class TestAssessmentSession(unittest.TestCase):
    """AssessmentSessionのテスト"""

    def setUp(self):
        self.analyzer = mock.MagicMock()
        self.analyzer_factory = mock.MagicMock(return_value=self.analyzer)
        self.session = AssessmentSession(analyzer_factory=self.analyzer_factory)

    def test_initial_state(self):
        self.assertEqual(self.session.view, SessionView.INPUT)
        self.assertTrue(self.session.documents.is_empty())
        self.assertFalse(any(self.session.parsing.values()))

    def test_analysis_blocked_when_documents_empty(self):
        """3つの書類がすべて空の場合は分析が実行されないことをテスト"""
        self.session.set_text(DocumentType.BUSINESS_PLAN, "   ")

        result = self.session.analyze()

        self.assertIsNone(result)
        self.analyzer_factory.assert_not_called()
        self.assertEqual(self.session.view, SessionView.ERROR)
        self.assertEqual(
            self.session.error,
            "Analysis Failed: Please provide content for at least one document to analyze.",
        )

    def test_analyze_success(self):
        self.analyzer.analyze.return_value = make_result(72)
        self.session.load_sample_data()

        result = self.session.analyze()

        self.assertEqual(result.overall_score, 72)
        self.assertEqual(self.session.view, SessionView.RESULT)
        self.assertFalse(self.session.is_loading)
        self.assertFalse(self.session.expert_review_recommended)
        self.analyzer_factory.assert_called_once_with(llm_name=None)
        self.analyzer.analyze.assert_called_once_with(self.session.documents)

    def test_expert_review_flagged_after_one_click(self):
        """総合スコア45の場合は専門家レビューを促し、1回のクリックでフラグ済みになることをテスト"""
        self.analyzer.analyze.return_value = make_result(45)
        self.session.load_sample_data()
        self.session.analyze()

        self.assertTrue(self.session.expert_review_recommended)
        self.assertFalse(self.session.review_flagged)

        self.session.flag_for_review()

        self.assertTrue(self.session.review_flagged)

    def test_flag_ignored_without_recommendation(self):
        self.analyzer.analyze.return_value = make_result(90)
        self.session.load_sample_data()
        self.session.analyze()

        self.session.flag_for_review()

        self.assertFalse(self.session.review_flagged)

    def test_no_gaps(self):
        """ギャップが0件の場合は has_no_gaps がTrueになることをテスト"""
        self.analyzer.analyze.return_value = make_result(95, [])
        self.session.load_sample_data()
        self.session.analyze()

        self.assertTrue(self.session.has_no_gaps)

    def test_unsupported_upload_keeps_text(self):
        """未対応形式のアップロードはアラートを出し、既存のテキストを変更しないことをテスト"""
        self.session.set_text(DocumentType.LEGAL_DOCS, "Existing legal text")

        success = self.session.upload(
            DocumentType.LEGAL_DOCS, "notes.txt", b"plain text", "text/plain"
        )

        self.assertFalse(success)
        self.assertEqual(
            self.session.alert,
            "Failed to parse file: Unsupported file type. Please upload a PDF or DOCX file.",
        )
        self.assertEqual(
            self.session.documents.get(DocumentType.LEGAL_DOCS), "Existing legal text"
        )
        self.assertFalse(self.session.parsing[DocumentType.LEGAL_DOCS])

    @mock.patch("finregx.ui.session.extract_text")
    def test_upload_parse_error(self, mock_extract):
        mock_extract.side_effect = DocumentParseError("broken xref table")
        self.session.set_text(DocumentType.POLICY_DOCS, "Old policy")

        success = self.session.upload(DocumentType.POLICY_DOCS, "policy.pdf", b"%PDF")

        self.assertFalse(success)
        self.assertEqual(self.session.alert, "Failed to parse file: broken xref table")
        self.assertEqual(self.session.documents.get(DocumentType.POLICY_DOCS), "Old policy")
        self.assertFalse(self.session.parsing[DocumentType.POLICY_DOCS])

    @mock.patch("finregx.ui.session.extract_text")
    def test_upload_replaces_text(self, mock_extract):
        mock_extract.return_value = "  Extracted policy  \n"
        self.session.alert = "previous alert"

        success = self.session.upload(
            DocumentType.POLICY_DOCS, "policy.pdf", b"%PDF", "application/pdf"
        )

        self.assertTrue(success)
        self.assertIsNone(self.session.alert)
        self.assertEqual(
            self.session.documents.get(DocumentType.POLICY_DOCS), "Extracted policy"
        )
        mock_extract.assert_called_once_with("policy.pdf", b"%PDF", "application/pdf")

    def test_analysis_failure(self):
        self.analyzer.analyze.side_effect = InvalidResponseError("bad schema")
        self.session.load_sample_data()

        self.session.analyze()

        self.assertEqual(self.session.view, SessionView.ERROR)
        self.assertEqual(self.session.error, "Analysis Failed: bad schema")
        self.assertIsNone(self.session.result)
        self.assertFalse(self.session.is_loading)

    def test_reset_after_error(self):
        """エラー後のリセットでエラー、読み込み中、結果の状態がクリアされることをテスト"""
        self.analyzer.analyze.side_effect = RuntimeError("network down")
        self.session.load_sample_data()
        self.session.analyze()
        self.session.is_loading = True

        self.session.reset()

        self.assertIsNone(self.session.error)
        self.assertFalse(self.session.is_loading)
        self.assertIsNone(self.session.result)
        self.assertEqual(self.session.view, SessionView.INPUT)
        # 入力済みの書類は残る
        self.assertEqual(
            self.session.documents.get(DocumentType.BUSINESS_PLAN), SAMPLE_BUSINESS_PLAN
        )

    def test_reanalyze_clears_previous_result(self):
        self.analyzer.analyze.return_value = make_result(45)
        self.session.load_sample_data()
        self.session.analyze()
        self.session.flag_for_review()

        self.analyzer.analyze.side_effect = RuntimeError("timeout")
        self.session.analyze()

        self.assertIsNone(self.session.result)
        self.assertFalse(self.session.review_flagged)
        self.assertEqual(self.session.error, "Analysis Failed: timeout")


class TestLoadingMessage(unittest.TestCase):
    """読み込み中メッセージのテスト"""

    def test_rotation(self):
        self.assertEqual(len(LOADING_MESSAGES), 5)
        self.assertEqual(loading_message(0), LOADING_MESSAGES[0])
        self.assertEqual(loading_message(2.9), LOADING_MESSAGES[0])
        self.assertEqual(loading_message(3), LOADING_MESSAGES[1])
        self.assertEqual(loading_message(15), LOADING_MESSAGES[0])


if __name__ == "__main__":
    unittest.main()
