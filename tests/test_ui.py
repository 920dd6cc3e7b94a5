"""
ブラウザUI（Streamlit）のテスト
"""

from pathlib import Path
from unittest import mock

import pytest
from conftest import make_result
from streamlit.testing.v1 import AppTest

from finregx.core.analyzer import ReadinessAnalyzer
from finregx.core.samples import SAMPLE_POLICY_DOCS

APP_PATH = Path(__file__).resolve().parent.parent / "finregx" / "ui" / "app.py"


def click(at: AppTest, label: str) -> AppTest:
    """ラベルでボタンを探してクリックし、再実行する"""
    button = next(b for b in at.button if b.label == label)
    return button.click().run()


@pytest.fixture
def app():
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception
    return at


def test_initial_input_form(app):
    labels = [b.label for b in app.button]
    assert "📋 Load Mock Data" in labels
    assert "Analyze Readiness" in labels
    assert len(app.text_area) == 3


def test_load_mock_data(app):
    at = click(app, "📋 Load Mock Data")

    assert at.text_area(key="finregx_text_policyDocs").value == SAMPLE_POLICY_DOCS


def test_analyze_with_empty_documents(app):
    """書類が空の場合はエラー画面になり、Try Again で入力画面に戻ることをテスト"""
    with mock.patch.object(ReadinessAnalyzer, "analyze") as mock_analyze:
        at = click(app, "Analyze Readiness")

    mock_analyze.assert_not_called()
    assert "Please provide content for at least one document" in at.error[0].value

    at = click(at, "Try Again")
    assert not at.error
    assert "Analyze Readiness" in [b.label for b in at.button]


def test_expert_review_flow(app):
    """総合スコア45で専門家レビューを促し、1回のクリックでフラグ済みになることをテスト"""
    at = click(app, "📋 Load Mock Data")
    with mock.patch.object(ReadinessAnalyzer, "analyze", return_value=make_result(45)):
        at = click(at, "Analyze Readiness")

    assert not at.exception
    assert "Expert Review Recommended" in at.warning[0].value
    assert "Compliance Gap Analysis" in [h.value for h in at.subheader]

    at = click(at, "Flag for Review")

    assert not at.warning
    assert "successfully flagged" in at.success[0].value


def test_no_gaps_panel(app):
    at = click(app, "📋 Load Mock Data")
    with mock.patch.object(ReadinessAnalyzer, "analyze", return_value=make_result(95, [])):
        at = click(at, "Analyze Readiness")

    assert not at.warning
    assert "No Compliance Gaps Found!" in at.success[0].value

    at = click(at, "Start New Analysis")
    assert "Analyze Readiness" in [b.label for b in at.button]
    # 入力済みの書類は残る
    assert at.text_area(key="finregx_text_policyDocs").value == SAMPLE_POLICY_DOCS
