"""
テスト共通のフィクスチャ
"""

import json

import pytest

from finregx.core.models import AnalysisResult


def make_payload(overall_score=45, gaps=None):
    """LLMが返すJSONと同じ形の辞書を作る。"""
    if gaps is None:
        gaps = [
            {
                "gapId": "GAP-001",
                "category": "Capital",
                "rule": "QCB Article 1.2.1",
                "description": "Initial funding of QAR 500,000 is below the minimum.",
                "severity": "High",
                "recommendation": "Raise paid-up capital to QAR 1,000,000.",
                "expertId": "QDB_EXPERT_003",
            }
        ]
    return {
        "overallScore": overall_score,
        "categoryScores": {
            "AML": 40,
            "Governance": 55,
            "Capital": 20,
            "Data Residency": 70,
        },
        "gaps": gaps,
    }


def make_result(overall_score=45, gaps=None) -> AnalysisResult:
    return AnalysisResult.model_validate(make_payload(overall_score, gaps))


@pytest.fixture
def payload():
    return make_payload()


@pytest.fixture
def payload_json(payload):
    return json.dumps(payload)
